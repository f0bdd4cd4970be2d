"""Client API routes — client detail, edit and project progress."""

from fastapi import APIRouter, Depends

from clientdesk.core.exceptions import NotFoundError, UpdateError
from clientdesk.interfaces.deps import get_client_detail_controller
from clientdesk.domain.schemas.client import ClientUpdate
from clientdesk.domain.schemas.client_detail import ClientDetailView, ViewState
from clientdesk.application.services.client_detail_controller import ClientDetailController

router = APIRouter(prefix="/api/clients", tags=["Clients"])


def _raise_if_failed(controller: ClientDetailController) -> None:
    if controller.state == ViewState.ERROR:
        raise NotFoundError(
            controller.error_message or "client not found",
            details={"client_id": controller.client_id},
            redirect_to=controller.redirect_to,
        )


@router.get("/{client_id}", response_model=ClientDetailView)
async def client_detail(
    client_id: str,
    controller: ClientDetailController = Depends(get_client_detail_controller),
):
    """Client record with profiles, folders, project stats and payment progress."""
    await controller.load(client_id)
    _raise_if_failed(controller)
    return controller.view()


@router.patch("/{client_id}", response_model=ClientDetailView)
async def update_client(
    client_id: str,
    payload: ClientUpdate,
    controller: ClientDetailController = Depends(get_client_detail_controller),
):
    """Overwrite the client's editable fields and return the reloaded detail."""
    await controller.load(client_id)
    _raise_if_failed(controller)

    if not await controller.submit_edit(payload):
        raise UpdateError("failed to update client", details={"client_id": client_id})

    _raise_if_failed(controller)
    return controller.view()


@router.get("/{client_id}/projects")
async def client_projects(
    client_id: str,
    controller: ClientDetailController = Depends(get_client_detail_controller),
):
    """Project cards with debt and installment progress."""
    await controller.load(client_id)
    _raise_if_failed(controller)

    view = controller.view()
    return {
        "stats": view.stats,
        "total_contract_value_display": view.total_contract_value_display,
        "items": view.projects,
        "notices": view.notices,
    }
