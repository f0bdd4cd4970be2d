"""Status vocabulary — labels and display tags for project status codes."""

from fastapi import APIRouter

from clientdesk.application.services.status_resolver import list_statuses, resolve_status

router = APIRouter(prefix="/api/statuses", tags=["Statuses"])


@router.get("")
def statuses():
    return list_statuses()


@router.get("/{code}")
def status(code: str):
    """Resolve any code; unknown codes come back verbatim with a neutral tag."""
    return resolve_status(code)
