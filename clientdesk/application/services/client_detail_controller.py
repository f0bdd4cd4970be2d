"""Client detail controller. Loads a client with its projects and derives
the figures shown on the client detail page.

States: LOADING (initial, or a fetch in flight) -> LOADED (client and
projects populated) or ERROR (client missing; the caller is asked to
navigate back to the client list).

Only the latest ``load`` may write state. Every request carries a
generation number, and a response that arrives after a newer ``load`` has
started is discarded.
"""

from decimal import Decimal
from typing import Any, Dict, List, Optional

import structlog
from pydantic import BaseModel

from clientdesk.config import get_settings
from clientdesk.core.exceptions import NotFoundError, FetchError, UpdateError
from clientdesk.domain.repositories.client_repository import ClientRepository
from clientdesk.domain.schemas.client import ClientRead, ClientUpdate, EDITABLE_FIELDS
from clientdesk.domain.schemas.client_detail import ClientDetailView, Notice, ProjectCard, ViewState
from clientdesk.domain.schemas.project import ProjectRead, ProjectStats
from clientdesk.application.services.formatting import (
    client_info_fields,
    format_currency,
    format_date,
)
from clientdesk.application.services.payment_ledger import compute_debt, payment_progress
from clientdesk.application.services.project_aggregator import aggregate
from clientdesk.application.services.status_resolver import resolve_status
from clientdesk.core.money import to_decimal

logger = structlog.get_logger(__name__)

CLIENT_NOT_FOUND = "client not found"
PROJECTS_UNAVAILABLE = "failed to load client projects"
UPDATE_FAILED = "failed to update client"
UPDATE_SUCCEEDED = "client updated"
UPDATE_NOT_READY = "client is not loaded yet"


def editable_payload(data: Any) -> ClientUpdate:
    """Build an update payload holding only the editable client fields."""
    if isinstance(data, ClientUpdate):
        return data
    if isinstance(data, BaseModel):
        data = data.model_dump(exclude_unset=True)
    return ClientUpdate(**{k: v for k, v in dict(data).items() if k in EDITABLE_FIELDS})


class ClientDetailController:
    """Owns the in-memory view of one client and its projects."""

    def __init__(self, repo: ClientRepository):
        self.repo = repo
        self.settings = get_settings()

        self.state = ViewState.LOADING
        self.client_id: Optional[str] = None
        self.client: Optional[ClientRead] = None
        self.projects: List[ProjectRead] = []
        self.notices: List[Notice] = []
        self.error_message: Optional[str] = None
        self.redirect_to: Optional[str] = None

        self._generation = 0

    # -- derived data (recomputed from the current project list) --

    @property
    def stats(self) -> ProjectStats:
        return aggregate(self.projects)

    @property
    def debts(self) -> Dict[str, Decimal]:
        return {p.id: compute_debt(p) for p in self.projects}

    # -- transitions --

    async def load(self, client_id: Optional[str]) -> ViewState:
        """Fetch the client, then its projects. Supersedes any load in flight."""
        self._generation += 1
        generation = self._generation

        if client_id != self.client_id:
            self.client = None
            self.projects = []
        self.client_id = client_id
        self.state = ViewState.LOADING
        # Notices describe the latest attempt only
        self.notices = []
        self.error_message = None
        self.redirect_to = None

        if not client_id:
            return self.state

        log = logger.bind(client_id=client_id, generation=generation)

        try:
            client = await self.repo.fetch_client_with_relations(client_id)
        except (NotFoundError, FetchError) as exc:
            if self._is_stale(generation, log):
                return self.state
            log.warning("Client unavailable", error=exc.message)
            self.client = None
            self.projects = []
            self.state = ViewState.ERROR
            self.error_message = CLIENT_NOT_FOUND
            self.redirect_to = self.settings.CLIENT_LIST_PATH
            self._notify("error", CLIENT_NOT_FOUND)
            return self.state

        if self._is_stale(generation, log):
            return self.state
        self.client = client

        try:
            projects = await self.repo.fetch_projects_for_client(client_id)
        except FetchError as exc:
            if self._is_stale(generation, log):
                return self.state
            log.warning("Projects unavailable, showing client without them", error=exc.message)
            projects = []
            self._notify("warning", PROJECTS_UNAVAILABLE)

        if self._is_stale(generation, log):
            return self.state
        self.projects = list(projects)
        self.state = ViewState.LOADED
        log.info("Client loaded", projects=len(self.projects))
        return self.state

    async def refresh(self) -> ViewState:
        """Reload the current client, e.g. after its profile documents changed."""
        return await self.load(self.client_id)

    async def submit_edit(self, data: Any) -> bool:
        """Persist an edit, then reload everything from the store.

        A failed write keeps the current state and only adds an error notice.
        """
        if self.client is None or self.state != ViewState.LOADED:
            logger.warning("Edit submitted without a loaded client", client_id=self.client_id, state=self.state.value)
            self._notify("error", UPDATE_NOT_READY)
            return False

        client_id = self.client.id
        generation = self._generation
        payload = editable_payload(data)

        try:
            await self.repo.update_client(client_id, payload)
        except (UpdateError, NotFoundError) as exc:
            logger.warning("Client update rejected", client_id=client_id, error=exc.message)
            self._notify("error", UPDATE_FAILED)
            return False

        if generation == self._generation:
            await self.load(client_id)
        self._notify("success", UPDATE_SUCCEEDED)
        return True

    # -- presentation --

    def project_card(self, project: ProjectRead) -> ProjectCard:
        contract_value = to_decimal(project.contract_value)
        return ProjectCard(
            id=project.id,
            name=project.name,
            status=resolve_status(project.status),
            start_date=project.start_date,
            end_date=project.end_date,
            start_date_display=format_date(project.start_date),
            end_date_display=format_date(project.end_date),
            contract_value=contract_value,
            contract_value_display=format_currency(contract_value),
            debt_display=format_currency(compute_debt(project)),
            progress=payment_progress(project),
        )

    def view(self) -> ClientDetailView:
        stats = self.stats
        cards = [self.project_card(p) for p in self.projects]
        return ClientDetailView(
            state=self.state,
            client_id=self.client_id,
            client=self.client,
            info=client_info_fields(self.client) if self.client else [],
            stats=stats,
            total_contract_value_display=format_currency(stats.total_contract_value),
            projects=cards,
            recent_projects=cards[: self.settings.RECENT_PROJECTS_LIMIT],
            has_projects=bool(cards),
            profile_count=len(self.client.profiles) if self.client else 0,
            notices=list(self.notices),
            error_message=self.error_message,
            redirect_to=self.redirect_to,
        )

    # -- helpers --

    def _is_stale(self, generation: int, log) -> bool:
        if generation != self._generation:
            log.info("Discarding response for superseded load", current=self._generation)
            return True
        return False

    def _notify(self, level: str, message: str) -> None:
        self.notices.append(Notice(level=level, message=message))
        logger.info("Notice raised", notice_level=level, notice=message, client_id=self.client_id)
