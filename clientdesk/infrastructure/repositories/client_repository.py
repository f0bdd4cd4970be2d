"""
SQLAlchemy Implementation of Client Repository.
"""

from typing import List

import structlog
from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from clientdesk.core.exceptions import NotFoundError, FetchError, UpdateError
from clientdesk.domain.models.client import Client
from clientdesk.domain.models.profile import Profile, ProfileFolder  # noqa: F401  (registers relations)
from clientdesk.domain.models.project import Project
from clientdesk.domain.repositories.client_repository import ClientRepository
from clientdesk.domain.schemas.client import ClientRead, ClientUpdate
from clientdesk.domain.schemas.project import ProjectRead
from clientdesk.infrastructure.mappers.client_mapper import client_to_row, row_to_client_read
from clientdesk.infrastructure.repositories.base_repository import SQLAlchemyRepository

logger = structlog.get_logger(__name__)


class SQLAlchemyClientRepository(SQLAlchemyRepository[Client], ClientRepository):
    """Client repository implementation using SQLAlchemy."""

    async def fetch_client_with_relations(self, client_id: str) -> ClientRead:
        """Get a client with profiles and profile folders joined.

        A failed read is reported the same way as a missing row.
        """
        query = (
            select(Client)
            .options(selectinload(Client.profiles), selectinload(Client.profile_folders))
            .where(Client.id == client_id)
            .execution_options(populate_existing=True)
        )
        try:
            client = (await self.db.execute(query)).scalar_one_or_none()
        except SQLAlchemyError as exc:
            logger.warning("Client fetch failed", client_id=client_id, error=str(exc))
            raise NotFoundError("Client not found", details={"client_id": client_id, "cause": str(exc)}) from exc

        if client is None:
            raise NotFoundError("Client not found", details={"client_id": client_id})

        return row_to_client_read(client_to_row(client))

    async def fetch_projects_for_client(self, client_id: str) -> List[ProjectRead]:
        """Get the client's projects, newest first."""
        query = (
            select(Project)
            .where(Project.client_id == client_id)
            .order_by(Project.created_at.desc(), Project.id)
        )
        try:
            projects = (await self.db.execute(query)).scalars().all()
            return [ProjectRead.model_validate(p) for p in projects]
        except (SQLAlchemyError, ValidationError) as exc:
            logger.warning("Project fetch failed", client_id=client_id, error=str(exc))
            raise FetchError("Failed to fetch client projects", details={"client_id": client_id}) from exc

    async def update_client(self, client_id: str, payload: ClientUpdate) -> None:
        """Overwrite editable fields only; identity and relations are never written."""
        try:
            client = await self.get_by_id(client_id)
            if client is None:
                raise NotFoundError("Client not found", details={"client_id": client_id})
            await self.update(client, payload)
        except SQLAlchemyError as exc:
            await self.db.rollback()
            logger.warning("Client update failed", client_id=client_id, error=str(exc))
            raise UpdateError("Failed to update client", details={"client_id": client_id}) from exc

        logger.info("Client updated", client_id=client_id, fields=sorted(payload.model_fields_set))
