"""
Client Repository Interface.
Defines specific data access operations for Clients.
"""

from typing import List

from clientdesk.domain.repositories.base import BaseRepository
from clientdesk.domain.models.client import Client
from clientdesk.domain.schemas.client import ClientRead, ClientUpdate
from clientdesk.domain.schemas.project import ProjectRead


class ClientRepository(BaseRepository[Client]):
    """Interface for Client-specific operations."""

    async def fetch_client_with_relations(self, client_id: str) -> ClientRead:
        """Get a client joined with its profiles and folders.

        Raises NotFoundError when no row matches or the read fails.
        """
        ...

    async def fetch_projects_for_client(self, client_id: str) -> List[ProjectRead]:
        """Get the client's projects, newest first. Raises FetchError."""
        ...

    async def update_client(self, client_id: str, payload: ClientUpdate) -> None:
        """Overwrite the client's editable fields. Raises UpdateError."""
        ...
