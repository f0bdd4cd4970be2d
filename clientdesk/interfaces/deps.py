"""
API Dependencies.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from clientdesk.infrastructure.database import get_db
from clientdesk.domain.models.client import Client
from clientdesk.domain.repositories.client_repository import ClientRepository
from clientdesk.infrastructure.repositories.client_repository import SQLAlchemyClientRepository
from clientdesk.application.services.client_detail_controller import ClientDetailController


def get_client_repository(db: AsyncSession = Depends(get_db)) -> ClientRepository:
    """Get client repository instance."""
    return SQLAlchemyClientRepository(db, Client)


def get_client_detail_controller(
    repo: ClientRepository = Depends(get_client_repository),
) -> ClientDetailController:
    """A fresh controller per request; state lives for one request only."""
    return ClientDetailController(repo)
