"""
Base Repository Interface.
Defines the standard contract for data access operations.
"""

from typing import TypeVar, Optional, Any, Protocol

T = TypeVar("T")


class BaseRepository(Protocol[T]):
    """Interface for generic read/update operations."""

    async def get_by_id(self, id: Any) -> Optional[T]:
        """Get a single entity by ID."""
        ...

    async def update(self, db_obj: T, obj_in: Any) -> T:
        """Update an existing entity."""
        ...
