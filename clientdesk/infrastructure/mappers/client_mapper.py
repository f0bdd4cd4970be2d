"""
Client mapper. Turns joined client rows into the storage-agnostic read shape.
"""

from typing import Any, Dict

from clientdesk.domain.models.client import Client
from clientdesk.domain.schemas.client import ClientRead

# Joined relation key as the store names it, and the name callers see
RAW_FOLDERS_KEY = "profile_folders"
FOLDERS_KEY = "folders"


def model_to_row(model: Any) -> Dict[str, Any]:
    """Column values of a mapped instance as a plain dict."""
    return {column.name: getattr(model, column.name) for column in model.__table__.columns}


def client_to_row(client: Client) -> Dict[str, Any]:
    """A client row with its joined relations, shaped like the store returns it."""
    row = model_to_row(client)
    row["profiles"] = [model_to_row(p) for p in client.profiles]
    row[RAW_FOLDERS_KEY] = [model_to_row(f) for f in client.profile_folders]
    return row


def normalize_client_row(row: Dict[str, Any]) -> Dict[str, Any]:
    """Expose joined folders under ``folders`` and drop the raw joined key."""
    normalized = dict(row)
    normalized[FOLDERS_KEY] = normalized.pop(RAW_FOLDERS_KEY, None) or []
    normalized.setdefault("profiles", [])
    if normalized["profiles"] is None:
        normalized["profiles"] = []
    return normalized


def row_to_client_read(row: Dict[str, Any]) -> ClientRead:
    return ClientRead.model_validate(normalize_client_row(row))
