"""Status resolver — project status codes to display labels and tags."""

from typing import Optional

from clientdesk.domain.schemas.project import StatusDisplay

STATUS_LABELS = {
    "planning": "Pending",
    "in-progress": "Running",
    "completed": "Completed",
    "overdue": "Overdue",
}

STATUS_TAGS = {
    "planning": "pending",
    "in-progress": "active",
    "completed": "success",
    "overdue": "danger",
}

NEUTRAL_TAG = "neutral"
UNKNOWN_LABEL = "Unknown"


def status_label(code: Optional[str]) -> str:
    """Label for a status code; unknown codes are shown verbatim."""
    if not code:
        return UNKNOWN_LABEL
    return STATUS_LABELS.get(code, code)


def status_tag(code: Optional[str]) -> str:
    return STATUS_TAGS.get(code or "", NEUTRAL_TAG)


def resolve_status(code: Optional[str]) -> StatusDisplay:
    return StatusDisplay(code=code, label=status_label(code), tag=status_tag(code))


def list_statuses() -> list[StatusDisplay]:
    """The fixed status vocabulary, in lifecycle order."""
    return [resolve_status(code) for code in STATUS_LABELS]
