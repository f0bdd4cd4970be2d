"""Project aggregator — portfolio statistics across a client's projects."""

from typing import Sequence

from clientdesk.core.money import to_decimal, ZERO
from clientdesk.domain.schemas.project import ProjectRead, ProjectStats


def aggregate(projects: Sequence[ProjectRead]) -> ProjectStats:
    """Count and total contract value; absent or non-numeric values count as zero."""
    total = sum((to_decimal(getattr(p, "contract_value", None)) for p in projects), ZERO)
    return ProjectStats(count=len(projects), total_contract_value=total)
