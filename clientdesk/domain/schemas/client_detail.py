"""Pydantic schemas for the client detail view."""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from clientdesk.domain.schemas.client import ClientRead
from clientdesk.domain.schemas.project import PaymentProgress, ProjectStats, StatusDisplay


class ViewState(str, Enum):
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


class InfoField(BaseModel):
    label: str
    value: str


class Notice(BaseModel):
    level: str  # success, warning, error
    message: str


class ProjectCard(BaseModel):
    id: str
    name: str
    status: StatusDisplay
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    start_date_display: str
    end_date_display: str
    contract_value: Decimal
    contract_value_display: str
    debt_display: str
    progress: PaymentProgress


class ClientDetailView(BaseModel):
    state: ViewState
    client_id: Optional[str] = None
    client: Optional[ClientRead] = None
    info: list[InfoField] = []
    stats: ProjectStats
    total_contract_value_display: str
    projects: list[ProjectCard] = []
    recent_projects: list[ProjectCard] = []
    has_projects: bool = False
    profile_count: int = 0
    notices: list[Notice] = []
    error_message: Optional[str] = None
    redirect_to: Optional[str] = None
