"""Project domain model — maps to the 'projects' table."""

import uuid

from sqlalchemy import Column, String, Numeric, Date, DateTime, ForeignKey, JSON
from sqlalchemy.sql import func

from clientdesk.infrastructure.database import Base


class Project(Base):
    __tablename__ = "projects"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    client_id = Column(String(36), ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)

    name = Column(String(500), nullable=False)
    status = Column(String(50), default="planning")  # planning, in-progress, completed, overdue
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    contract_value = Column(Numeric(18, 2), nullable=True)

    # Ordered installments: [{"amount": ..., "paid": ...}, ...]
    payments = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<Project {self.name} - {self.status}>"
