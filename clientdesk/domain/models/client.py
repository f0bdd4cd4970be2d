"""Client domain model — maps to the 'clients' table."""

import uuid

from sqlalchemy import Column, String, Numeric, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from clientdesk.infrastructure.database import Base


class Client(Base):
    __tablename__ = "clients"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # Editable fields
    name = Column(String(300), nullable=False)
    contact_person = Column(String(300), nullable=True)
    email = Column(String(300), nullable=True)
    invoice_email = Column(String(300), nullable=True)
    contract_value = Column(Numeric(18, 2), nullable=True)
    classification = Column(String(200), nullable=True)
    source = Column(String(200), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    profiles = relationship("Profile", back_populates="client", cascade="all, delete-orphan")
    profile_folders = relationship("ProfileFolder", back_populates="client", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Client {self.id} - {self.name}>"
