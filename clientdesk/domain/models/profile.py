"""Client profile documents and the folders grouping them."""

import uuid

from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from clientdesk.infrastructure.database import Base


class ProfileFolder(Base):
    __tablename__ = "profile_folders"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    client_id = Column(String(36), ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(300), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    client = relationship("Client", back_populates="profile_folders")

    def __repr__(self):
        return f"<ProfileFolder {self.name}>"


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    client_id = Column(String(36), ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)
    folder_id = Column(String(36), ForeignKey("profile_folders.id", ondelete="SET NULL"), nullable=True)
    name = Column(String(500), nullable=False)
    link = Column(String(1000), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    client = relationship("Client", back_populates="profiles")

    def __repr__(self):
        return f"<Profile {self.name}>"
