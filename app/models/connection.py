import uuid
from datetime import datetime

from sqlalchemy import Column, String, ForeignKey, DateTime, Enum
from sqlalchemy.orm import relationship

from app.db.base import Base

CONNECTION_STATUSES = ("pending", "accepted", "rejected")


class Connection(Base):
    __tablename__ = "connections"

    id = Column(String(36), primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    requester_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    receiver_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    status = Column(Enum(*CONNECTION_STATUSES, name="connection_status"), nullable=False, default="pending")
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    requester = relationship("User", foreign_keys=[requester_id])
    receiver = relationship("User", foreign_keys=[receiver_id])
