from datetime import datetime
from typing import Optional

from app.schemas.base import CamelModel, UserSummary


class ConnectionRequest(CamelModel):
    receiver_id: str


class ConnectionAction(CamelModel):
    connection_id: str


class ConnectionResponse(CamelModel):
    id: str
    requester_id: str
    receiver_id: str
    status: str
    created_at: Optional[datetime] = None
    requester: Optional[UserSummary] = None
    receiver: Optional[UserSummary] = None
