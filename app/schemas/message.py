from datetime import datetime
from typing import Optional

from pydantic import Field

from app.schemas.base import CamelModel, UserContact, UserSummary


class MessageCreate(CamelModel):
    receiver_id: str
    content: str = Field(..., min_length=1, max_length=5000)


class MessageUpdate(CamelModel):
    content: str = Field(..., min_length=1, max_length=5000)


class MessageOut(CamelModel):
    id: str
    sender_id: str
    receiver_id: str
    content: str
    is_read: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    sender: Optional[UserSummary] = None
    receiver: Optional[UserSummary] = None


class ConversationOut(CamelModel):
    partner: UserContact
    last_message: MessageOut
    unread_count: int


class UnreadCountResponse(CamelModel):
    count: int
