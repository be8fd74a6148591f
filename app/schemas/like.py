from datetime import datetime
from typing import Optional

from app.schemas.base import CamelModel


class LikeRequest(CamelModel):
    post_id: str


class LikeResponse(CamelModel):
    id: int
    user_id: str
    post_id: str
    created_at: Optional[datetime] = None
