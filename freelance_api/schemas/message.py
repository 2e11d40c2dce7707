from typing import Optional
from pydantic import Field

from freelance_api.models.user import UserRole
from freelance_api.schemas.base import CamelModel, Envelope


class MessageCreate(CamelModel):
    project_id: int
    content: str = Field(min_length=1, max_length=5000)


class MessageRead(CamelModel):
    id: int
    project_id: int
    sender_id: int
    sender_role: UserRole
    content: str
    is_read: bool
    created_at: Optional[str] = None


class MessageResponse(Envelope):
    data: MessageRead
