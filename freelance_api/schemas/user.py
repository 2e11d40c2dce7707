from typing import Optional
from pydantic import Field

from freelance_api.models.user import UserRole
from freelance_api.schemas.base import CamelModel


# Shared properties
class UserBase(CamelModel):
    username: str = Field(min_length=3, max_length=64)
    role: UserRole = UserRole.CLIENT


# Properties to return to client
class UserRead(UserBase):
    id: int
    username: str
    is_active: bool = True
    created_at: Optional[str] = None


class CurrentUserResponse(CamelModel):
    user: UserRead
