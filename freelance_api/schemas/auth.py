from pydantic import BaseModel, Field

from freelance_api.models.user import UserRole
from freelance_api.schemas.base import CamelModel, Envelope
from freelance_api.schemas.user import UserRead


class LoginRequest(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class LoginResponse(CamelModel):
    user: UserRead
    token: str


class Identity(BaseModel):
    """The identity carried inside an access token."""
    id: int
    username: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class ClientAccountCreate(CamelModel):
    username: str = Field(min_length=3, max_length=64)
    password: str = Field(min_length=8)
    client_id: int


class ClientAccountResult(CamelModel):
    user: UserRead
    client_id: int
    notification_sent: bool


class ClientAccountResponse(Envelope):
    data: ClientAccountResult
