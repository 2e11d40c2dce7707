from typing import Optional
from pydantic import EmailStr, Field

from freelance_api.schemas.base import CamelModel, Envelope


class ContactCreate(CamelModel):
    name: str = Field(min_length=2)
    email: EmailStr
    subject: str = Field(min_length=2)
    message: str = Field(min_length=10)


class ContactRead(CamelModel):
    id: int
    name: str
    email: str
    subject: str
    message: str
    created_at: Optional[str] = None


class ContactResponse(Envelope):
    data: ContactRead
