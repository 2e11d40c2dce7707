from typing import Optional
from sqlmodel import SQLModel, Field

from freelance_api.models.base import utcnow_iso


class Contact(SQLModel, table=True):
    """A submission of the public contact form. Not related to any other table."""
    __tablename__ = "contacts"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False)
    email: str = Field(nullable=False)
    subject: str = Field(nullable=False)
    message: str = Field(nullable=False)
    created_at: Optional[str] = Field(default_factory=utcnow_iso)
