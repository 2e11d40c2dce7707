"""
Message Model Module

Project-scoped chat messages between the freelancer and a client.
"""
from typing import Optional
from sqlmodel import SQLModel, Field

from freelance_api.models.base import utcnow_iso
from freelance_api.models.user import UserRole


class Message(SQLModel, table=True):
    """
    Message model for a single chat message on a project.

    The is_read flag is the only field that changes after creation, and it only
    ever goes from False to True.

    Attributes:
        id: Auto-incrementing primary key
        project_id: Foreign key to the Project the conversation belongs to
        sender_id: ID of the User who sent the message
        sender_role: Role of the sender
        content: Message body
        is_read: Whether the recipient has read the message
        created_at: ISO timestamp when the message was sent
    """
    __tablename__ = "messages"

    id: Optional[int] = Field(default=None, primary_key=True)
    project_id: int = Field(foreign_key="projects.id", nullable=False, index=True)

    sender_id: int = Field(foreign_key="users.id", nullable=False)
    sender_role: UserRole = Field(nullable=False)

    content: str = Field(nullable=False)
    is_read: bool = False

    created_at: Optional[str] = Field(default_factory=utcnow_iso)
