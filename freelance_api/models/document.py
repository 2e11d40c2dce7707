"""
Document Model Module

Documents are files exchanged between the freelancer and a client on a project.
A document row records where the file lives and who shared it; rows are never
updated after creation.
"""
from typing import Optional
from sqlmodel import SQLModel, Field

from freelance_api.models.base import utcnow_iso
from freelance_api.models.user import UserRole


class Document(SQLModel, table=True):
    """
    Document model for a file attached to a project.

    Attributes:
        id: Auto-incrementing primary key
        project_id: Foreign key to the Project the file belongs to
        file_name: Original file name as shown to users
        file_type: MIME type of the file
        file_url: Where the file can be fetched. Uploaded files point into
            UPLOAD_URL_PREFIX; metadata-only documents keep the caller's URL
        uploaded_by: ID of the User who shared the file
        uploader_role: Role of that user at upload time
        description: Optional note about the file
        created_at: ISO timestamp when the document was shared
    """
    __tablename__ = "documents"

    id: Optional[int] = Field(default=None, primary_key=True)
    project_id: int = Field(foreign_key="projects.id", nullable=False, index=True)

    file_name: str = Field(nullable=False)
    file_type: str = Field(nullable=False)
    file_url: str = Field(nullable=False)

    uploaded_by: int = Field(foreign_key="users.id", nullable=False)
    uploader_role: UserRole = Field(nullable=False)

    description: Optional[str] = None
    created_at: Optional[str] = Field(default_factory=utcnow_iso)
