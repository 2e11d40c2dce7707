from typing import Optional
from pydantic import Field, field_validator

from freelance_api.core.config import settings
from freelance_api.models.user import UserRole
from freelance_api.schemas.base import CamelModel, Envelope


class DocumentCreate(CamelModel):
    """Metadata for a file that already lives at file_url."""
    project_id: int
    file_name: str = Field(min_length=1, max_length=255)
    file_type: str = Field(min_length=1, max_length=127)
    file_url: str = Field(min_length=1)
    description: Optional[str] = None

    @field_validator("file_url")
    @classmethod
    def not_a_stored_upload(cls, value: str) -> str:
        # Stored uploads are only registered through the upload endpoint
        if value.startswith(settings.UPLOAD_URL_PREFIX.rstrip("/") + "/"):
            raise ValueError("Uploaded files must be added through the upload endpoint")
        return value


class DocumentRead(CamelModel):
    id: int
    project_id: int
    file_name: str
    file_type: str
    file_url: str
    uploaded_by: int
    uploader_role: UserRole
    description: Optional[str] = None
    created_at: Optional[str] = None


class DocumentResponse(Envelope):
    data: DocumentRead
