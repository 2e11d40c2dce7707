"""
Uploads Module - validation and storage of document payloads

Files are written to UPLOAD_DIR under a random name and exposed through
UPLOAD_URL_PREFIX. Nothing is written unless the file passes both the type and
the size checks.
"""
import logging
import mimetypes
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from fastapi import UploadFile

from freelance_api.core.config import settings
from freelance_api.core.errors import FileTooLargeError, UnsupportedFileTypeError

logger = logging.getLogger(__name__)

ALLOWED_MIME_TYPES = {
    # Images
    "image/jpeg",
    "image/png",
    "image/gif",
    "image/webp",
    "image/svg+xml",
    # PDF
    "application/pdf",
    # Office documents
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "application/vnd.ms-powerpoint",
    "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    # Text
    "text/plain",
    "text/csv",
}

ALLOWED_EXTENSIONS = {
    ".jpg", ".jpeg", ".png", ".gif", ".webp", ".svg",
    ".pdf",
    ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx",
    ".txt", ".csv",
}

GENERIC_CONTENT_TYPE = "application/octet-stream"


@dataclass
class StoredUpload:
    file_name: str
    file_type: str
    file_url: str
    path: Path

    def discard(self) -> None:
        self.path.unlink(missing_ok=True)


def resolve_content_type(filename: str, declared: Optional[str]) -> str:
    """Use the declared content type unless it is missing or generic, then guess from the name."""
    if declared:
        # Drop parameters such as "; charset=utf-8"
        declared = declared.split(";", 1)[0].strip().lower()
    if declared and declared != GENERIC_CONTENT_TYPE:
        return declared
    guessed, _ = mimetypes.guess_type(filename)
    return guessed or GENERIC_CONTENT_TYPE


def max_size_label() -> str:
    size_mb = settings.MAX_UPLOAD_SIZE / (1024 * 1024)
    return f"{size_mb:g} MB"


def validate_and_store(upload: UploadFile) -> StoredUpload:
    """
    Check an uploaded file against the allow-list and size limit, then write it.

    Raises:
        UnsupportedFileTypeError: If the content type or extension is not allowed
        FileTooLargeError: If the payload exceeds MAX_UPLOAD_SIZE
    """
    file_name = Path(upload.filename or "upload").name
    extension = Path(file_name).suffix.lower()
    content_type = resolve_content_type(file_name, upload.content_type)

    if content_type not in ALLOWED_MIME_TYPES or extension not in ALLOWED_EXTENSIONS:
        logger.warning("Rejected upload %r: unsupported type %s", file_name, content_type)
        raise UnsupportedFileTypeError(f"Unsupported file type: {content_type}")

    # Read one byte past the limit so oversize files are detected without reading them fully
    data = upload.file.read(settings.MAX_UPLOAD_SIZE + 1)
    if len(data) > settings.MAX_UPLOAD_SIZE:
        logger.warning("Rejected upload %r: larger than %s", file_name, max_size_label())
        raise FileTooLargeError(f"File too large. Maximum size is {max_size_label()}")

    upload_dir = Path(settings.UPLOAD_DIR)
    upload_dir.mkdir(parents=True, exist_ok=True)
    stored_name = f"{uuid.uuid4().hex}{extension}"
    path = upload_dir / stored_name
    path.write_bytes(data)
    logger.info("Stored upload %r as %s (%d bytes)", file_name, stored_name, len(data))

    return StoredUpload(
        file_name=file_name,
        file_type=content_type,
        file_url=f"{settings.UPLOAD_URL_PREFIX.rstrip('/')}/{stored_name}",
        path=path,
    )


def resolve_upload_path(file_url: str) -> Optional[Path]:
    """Map a document URL back to the stored file, or None if it is not a local upload."""
    prefix = settings.UPLOAD_URL_PREFIX.rstrip("/") + "/"
    if not file_url.startswith(prefix):
        return None
    stored_name = file_url[len(prefix):]
    # Stored names are flat; anything with a path component did not come from us
    if not stored_name or Path(stored_name).name != stored_name:
        return None
    return Path(settings.UPLOAD_DIR) / stored_name
