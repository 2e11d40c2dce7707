"""
Document Endpoints Module

Documents can be registered by URL (metadata only) or uploaded as multipart
form data. Both admins and client users may share documents on projects they
have access to. Documents are never edited after creation.
"""
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from fastapi.responses import FileResponse

from freelance_api.api import deps
from freelance_api.core.errors import PortalError
from freelance_api.models.document import Document
from freelance_api.schemas.auth import Identity
from freelance_api.schemas.document import DocumentCreate, DocumentRead, DocumentResponse
from freelance_api.services import uploads
from freelance_api.storage import Storage

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/documents", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
def create_document(
    document_in: DocumentCreate,
    storage: Storage = Depends(deps.get_storage),
    identity: Identity = Depends(deps.get_current_identity),
):
    """
    Register a document that already lives at document_in.file_url.

    Raises:
        HTTPException 404: If the project doesn't exist
        HTTPException 403: If a client user doesn't own the project
    """
    deps.ensure_project_access(storage, identity, document_in.project_id)

    document = storage.create_document(
        Document(
            **document_in.model_dump(),
            uploaded_by=identity.id,
            uploader_role=identity.role,
        )
    )
    return DocumentResponse(message="Document saved", data=DocumentRead.model_validate(document))


@router.get("/documents", response_model=List[DocumentRead])
def list_documents(
    storage: Storage = Depends(deps.get_storage),
    identity: Identity = Depends(deps.get_current_identity),
):
    """All documents for admins; documents of the caller's own projects for client users."""
    return storage.get_documents(deps.get_client_project_ids(storage, identity))


@router.post("/upload-document", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
def upload_document(
    file: UploadFile = File(...),
    project_id: int = Form(..., alias="projectId"),
    description: Optional[str] = Form(None),
    storage: Storage = Depends(deps.get_storage),
    identity: Identity = Depends(deps.get_current_identity),
):
    """
    Upload a file and register it as a document.

    The file must be at most MAX_UPLOAD_SIZE bytes and of an allowed type
    (images, PDF, Office documents, plain text/CSV).

    Raises:
        HTTPException 404/403: As for create_document
        FileTooLargeError (400, code "file_too_large"): If the file is too big
        UnsupportedFileTypeError (400, code "unsupported_file_type"): If the type is not allowed
    """
    deps.ensure_project_access(storage, identity, project_id)

    stored = uploads.validate_and_store(file)
    try:
        document = storage.create_document(
            Document(
                project_id=project_id,
                file_name=stored.file_name,
                file_type=stored.file_type,
                file_url=stored.file_url,
                uploaded_by=identity.id,
                uploader_role=identity.role,
                description=description,
            )
        )
    except PortalError:
        # Don't keep a file no document points to
        stored.discard()
        raise

    return DocumentResponse(message="Document uploaded", data=DocumentRead.model_validate(document))


@router.get("/documents/{document_id}/download")
def download_document(
    document_id: int,
    storage: Storage = Depends(deps.get_storage),
    identity: Identity = Depends(deps.get_current_identity),
):
    """
    Stream an uploaded document.

    Raises:
        HTTPException 404: If the document doesn't exist, is not a local upload, or its file is gone
        HTTPException 403: If a client user doesn't own the document's project
    """
    document = storage.get_document(document_id)
    if not document:
        raise HTTPException(status_code=404, detail="Document not found")
    deps.ensure_project_access(storage, identity, document.project_id)

    path = uploads.resolve_upload_path(document.file_url)
    if path is None or not path.is_file():
        logger.warning("Document %s has no stored file at %s", document_id, document.file_url)
        raise HTTPException(status_code=404, detail="File not found")

    return FileResponse(path, media_type=document.file_type, filename=document.file_name)
