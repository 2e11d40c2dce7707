"""
Message Endpoints Module

Project-scoped messaging between the freelancer and client users.
"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status

from freelance_api.api import deps
from freelance_api.models.message import Message
from freelance_api.schemas.auth import Identity
from freelance_api.schemas.message import MessageCreate, MessageRead, MessageResponse
from freelance_api.storage import Storage

router = APIRouter()


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def send_message(
    message_in: MessageCreate,
    storage: Storage = Depends(deps.get_storage),
    identity: Identity = Depends(deps.get_current_identity),
):
    """
    Post a message on a project.

    Raises:
        HTTPException 404: If the project doesn't exist
        HTTPException 403: If a client user doesn't own the project
    """
    deps.ensure_project_access(storage, identity, message_in.project_id)

    message = storage.create_message(
        Message(
            project_id=message_in.project_id,
            content=message_in.content,
            sender_id=identity.id,
            sender_role=identity.role,
        )
    )
    return MessageResponse(message="Message sent", data=MessageRead.model_validate(message))


@router.get("", response_model=List[MessageRead])
def list_messages(
    storage: Storage = Depends(deps.get_storage),
    identity: Identity = Depends(deps.get_current_identity),
):
    """All messages for admins; messages of the caller's own projects for client users."""
    return storage.get_messages(deps.get_client_project_ids(storage, identity))


@router.patch("/{message_id}/read", response_model=MessageResponse)
def mark_message_read(
    message_id: int,
    storage: Storage = Depends(deps.get_storage),
    identity: Identity = Depends(deps.get_current_identity),
):
    """
    Mark a message as read. Marking an already read message is a no-op.

    Raises:
        HTTPException 404: If the message doesn't exist
        HTTPException 403: If a client user doesn't own the message's project
    """
    message = storage.get_message(message_id)
    if not message:
        raise HTTPException(status_code=404, detail="Message not found")
    deps.ensure_project_access(storage, identity, message.project_id)

    message = storage.mark_message_as_read(message_id)
    if not message:
        raise HTTPException(status_code=404, detail="Message not found")
    return MessageResponse(message="Message marked as read", data=MessageRead.model_validate(message))
