"""
Project Endpoints Module

Role-scoped project access. Admins see all projects; client users see only the
projects of the Client record linked to their account.
"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException

from freelance_api.api import deps
from freelance_api.models.project import Project
from freelance_api.schemas.auth import Identity
from freelance_api.schemas.document import DocumentRead
from freelance_api.schemas.message import MessageRead
from freelance_api.schemas.project import ProjectRead
from freelance_api.storage import Storage

router = APIRouter()


@router.get("", response_model=List[ProjectRead])
def list_projects(
    storage: Storage = Depends(deps.get_storage),
    identity: Identity = Depends(deps.get_current_identity),
):
    """
    Retrieve the projects visible to the caller.

    Admins see all projects, client users see only their own.

    Raises:
        HTTPException 404: If a client user has no linked client record. This is a
            misconfigured account, unlike a client with zero projects which gets []
    """
    # Admins can see all projects
    if identity.is_admin:
        return storage.get_projects()

    client = storage.get_client_by_user_id(identity.id)
    if not client:
        raise HTTPException(status_code=404, detail="No client record found for this user")
    return storage.get_projects_by_client(client.id)


@router.get("/{project_id}", response_model=ProjectRead)
def read_project(project: Project = Depends(deps.get_accessible_project)):
    """
    Get a specific project by ID.

    Raises:
        HTTPException 404: If the project doesn't exist
        HTTPException 403: If a client user doesn't own the project
    """
    return project


@router.get("/{project_id}/documents", response_model=List[DocumentRead])
def list_project_documents(
    project: Project = Depends(deps.get_accessible_project),
    storage: Storage = Depends(deps.get_storage),
):
    return storage.get_documents_by_project(project.id)


@router.get("/{project_id}/messages", response_model=List[MessageRead])
def list_project_messages(
    project: Project = Depends(deps.get_accessible_project),
    storage: Storage = Depends(deps.get_storage),
):
    """Messages of a project, newest first."""
    return storage.get_messages_by_project(project.id)
