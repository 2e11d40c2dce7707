"""
Admin Endpoints Module

Review endpoints for the freelancer: clients, their projects, contact-form
submissions and project status changes. Every route requires the admin role.
"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException

from freelance_api.api import deps
from freelance_api.schemas.client import ClientDetail, ClientRead
from freelance_api.schemas.contact import ContactRead
from freelance_api.schemas.project import ProjectRead, ProjectStatusResponse, ProjectStatusUpdate
from freelance_api.storage import Storage

router = APIRouter(dependencies=[Depends(deps.require_admin)])


@router.get("/clients", response_model=List[ClientRead])
def list_clients(storage: Storage = Depends(deps.get_storage)):
    """Retrieve all clients, newest first."""
    return storage.get_clients()


@router.get("/clients/{client_id}", response_model=ClientDetail)
def read_client(client_id: int, storage: Storage = Depends(deps.get_storage)):
    """
    Get a client together with all of its projects.

    Raises:
        HTTPException 404: If the client doesn't exist
    """
    client = storage.get_client(client_id)
    if not client:
        raise HTTPException(status_code=404, detail="Client not found")

    return ClientDetail(
        client=ClientRead.model_validate(client),
        projects=[ProjectRead.model_validate(p) for p in storage.get_projects_by_client(client_id)],
    )


@router.get("/projects", response_model=List[ProjectRead])
def list_projects(storage: Storage = Depends(deps.get_storage)):
    return storage.get_projects()


@router.patch("/projects/{project_id}/status", response_model=ProjectStatusResponse)
def update_project_status(
    project_id: int,
    status_in: ProjectStatusUpdate,
    storage: Storage = Depends(deps.get_storage),
):
    """
    Change a project's status.

    The status must be one of the ProjectStatus values; anything else is a
    validation error (400).

    Raises:
        HTTPException 404: If the project doesn't exist
    """
    project = storage.update_project_status(project_id, status_in.status)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")

    return ProjectStatusResponse(
        message="Project status updated",
        data=ProjectRead.model_validate(project),
    )


@router.get("/contacts", response_model=List[ContactRead])
def list_contacts(storage: Storage = Depends(deps.get_storage)):
    """Retrieve all contact-form submissions, newest first."""
    return storage.get_contacts()
