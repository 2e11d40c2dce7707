"""
Public Endpoints Module

Unauthenticated submissions from the marketing site: the client-onboarding
wizard and the contact form.
"""
from fastapi import APIRouter, Depends, status

from freelance_api.api import deps
from freelance_api.models.contact import Contact
from freelance_api.schemas.client import (
    ClientProjectSubmission, ClientRead, OnboardingResponse, OnboardingResult,
)
from freelance_api.schemas.contact import ContactCreate, ContactRead, ContactResponse
from freelance_api.schemas.project import ProjectRead
from freelance_api.storage import Storage

router = APIRouter()


@router.post(
    "/client-onboarding",
    response_model=OnboardingResponse,
    status_code=status.HTTP_201_CREATED,
)
def submit_client_onboarding(
    submission: ClientProjectSubmission,
    storage: Storage = Depends(deps.get_storage),
):
    """
    Record an onboarding submission.

    Creates the Client and its first Project (status "pending") in one
    transaction; either both are saved or neither.
    """
    client, project = storage.create_client_with_project(submission)
    return OnboardingResponse(
        message="Project request submitted successfully",
        data=OnboardingResult(
            client=ClientRead.model_validate(client),
            project=ProjectRead.model_validate(project),
        ),
    )


@router.post("/contact", response_model=ContactResponse, status_code=status.HTTP_201_CREATED)
def submit_contact(
    contact_in: ContactCreate,
    storage: Storage = Depends(deps.get_storage),
):
    contact = storage.create_contact(Contact(**contact_in.model_dump()))
    return ContactResponse(
        message="Message sent successfully",
        data=ContactRead.model_validate(contact),
    )
