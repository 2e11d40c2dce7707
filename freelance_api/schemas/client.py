from typing import List, Optional
from pydantic import EmailStr, Field, field_validator

from freelance_api.schemas.base import CamelModel, Envelope
from freelance_api.schemas.project import ProjectRead


class ClientProjectSubmission(CamelModel):
    """
    Payload of the multi-step onboarding form.

    Personal details become the Client row, the rest becomes its first Project.
    """
    # Personal info
    full_name: str = Field(min_length=2)
    email: EmailStr
    phone: str = Field(min_length=5)
    company: Optional[str] = None
    address: Optional[str] = None

    # Project details
    project_type: str = Field(min_length=1)
    description: str = Field(min_length=10)
    features: List[str] = Field(default_factory=list)

    # Budget & timeline
    budget: str = Field(min_length=1)
    timeline: str = Field(min_length=1)
    start_date: Optional[str] = None
    deadline: Optional[str] = None
    additional_requirements: Optional[str] = None

    terms_agreed: bool

    @field_validator("terms_agreed")
    @classmethod
    def terms_must_be_agreed(cls, value: bool) -> bool:
        if value is not True:
            raise ValueError("You must agree to the terms and conditions")
        return value

    def client_fields(self) -> dict:
        return self.model_dump(include={"full_name", "email", "phone", "company", "address"})

    def project_fields(self) -> dict:
        return self.model_dump(include={
            "project_type", "description", "features", "budget", "timeline",
            "start_date", "deadline", "additional_requirements",
        })


class ClientRead(CamelModel):
    id: int
    user_id: Optional[int] = None
    full_name: str
    email: str
    phone: str
    company: Optional[str] = None
    address: Optional[str] = None
    created_at: Optional[str] = None


class ClientDetail(CamelModel):
    client: ClientRead
    projects: List[ProjectRead]


class OnboardingResult(CamelModel):
    client: ClientRead
    project: ProjectRead


class OnboardingResponse(Envelope):
    data: OnboardingResult
