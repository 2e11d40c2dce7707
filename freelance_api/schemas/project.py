from typing import List, Optional

from freelance_api.models.project import ProjectStatus
from freelance_api.schemas.base import CamelModel, Envelope


class ProjectRead(CamelModel):
    id: int
    client_id: int
    project_type: str
    description: str
    features: List[str] = []
    budget: str
    timeline: str
    start_date: Optional[str] = None
    deadline: Optional[str] = None
    additional_requirements: Optional[str] = None
    status: ProjectStatus
    created_at: Optional[str] = None


class ProjectStatusUpdate(CamelModel):
    status: ProjectStatus


class ProjectStatusResponse(Envelope):
    data: ProjectRead
