"""
Project Model Module

This module defines the Project model: one piece of work requested by a client
through the onboarding form, with its budget, timeline and review status.
"""
from enum import Enum
from typing import List, Optional
from sqlmodel import SQLModel, Field, JSON, Column

from freelance_api.models.base import utcnow_iso


class ProjectStatus(str, Enum):
    """
    Review status of a project. Only admins change it.

    New submissions start as PENDING.
    """
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    ON_HOLD = "on-hold"
    CANCELLED = "cancelled"


class Project(SQLModel, table=True):
    """
    Project model representing a client's project request.

    Every project belongs to exactly one client. Client users can only see the
    projects of their own Client record; admins see all of them.

    Attributes:
        id: Auto-incrementing primary key
        client_id: Foreign key to the owning Client (required)
        project_type: Kind of work, e.g. "website" or "e-commerce"
        description: Free-text description of the request
        features: Ordered list of requested features, stored as a JSON array
        budget: Budget range label, e.g. "1000-3000"
        timeline: Timeline label, e.g. "2-4-weeks"
        start_date: Desired start date (YYYY-MM-DD)
        deadline: Hard deadline (YYYY-MM-DD)
        additional_requirements: Anything else the client wants to mention
        status: ProjectStatus value (default: pending)
        created_at: ISO timestamp when the project was submitted
    """
    __tablename__ = "projects"

    # Primary key
    id: Optional[int] = Field(default=None, primary_key=True)

    # Owner
    client_id: int = Field(foreign_key="clients.id", nullable=False, index=True)

    # Request details
    project_type: str = Field(nullable=False)
    description: str = Field(nullable=False)
    features: List[str] = Field(default_factory=list, sa_column=Column(JSON))

    # Budget & timeline - free-form labels chosen on the onboarding form
    budget: str = Field(nullable=False)
    timeline: str = Field(nullable=False)
    start_date: Optional[str] = None
    deadline: Optional[str] = None
    additional_requirements: Optional[str] = None

    status: ProjectStatus = Field(default=ProjectStatus.PENDING, nullable=False)

    # Audit timestamp
    created_at: Optional[str] = Field(default_factory=utcnow_iso)
