"""
Client Model Module

This module defines the Client model representing a customer who submitted the
onboarding form. A client can later be given a login by an admin, which links
the client to a User through user_id.
"""
from typing import Optional
from sqlmodel import SQLModel, Field

from freelance_api.models.base import utcnow_iso


class Client(SQLModel, table=True):
    """
    Client model representing a customer of the freelancer.

    Clients are created together with their first project by the public
    onboarding submission. Only admins can list or inspect them.

    Attributes:
        id: Auto-incrementing primary key
        user_id: Foreign key to the User account of this client, set when an admin
            creates the client's login (None until then)
        full_name: Contact name (required)
        email: Contact e-mail address (required)
        phone: Contact phone number (required)
        company: Company/organization name
        address: Postal address
        created_at: ISO timestamp of when the client record was created
    """
    __tablename__ = "clients"

    # Primary key
    id: Optional[int] = Field(default=None, primary_key=True)

    # Back-reference to the login account, unique so one user maps to one client
    user_id: Optional[int] = Field(default=None, foreign_key="users.id", unique=True, index=True)

    # Required contact information
    full_name: str = Field(nullable=False)
    email: str = Field(nullable=False)
    phone: str = Field(nullable=False)

    # Optional details
    company: Optional[str] = None
    address: Optional[str] = None

    # Audit timestamp - automatically set to current UTC time on creation
    created_at: Optional[str] = Field(default_factory=utcnow_iso)
