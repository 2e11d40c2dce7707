"""
User Model Module

This module defines the User model and UserRole enumeration for authentication
and authorization throughout the application.
"""
from enum import Enum
from typing import Optional
from sqlmodel import SQLModel, Field

from freelance_api.models.base import utcnow_iso


class UserRole(str, Enum):
    """
    Enumeration of user roles.

    - ADMIN: The freelancer running the site. Sees and manages every client,
      project, document, message and contact submission.
    - CLIENT: A customer account linked to exactly one Client record. Limited
      to the projects of that client.

    Role checks compare against these values directly; there is no hierarchy.
    """
    ADMIN = "admin"
    CLIENT = "client"


class User(SQLModel, table=True):
    """
    User model representing an account that can log in.

    Users authenticate with username/password. Admin accounts are created by the
    startup bootstrap; client accounts are created by an admin and linked to a
    Client record.

    Attributes:
        id: Auto-incrementing primary key
        username: Login name (required, unique, indexed)
        password: Hashed password (bcrypt). Never returned by the API
        role: UserRole value, fixed at creation
        is_active: Inactive users cannot log in
        created_at: ISO timestamp when the user account was created
    """
    __tablename__ = "users"

    # Primary key
    id: Optional[int] = Field(default=None, primary_key=True)

    # Authentication fields
    username: str = Field(unique=True, index=True, nullable=False)
    password: str = Field(nullable=False)  # Hashed password (bcrypt)

    # Authorization - stored as plain string, validated by the enum
    role: UserRole = Field(default=UserRole.CLIENT, nullable=False)

    is_active: bool = True

    # Audit timestamp
    created_at: Optional[str] = Field(default_factory=utcnow_iso)
