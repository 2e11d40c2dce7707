"""
API Dependencies Module

This module provides FastAPI dependency functions for authentication and authorization.
It implements a dual authentication strategy supporting both bearer tokens (for API clients)
and HTTP-only cookies (for browser clients).
"""
from typing import List, Optional
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlmodel import Session

from freelance_api.core.config import settings
from freelance_api.core.errors import InvalidTokenError
from freelance_api.core.security import decode_access_token
from freelance_api.db.session import get_db
from freelance_api.models.project import Project
from freelance_api.models.user import User, UserRole
from freelance_api.schemas.auth import Identity
from freelance_api.storage import DatabaseStorage, Storage

# Configure OAuth2 scheme to point at the login endpoint
# auto_error=False allows us to check cookies as a fallback
reusable_oauth2 = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_PREFIX}/login",
    auto_error=False  # Don't raise error immediately if Authorization header is missing
)


def get_storage(db: Session = Depends(get_db)) -> Storage:
    """Storage bound to the request's database session."""
    return DatabaseStorage(db)


def get_current_identity(
    request: Request,
    token: Optional[str] = Depends(reusable_oauth2)
) -> Identity:
    """
    Dependency that decodes the caller's access token.

    Supports dual authentication methods:
    1. Bearer token in Authorization header (for API clients)
    2. HTTP-only cookie (for browser clients)

    The decoded identity is also stored on request.state.identity.

    Returns:
        Identity: id, username and role taken from the token

    Raises:
        HTTPException 401: If no token is provided
        HTTPException 403: If the token is invalid or expired
    """
    # Try Authorization header first, then fall back to cookie
    if not token:
        token = request.cookies.get("access_token")
        # Cookie format is "Bearer <token>", so we need to extract the token
        if token and token.startswith("Bearer "):
            token = token[len("Bearer "):]

    # Require authentication
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    # Decode and validate the JWT token
    try:
        identity = decode_access_token(token)
    except InvalidTokenError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=InvalidTokenError.detail,
        )

    request.state.identity = identity
    return identity


def get_current_user(
    identity: Identity = Depends(get_current_identity),
    storage: Storage = Depends(get_storage),
) -> User:
    """
    Dependency that loads the full User record for the caller.

    Raises:
        HTTPException 404: If the user referenced in the token no longer exists
    """
    user = storage.get_user(identity.id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


class RoleChecker:
    """
    Dependency factory for checking the caller's role.

    Usage: Depends(RoleChecker([UserRole.ADMIN]))
    """
    def __init__(self, allowed_roles: List[UserRole]):
        self.allowed_roles = allowed_roles

    def __call__(self, identity: Identity = Depends(get_current_identity)) -> Identity:
        if identity.role not in self.allowed_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"The user does not have enough privileges. Required roles: {[r.value for r in self.allowed_roles]}"
            )
        return identity


require_admin = RoleChecker([UserRole.ADMIN])


def get_client_project_ids(storage: Storage, identity: Identity) -> Optional[List[int]]:
    """
    Project ids the caller may see, or None when the caller may see everything.

    Raises:
        HTTPException 404: If a client-role caller has no linked Client record
    """
    if identity.is_admin:
        return None

    client = storage.get_client_by_user_id(identity.id)
    if not client:
        raise HTTPException(status_code=404, detail="No client record found for this user")
    return [project.id for project in storage.get_projects_by_client(client.id)]


def ensure_project_access(storage: Storage, identity: Identity, project_id: int) -> Project:
    """
    Load a project the caller is allowed to work with.

    Raises:
        HTTPException 404: If the project doesn't exist
        HTTPException 403: If a client-role caller doesn't own the project
    """
    project = storage.get_project(project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")

    if not identity.is_admin:
        client = storage.get_client_by_user_id(identity.id)
        if not client or project.client_id != client.id:
            raise HTTPException(status_code=403, detail="Not authorized to access this project")
    return project


def get_accessible_project(
    project_id: int,
    identity: Identity = Depends(get_current_identity),
    storage: Storage = Depends(get_storage),
) -> Project:
    """Path dependency variant of ensure_project_access for /projects/{project_id}/... routes."""
    return ensure_project_access(storage, identity, project_id)
