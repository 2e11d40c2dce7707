"""
Authentication Endpoints Module

This module provides login/logout, the current-user lookup and the admin-only
creation of client accounts. The system supports both JWT bearer token
authentication and HTTP-only cookie-based authentication for browser clients.
"""
from fastapi import APIRouter, Depends, Response, status

from freelance_api.api import deps
from freelance_api.core.config import settings
from freelance_api.models.user import User
from freelance_api.schemas.auth import (
    ClientAccountCreate, ClientAccountResponse, ClientAccountResult, Identity,
    LoginRequest, LoginResponse,
)
from freelance_api.schemas.user import CurrentUserResponse, UserRead
from freelance_api.services import accounts
from freelance_api.storage import Storage

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: LoginRequest,
    response: Response,
    storage: Storage = Depends(deps.get_storage),
):
    """
    Authenticate a user and issue an access token.

    Validates the credentials and returns the user (without password) and a JWT.
    The token is also set as an HTTP-only cookie for browser clients.

    Raises:
        InvalidCredentialsError (401): Unknown username or wrong password, with the
            same message for both
    """
    user, token = accounts.login(storage, credentials.username, credentials.password)

    # Set HTTP-only cookie for browser-based authentication
    response.set_cookie(
        key="access_token",
        value=f"Bearer {token}",
        httponly=True,  # Cannot be accessed via JavaScript
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,  # Convert minutes to seconds
        samesite="lax",
        secure=settings.is_production,
    )

    return LoginResponse(user=UserRead.model_validate(user), token=token)


@router.post("/logout")
def logout(response: Response):
    """
    Clear the authentication cookie.

    API clients can simply discard their token.
    """
    response.delete_cookie("access_token")
    return {"success": True, "message": "Logged out"}


@router.get("/me", response_model=CurrentUserResponse)
def read_current_user(current_user: User = Depends(deps.get_current_user)):
    """
    Get the authenticated user's account.

    Raises:
        HTTPException 404: If the account was deleted after the token was issued
    """
    return CurrentUserResponse(user=UserRead.model_validate(current_user))


@router.post(
    "/register-client",
    response_model=ClientAccountResponse,
    status_code=status.HTTP_201_CREATED,
)
def register_client(
    account_in: ClientAccountCreate,
    storage: Storage = Depends(deps.get_storage),
    admin: Identity = Depends(deps.require_admin),
):
    """
    Create a login for an existing client (admins only).

    The new user gets the client role and the client record is linked to it.
    The client is notified by e-mail when SMTP is configured; a failed
    notification does not fail the request.

    Raises:
        NotFoundError (404): If the client does not exist
        ConflictError (409): If the client already has an account or the username is taken
    """
    user, notification_sent = accounts.register_client_account(storage, account_in)
    return ClientAccountResponse(
        message="Client account created successfully",
        data=ClientAccountResult(
            user=UserRead.model_validate(user),
            client_id=account_in.client_id,
            notification_sent=notification_sent,
        ),
    )
