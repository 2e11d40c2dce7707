"""
Account Services Module

Login, administrator bootstrap and client-account registration. These sit on
top of the Storage credential operations and own all password hashing and
verification.
"""
import logging
from typing import Tuple

from freelance_api.core.config import settings
from freelance_api.core.errors import DuplicateUsernameError, InvalidCredentialsError, NotFoundError
from freelance_api.core.security import create_access_token, get_password_hash, verify_password
from freelance_api.models.user import User, UserRole
from freelance_api.schemas.auth import ClientAccountCreate
from freelance_api.services.notifications import send_client_account_notification
from freelance_api.storage.base import Storage

logger = logging.getLogger(__name__)


def authenticate(storage: Storage, username: str, password: str) -> User:
    """
    Check a username/password pair.

    Raises:
        InvalidCredentialsError: For an unknown user, an inactive user or a wrong
            password alike
    """
    user = storage.get_user_by_username(username)
    if not user or not user.is_active or not verify_password(password, user.password):
        logger.info("Failed login attempt for username %r", username)
        raise InvalidCredentialsError()
    return user


def login(storage: Storage, username: str, password: str) -> Tuple[User, str]:
    """Authenticate and issue an access token. Returns (user, token)."""
    user = authenticate(storage, username, password)
    return user, create_access_token(user)


def ensure_admin_user(storage: Storage) -> User:
    """
    Make sure the configured administrator account exists.

    Creates it with the configured password when missing. An existing account
    is returned untouched, so its password is never reset.
    """
    user = storage.get_user_by_username(settings.ADMIN_USERNAME)
    if user:
        logger.info("Admin user %s already exists", settings.ADMIN_USERNAME)
        return user

    logger.info("Creating admin user %s", settings.ADMIN_USERNAME)
    try:
        return storage.create_user(
            User(
                username=settings.ADMIN_USERNAME,
                password=get_password_hash(settings.ADMIN_PASSWORD),
                role=UserRole.ADMIN,
            )
        )
    except DuplicateUsernameError:
        # Another worker created it between the lookup and the insert
        logger.info("Admin user %s was created concurrently", settings.ADMIN_USERNAME)
        return storage.get_user_by_username(settings.ADMIN_USERNAME)


def register_client_account(storage: Storage, account_in: ClientAccountCreate) -> Tuple[User, bool]:
    """
    Create a login for an existing client and link the client to it.

    The user row and the link are written together; a failure leaves neither.

    Returns:
        (user, notification_sent)

    Raises:
        NotFoundError: If the client does not exist
        ConflictError: If the client already has an account
        DuplicateUsernameError: If the username is taken
    """
    created = storage.create_client_account(
        account_in.client_id,
        User(
            username=account_in.username,
            password=get_password_hash(account_in.password),
            role=UserRole.CLIENT,
        ),
    )
    if created is None:
        raise NotFoundError("Client not found")
    user, client = created
    logger.info("Created account %s for client %s", user.username, client.id)

    notification_sent = send_client_account_notification(
        client.email, client.full_name, user.username, settings.CLIENT_PORTAL_URL
    )
    return user, notification_sent
