import time
from datetime import timedelta

import pytest
from jose import jwt
from pydantic import ValidationError

from freelance_api.core.config import Settings, settings
from freelance_api.core.errors import InvalidTokenError
from freelance_api.core.security import (
    create_access_token, decode_access_token, get_password_hash, verify_password,
)
from freelance_api.models.user import User, UserRole


def _user(**overrides) -> User:
    fields = {"id": 7, "username": "jane", "password": "unused", "role": UserRole.CLIENT}
    fields.update(overrides)
    return User(**fields)


def test_token_round_trip_recovers_identity():
    token = create_access_token(_user())

    identity = decode_access_token(token)

    assert identity.id == 7
    assert identity.username == "jane"
    assert identity.role == UserRole.CLIENT
    assert not identity.is_admin


def test_token_carries_expiry_seven_days_out():
    token = create_access_token(_user(role=UserRole.ADMIN))
    claims = jwt.get_unverified_claims(token)

    assert claims["role"] == "admin"
    assert claims["sub"] == "7"
    assert abs(claims["exp"] - (time.time() + 7 * 24 * 3600)) < 60


def test_expired_token_is_rejected():
    token = create_access_token(_user(), expires_delta=timedelta(seconds=-5))

    with pytest.raises(InvalidTokenError):
        decode_access_token(token)


def test_token_signed_with_another_key_is_rejected():
    forged = jwt.encode(
        {"sub": "1", "id": 1, "username": "admin", "role": "admin"},
        "not-the-server-secret",
        algorithm=settings.ALGORITHM,
    )

    with pytest.raises(InvalidTokenError):
        decode_access_token(forged)


@pytest.mark.parametrize("token", ["", "not-a-token", "a.b.c"])
def test_malformed_token_is_rejected(token):
    with pytest.raises(InvalidTokenError):
        decode_access_token(token)


def test_token_without_identity_claims_is_rejected():
    token = jwt.encode({"sub": "1"}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

    with pytest.raises(InvalidTokenError):
        decode_access_token(token)


def test_token_with_unknown_role_is_rejected():
    token = jwt.encode(
        {"sub": "1", "id": 1, "username": "eve", "role": "superuser"},
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
    )

    with pytest.raises(InvalidTokenError):
        decode_access_token(token)


def test_password_hash_verifies_only_the_original_password():
    hashed = get_password_hash("correct horse")

    assert hashed != "correct horse"
    assert verify_password("correct horse", hashed)
    assert not verify_password("wrong horse", hashed)


def test_verify_password_handles_missing_or_malformed_hash():
    assert not verify_password("anything", None)
    assert not verify_password("anything", "not-a-bcrypt-hash")


def test_production_requires_secret_key():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, ENVIRONMENT="production", SECRET_KEY=None)


def test_development_falls_back_to_dev_secret():
    dev_settings = Settings(_env_file=None, ENVIRONMENT="development", SECRET_KEY=None)

    assert dev_settings.SECRET_KEY


def test_database_url_resolution():
    assert Settings(_env_file=None, DATABASE_URL="postgres://u:p@h/db").database_url == "postgresql://u:p@h/db"
    assert Settings(
        _env_file=None, DATABASE_URL=None, DB_HOST="h", DB_USER="u", DB_PASSWORD="p", DB_NAME="db"
    ).database_url == "mysql+pymysql://u:p@h/db"
