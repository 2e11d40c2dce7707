import sys
import os
from sqlmodel import Session

# Add current directory to path
sys.path.append(os.getcwd())

from freelance_api.core.config import settings
from freelance_api.db.session import engine, init_db
from freelance_api.services.accounts import ensure_admin_user
from freelance_api.storage import DatabaseStorage


def create_admin_user():
    print("--- Admin User Bootstrap ---")

    init_db()
    with Session(engine) as session:
        user = ensure_admin_user(DatabaseStorage(session))

    print(f"Username: {user.username}")
    print(f"Role: {user.role.value}")
    print(f"Created at: {user.created_at}")
    if settings.ADMIN_PASSWORD == "change-me-admin":
        print("WARNING: ADMIN_PASSWORD is still the default. Set it in .env before deploying.")


if __name__ == "__main__":
    create_admin_user()
