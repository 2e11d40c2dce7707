import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import Session

from freelance_api.api.api import api_router
from freelance_api.core.config import settings
from freelance_api.core.errors import register_exception_handlers
from freelance_api.core.logging import setup_logging
from freelance_api.db.session import engine, init_db
from freelance_api.services.accounts import ensure_admin_user
from freelance_api.storage import DatabaseStorage

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create tables and the bootstrap admin before serving requests
    init_db()
    with Session(engine) as session:
        ensure_admin_user(DatabaseStorage(session))
    logger.info("%s %s started (%s)", settings.PROJECT_NAME, settings.VERSION, settings.ENVIRONMENT)
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    lifespan=lifespan,
)

# Set up CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include API routes
app.include_router(api_router, prefix=settings.API_PREFIX)
