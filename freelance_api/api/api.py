from fastapi import APIRouter
from freelance_api.api.endpoints import (
    admin, auth, documents, health, messages, projects, public
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, tags=["auth"])
api_router.include_router(public.router, tags=["public"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])

# Client portal endpoints
api_router.include_router(projects.router, prefix="/projects", tags=["projects"])
api_router.include_router(documents.router, tags=["documents"])
api_router.include_router(messages.router, prefix="/messages", tags=["messages"])
