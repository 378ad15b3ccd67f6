"""
API router aggregation
Combines all route handlers into a single router
Reference: https://fastapi.tiangolo.com/tutorial/bigger-applications/
"""
from fastapi import APIRouter

from app.api.v1.routes import health, todo
from app.core.config import settings


# API_PREFIX is empty by default, so todos are served at /todos
api_router = APIRouter(prefix=settings.API_PREFIX)

api_router.include_router(todo.router)
api_router.include_router(health.router)
