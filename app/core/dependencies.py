"""
Service dependencies for route handlers
Reference: https://fastapi.tiangolo.com/tutorial/dependencies/
"""
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.repositories.todo import TodoRepository
from app.services.todo import TodoService


def get_todo_service(db: AsyncSession = Depends(get_db)) -> TodoService:
    """
    Build a TodoService bound to the request's database session

    Usage:
        @router.get("/todos")
        async def list_todos(service: TodoService = Depends(get_todo_service)):
            return await service.find_all()
    """
    return TodoService(TodoRepository(db))
