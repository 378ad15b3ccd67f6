"""
Pydantic schemas for API request/response models
"""

from app.api.v1.schemas.todo import TodoCreate, TodoUpdate, TodoResponse, TodoStats

__all__ = ["TodoCreate", "TodoUpdate", "TodoResponse", "TodoStats"]
