"""
Todo Pydantic schemas
Request and response models for Todo API endpoints
Reference: https://fastapi.tiangolo.com/tutorial/body/
"""
from datetime import datetime, timezone
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_serializer

from app.core.enums import Priority


class TodoCreate(BaseModel):
    """
    Schema for creating a new todo
    Omitted completed/priority are filled in by the lifecycle rules
    """
    title: str = Field(..., min_length=1, description="Todo title")
    description: Optional[str] = Field(None, max_length=1000, description="Todo description")
    completed: Optional[bool] = Field(None, description="Whether the todo is completed")
    priority: Optional[Priority] = Field(None, description="Todo priority")


class TodoUpdate(BaseModel):
    """
    Schema for updating a todo
    All fields are optional; only fields present in the request are applied
    Reference: https://fastapi.tiangolo.com/tutorial/body-updates/
    """
    title: Optional[str] = Field(None, min_length=1, description="Todo title")
    description: Optional[str] = Field(None, max_length=1000, description="Todo description")
    completed: Optional[bool] = Field(None, description="Whether the todo is completed")
    priority: Optional[Priority] = Field(None, description="Todo priority")


class TodoResponse(BaseModel):
    """
    Schema for todo response
    Timestamps are exposed as createdAt/updatedAt on the wire
    """
    model_config = ConfigDict(
        from_attributes=True,  # Allow creation from ORM objects (SQLAlchemy models)
        populate_by_name=True,
    )

    id: int = Field(..., description="Todo ID")
    title: str = Field(..., description="Todo title")
    description: Optional[str] = Field(None, description="Todo description")
    completed: bool = Field(..., description="Whether the todo is completed")
    priority: Priority = Field(..., description="Todo priority")
    created_at: datetime = Field(
        ...,
        validation_alias=AliasChoices("createdAt", "created_at"),
        serialization_alias="createdAt",
        description="Timestamp when todo was created",
    )
    updated_at: datetime = Field(
        ...,
        validation_alias=AliasChoices("updatedAt", "updated_at"),
        serialization_alias="updatedAt",
        description="Timestamp when todo was last updated",
    )

    @field_serializer("created_at", "updated_at")
    def serialize_timestamp(self, value: datetime) -> str:
        """
        ISO-8601 with an explicit offset
        SQLite hands back naive datetimes; they are stored in UTC
        """
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.isoformat()


class TodoStats(BaseModel):
    """
    Todo counts
    total is always completed + pending
    """
    total: int = Field(..., ge=0, description="Number of todos")
    completed: int = Field(..., ge=0, description="Number of completed todos")
    pending: int = Field(..., ge=0, description="Number of todos not yet completed")
