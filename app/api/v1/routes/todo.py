"""
Todo API routes
CRUD and statistics endpoints for todo management
Reference: https://fastapi.tiangolo.com/tutorial/sql-databases/
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.v1.schemas.todo import TodoCreate, TodoResponse, TodoStats, TodoUpdate
from app.core.dependencies import get_todo_service
from app.core.exceptions import NotFoundError, ValidationError
from app.services.todo import TodoService

logger = logging.getLogger(__name__)


# Create router for todo endpoints
router = APIRouter(
    prefix="/todos",
    tags=["todos"],  # Groups endpoints in API documentation
    responses={
        500: {"description": "Internal server error"}
    }
)


def _internal_error(action: str, e: Exception) -> HTTPException:
    logger.error(f"Unexpected error {action}: {type(e).__name__}: {e}", exc_info=True)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed {action}",
    )


@router.post(
    "",
    response_model=TodoResponse,
    summary="Create todo",
    description="Create a new todo",
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Invalid request data"}
    }
)
async def create_todo(
    todo_data: TodoCreate,
    service: TodoService = Depends(get_todo_service)
) -> TodoResponse:
    """
    Create a new todo

    completed defaults to false and priority to MEDIUM when omitted.
    The title is trimmed and must not be blank.
    """
    try:
        return await service.create(todo_data)
    except ValidationError as e:
        logger.warning(f"Todo creation rejected: {e.message}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=e.message
        ) from e
    except Exception as e:
        raise _internal_error("creating todo", e) from e


@router.get(
    "/stats",
    response_model=TodoStats,
    summary="Get todo statistics",
    description="Count of todos: total, completed and pending",
    status_code=status.HTTP_200_OK
)
async def get_todo_stats(
    service: TodoService = Depends(get_todo_service)
) -> TodoStats:
    """
    Get todo statistics

    total always equals completed + pending.
    """
    try:
        return await service.stats()
    except Exception as e:
        raise _internal_error("computing todo statistics", e) from e


@router.get(
    "",
    response_model=List[TodoResponse],
    summary="List todos",
    description="Retrieve todos, newest first, optionally filtered by completion status",
    status_code=status.HTTP_200_OK,
    responses={
        400: {"description": "Unknown filter"}
    }
)
async def get_todos(
    todo_filter: Optional[str] = Query(
        None,
        alias="filter",
        description="Filter todos by completion status: all, completed or pending",
    ),
    service: TodoService = Depends(get_todo_service)
) -> List[TodoResponse]:
    """
    Get a list of todos

    Supports filter=all (default), filter=completed and filter=pending.
    An empty filter value is the same as no filter.
    """
    try:
        return await service.find_all(todo_filter)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=e.message
        ) from e
    except Exception as e:
        raise _internal_error("listing todos", e) from e


@router.get(
    "/{todo_id}",
    response_model=TodoResponse,
    summary="Get todo by ID",
    description="Retrieve a single todo by its ID",
    status_code=status.HTTP_200_OK,
    responses={
        404: {"description": "Todo not found"}
    }
)
async def get_todo(
    todo_id: int,
    service: TodoService = Depends(get_todo_service)
) -> TodoResponse:
    """
    Get a single todo by ID

    Raises:
        HTTPException: 404 if the todo is not found
    """
    try:
        return await service.find_one(todo_id)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=e.message
        ) from e
    except Exception as e:
        raise _internal_error(f"fetching todo {todo_id}", e) from e


@router.put(
    "/{todo_id}",
    response_model=TodoResponse,
    summary="Update todo",
    description="Update an existing todo (partial update)",
    status_code=status.HTTP_200_OK,
    responses={
        400: {"description": "Invalid request data"},
        404: {"description": "Todo not found"}
    }
)
async def update_todo(
    todo_id: int,
    todo_data: TodoUpdate,
    service: TodoService = Depends(get_todo_service)
) -> TodoResponse:
    """
    Update an existing todo

    All fields in TodoUpdate are optional. Only fields present in the
    request body are changed; updatedAt is refreshed on success.

    Raises:
        HTTPException: 404 if the todo is not found, 400 if a field is invalid
    """
    try:
        return await service.update(todo_id, todo_data)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=e.message
        ) from e
    except ValidationError as e:
        logger.warning(f"Update of todo {todo_id} rejected: {e.message}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=e.message
        ) from e
    except Exception as e:
        raise _internal_error(f"updating todo {todo_id}", e) from e


@router.delete(
    "/{todo_id}",
    response_model=TodoResponse,
    summary="Delete todo",
    description="Delete a todo by ID and return it as it was before deletion",
    status_code=status.HTTP_200_OK,
    responses={
        404: {"description": "Todo not found"}
    }
)
async def delete_todo(
    todo_id: int,
    service: TodoService = Depends(get_todo_service)
) -> TodoResponse:
    """
    Delete a todo

    Raises:
        HTTPException: 404 if the todo is not found
    """
    try:
        return await service.remove(todo_id)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=e.message
        ) from e
    except Exception as e:
        raise _internal_error(f"deleting todo {todo_id}", e) from e
