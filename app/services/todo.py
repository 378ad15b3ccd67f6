"""
Todo service layer
Lifecycle rules for todos: validation, defaults, timestamps, filtering and counts
Reference: https://fastapi.tiangolo.com/tutorial/sql-databases/
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, List, Optional, Union

from app.api.v1.schemas.todo import TodoCreate, TodoStats, TodoUpdate
from app.core.enums import Priority, TodoFilter
from app.core.exceptions import NotFoundError, ValidationError
from app.models.todo import Todo
from app.repositories.todo import TodoRepository

logger = logging.getLogger(__name__)

TITLE_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 1000


def utc_now() -> datetime:
    """Current time as an aware UTC datetime"""
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    # SQLite drops tzinfo on the way back; values are written in UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def validate_title(value: Any) -> str:
    """
    Return the trimmed title

    Raises:
        ValidationError: If the title is missing, not a string, blank after
            trimming, or longer than 255 characters
    """
    if not isinstance(value, str):
        raise ValidationError("title must be a non-empty string")
    title = value.strip()
    if not title:
        raise ValidationError("title should not be empty")
    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationError(
            f"title must be shorter than or equal to {TITLE_MAX_LENGTH} characters"
        )
    return title


def validate_description(value: Any) -> Optional[str]:
    """Return the description unchanged; None stays None"""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError("description must be a string")
    if len(value) > DESCRIPTION_MAX_LENGTH:
        raise ValidationError(
            f"description must be shorter than or equal to {DESCRIPTION_MAX_LENGTH} characters"
        )
    return value


def validate_priority(value: Any) -> Priority:
    """
    Return the Priority for a Priority member or its string value

    Raises:
        ValidationError: If the value is not one of LOW, MEDIUM, HIGH
    """
    try:
        return Priority(value)
    except ValueError as e:
        allowed = ", ".join(p.value for p in Priority)
        raise ValidationError(
            f"priority must be one of the following values: {allowed}"
        ) from e


def validate_completed(value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValidationError("completed must be a boolean value")
    return value


def parse_filter(token: Union[str, TodoFilter, None]) -> Optional[bool]:
    """
    Translate a filter token into a completion restriction

    Returns:
        None for an absent or empty token or "all", True for "completed",
        False for "pending"

    Raises:
        ValidationError: If the token is not a known filter
    """
    if token is None or token == "":
        return None
    try:
        todo_filter = TodoFilter(token)
    except ValueError as e:
        allowed = ", ".join(f.value for f in TodoFilter)
        raise ValidationError(
            f"filter must be one of the following values: {allowed}"
        ) from e

    if todo_filter is TodoFilter.ALL:
        return None
    return todo_filter is TodoFilter.COMPLETED


class TodoService:
    """
    Service class for todo lifecycle rules

    Wired to its storage collaborator through the constructor. Does no I/O
    of its own; every read and write goes through the repository.
    """

    def __init__(
        self,
        repository: TodoRepository,
        now: Callable[[], datetime] = utc_now,
    ):
        self.repository = repository
        self.now = now

    async def create(self, todo_data: TodoCreate) -> Todo:
        """
        Create a new todo

        Args:
            todo_data: Todo creation data

        Returns:
            Created Todo with its new ID

        Raises:
            ValidationError: If the title is blank or the priority is unknown
        """
        title = validate_title(todo_data.title)
        description = validate_description(todo_data.description)
        completed = (
            False if todo_data.completed is None
            else validate_completed(todo_data.completed)
        )
        priority = (
            Priority.MEDIUM if todo_data.priority is None
            else validate_priority(todo_data.priority)
        )

        timestamp = self.now()
        todo = Todo(
            title=title,
            description=description,
            completed=completed,
            priority=priority.value,
            created_at=timestamp,
            updated_at=timestamp,
        )
        todo = await self.repository.add(todo)
        logger.info(f"Created todo {todo.id} with priority {todo.priority}")
        return todo

    async def find_all(
        self, todo_filter: Union[str, TodoFilter, None] = None
    ) -> List[Todo]:
        """
        List todos, most recently created first

        Args:
            todo_filter: "all", "completed", "pending" or None

        Returns:
            List of Todo objects (empty when nothing matches)
        """
        completed = parse_filter(todo_filter)
        todos = await self.repository.find_many(completed=completed)
        logger.debug(f"Listed {len(todos)} todos (filter={todo_filter})")
        return todos

    async def find_one(self, todo_id: int) -> Todo:
        """
        Retrieve a single todo by ID

        Raises:
            NotFoundError: If no todo has this ID
        """
        todo = await self.repository.get(todo_id)
        if todo is None:
            raise NotFoundError(todo_id)
        return todo

    async def update(self, todo_id: int, todo_data: TodoUpdate) -> Todo:
        """
        Apply a partial update to an existing todo

        Every supplied field is validated before any of them is applied,
        so a rejected update leaves the todo untouched.

        Args:
            todo_id: ID of the todo to update
            todo_data: Todo update data (partial)

        Returns:
            Updated Todo

        Raises:
            NotFoundError: If no todo has this ID
            ValidationError: If a supplied field breaks its rule
        """
        todo = await self.find_one(todo_id)

        # Only fields that were present in the request
        changes = {}
        for field in todo_data.model_fields_set:
            value = getattr(todo_data, field)
            if field == "title":
                changes[field] = validate_title(value)
            elif field == "description":
                changes[field] = validate_description(value)
            elif field == "completed":
                changes[field] = validate_completed(value)
            elif field == "priority":
                changes[field] = validate_priority(value).value

        for field, value in changes.items():
            setattr(todo, field, value)
        # updated_at stays strictly after created_at, even on the same clock tick
        now = self.now()
        created_at = _as_utc(todo.created_at)
        todo.updated_at = now if now > created_at else created_at + timedelta(microseconds=1)

        todo = await self.repository.save(todo)
        logger.info(f"Updated todo {todo_id}: {sorted(changes)}")
        return todo

    async def remove(self, todo_id: int) -> Todo:
        """
        Permanently delete a todo

        Returns:
            The todo as it was just before deletion

        Raises:
            NotFoundError: If no todo has this ID
        """
        todo = await self.find_one(todo_id)
        await self.repository.delete(todo)
        logger.info(f"Deleted todo {todo_id}")
        return todo

    async def stats(self) -> TodoStats:
        """
        Count todos

        Returns:
            TodoStats with total, completed and pending (total - completed)
        """
        total, completed = await self.repository.counts()
        return TodoStats(total=total, completed=completed, pending=total - completed)
