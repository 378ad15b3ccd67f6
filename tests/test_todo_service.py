# tests/test_todo_service.py

from __future__ import annotations

from datetime import timedelta

import pytest

from app.api.v1.schemas.todo import TodoCreate, TodoUpdate
from app.core.enums import Priority, TodoFilter
from app.core.exceptions import NotFoundError, ValidationError
from app.services.todo import (
    TodoService,
    parse_filter,
    validate_priority,
    validate_title,
)

from .fakes import InMemoryTodoRepository, SteppingClock


# --- validation helpers ---


def test_validate_title_trims() -> None:
    assert validate_title("  Buy groceries \n") == "Buy groceries"


@pytest.mark.parametrize("title", [None, "", "   ", "\t\n", 42])
def test_validate_title_rejects_blank_or_non_string(title) -> None:
    with pytest.raises(ValidationError):
        validate_title(title)


def test_validate_title_rejects_too_long() -> None:
    with pytest.raises(ValidationError):
        validate_title("x" * 256)


def test_validate_title_limit_applies_after_trimming() -> None:
    assert validate_title("  " + "x" * 255 + "  ") == "x" * 255


def test_validate_priority_accepts_member_and_value() -> None:
    assert validate_priority(Priority.HIGH) is Priority.HIGH
    assert validate_priority("LOW") is Priority.LOW


@pytest.mark.parametrize("priority", ["URGENT", "low", "", None, 3])
def test_validate_priority_rejects_unknown(priority) -> None:
    with pytest.raises(ValidationError):
        validate_priority(priority)


def test_parse_filter() -> None:
    assert parse_filter(None) is None
    assert parse_filter("") is None
    assert parse_filter("all") is None
    assert parse_filter(TodoFilter.ALL) is None
    assert parse_filter("completed") is True
    assert parse_filter("pending") is False


def test_parse_filter_rejects_unknown_token() -> None:
    with pytest.raises(ValidationError):
        parse_filter("done")


# --- create ---


async def test_create_applies_defaults(service: TodoService) -> None:
    todo = await service.create(TodoCreate(title="Buy groceries"))

    assert todo.id == 1
    assert todo.title == "Buy groceries"
    assert todo.description is None
    assert todo.completed is False
    assert todo.priority == Priority.MEDIUM.value
    assert todo.created_at is not None
    assert todo.created_at == todo.updated_at


async def test_create_keeps_supplied_fields(service: TodoService) -> None:
    todo = await service.create(
        TodoCreate(
            title="  Ship  ",
            description="Release 1.0",
            completed=True,
            priority=Priority.HIGH,
        )
    )

    assert todo.title == "Ship"
    assert todo.description == "Release 1.0"
    assert todo.completed is True
    assert todo.priority == "HIGH"


@pytest.mark.parametrize("title", ["", "   ", "\t"])
async def test_create_rejects_blank_title(
    service: TodoService, repository: InMemoryTodoRepository, title: str
) -> None:
    with pytest.raises(ValidationError):
        await service.create(TodoCreate.model_construct(title=title))
    assert repository.todos == {}


async def test_create_rejects_unknown_priority(
    service: TodoService, repository: InMemoryTodoRepository
) -> None:
    # model_construct skips pydantic so the service's own check is exercised
    data = TodoCreate.model_construct(title="Ship", priority="URGENT")
    with pytest.raises(ValidationError):
        await service.create(data)
    assert repository.todos == {}


# --- find_all / find_one ---


async def _seed(service: TodoService) -> None:
    await service.create(TodoCreate(title="Todo 1"))
    await service.create(TodoCreate(title="Todo 2", completed=True))
    await service.create(TodoCreate(title="Todo 3", completed=True))
    await service.create(TodoCreate(title="Todo 4"))


async def test_find_all_returns_newest_first(service: TodoService) -> None:
    await _seed(service)

    for token in (None, "all", TodoFilter.ALL):
        todos = await service.find_all(token)
        assert [t.title for t in todos] == ["Todo 4", "Todo 3", "Todo 2", "Todo 1"]


async def test_find_all_filters_by_completion(service: TodoService) -> None:
    await _seed(service)

    completed = await service.find_all("completed")
    pending = await service.find_all("pending")

    assert [t.title for t in completed] == ["Todo 3", "Todo 2"]
    assert all(t.completed for t in completed)
    assert [t.title for t in pending] == ["Todo 4", "Todo 1"]
    assert not any(t.completed for t in pending)


async def test_find_all_keeps_insertion_order_for_equal_timestamps(
    repository: InMemoryTodoRepository,
) -> None:
    frozen = SteppingClock(step=timedelta(0))
    service = TodoService(repository, now=frozen)
    for title in ("first", "second", "third"):
        await service.create(TodoCreate(title=title))

    todos = await service.find_all()

    assert [t.title for t in todos] == ["first", "second", "third"]


async def test_find_all_on_empty_store(service: TodoService) -> None:
    assert await service.find_all() == []
    assert await service.find_all("completed") == []


async def test_find_one_missing_raises(service: TodoService) -> None:
    with pytest.raises(NotFoundError) as exc_info:
        await service.find_one(9999)
    assert exc_info.value.todo_id == 9999
    assert "not found" in exc_info.value.message


# --- update ---


async def test_update_changes_only_supplied_fields(service: TodoService) -> None:
    created = await service.create(TodoCreate(title="Ship", priority=Priority.HIGH))
    created_at = created.created_at

    updated = await service.update(created.id, TodoUpdate(completed=True))

    assert updated.priority == "HIGH"
    assert updated.title == "Ship"
    assert updated.completed is True
    assert updated.created_at == created_at
    assert updated.updated_at > updated.created_at


async def test_update_can_clear_description(service: TodoService) -> None:
    created = await service.create(TodoCreate(title="Read", description="Chapter 3"))

    updated = await service.update(created.id, TodoUpdate(description=None))

    assert updated.description is None


async def test_update_trims_title(service: TodoService) -> None:
    created = await service.create(TodoCreate(title="Draft"))

    updated = await service.update(created.id, TodoUpdate(title="  Final  "))

    assert updated.title == "Final"


async def test_update_missing_raises_and_creates_nothing(
    service: TodoService, repository: InMemoryTodoRepository
) -> None:
    with pytest.raises(NotFoundError):
        await service.update(42, TodoUpdate(title="Ghost"))
    assert repository.todos == {}


@pytest.mark.parametrize(
    "patch",
    [
        TodoUpdate.model_construct(title="   "),
        TodoUpdate.model_construct(priority="URGENT"),
        TodoUpdate.model_construct(completed=None),
        TodoUpdate.model_construct(title=None),
    ],
)
async def test_update_rejects_invalid_fields_without_side_effects(
    service: TodoService, patch: TodoUpdate
) -> None:
    created = await service.create(TodoCreate(title="Keep me", priority=Priority.LOW))
    updated_at = created.updated_at

    with pytest.raises(ValidationError):
        await service.update(created.id, patch)

    todo = await service.find_one(created.id)
    assert todo.title == "Keep me"
    assert todo.priority == "LOW"
    assert todo.completed is False
    assert todo.updated_at == updated_at


async def test_update_rejects_mixed_valid_and_invalid_fields(service: TodoService) -> None:
    created = await service.create(TodoCreate(title="Keep me"))

    patch = TodoUpdate.model_construct(completed=True, priority="URGENT")
    with pytest.raises(ValidationError):
        await service.update(created.id, patch)

    assert (await service.find_one(created.id)).completed is False


async def test_update_never_moves_updated_at_before_created_at(
    repository: InMemoryTodoRepository,
) -> None:
    # A clock running backwards still yields updated_at > created_at
    clock = SteppingClock(step=timedelta(seconds=-5))
    service = TodoService(repository, now=clock)
    created = await service.create(TodoCreate(title="Time travel"))

    updated = await service.update(created.id, TodoUpdate(completed=True))

    assert updated.updated_at > updated.created_at


async def test_update_on_the_same_tick_still_advances_updated_at(
    repository: InMemoryTodoRepository,
) -> None:
    service = TodoService(repository, now=SteppingClock(step=timedelta(0)))
    created = await service.create(TodoCreate(title="Ship", priority=Priority.HIGH))

    updated = await service.update(created.id, TodoUpdate(completed=True))

    assert updated.priority == Priority.HIGH.value
    assert updated.updated_at > updated.created_at
    assert updated.updated_at - updated.created_at == timedelta(microseconds=1)


# --- remove ---


async def test_remove_returns_snapshot_and_deletes(service: TodoService) -> None:
    created = await service.create(TodoCreate(title="Todo to delete"))

    removed = await service.remove(created.id)

    assert removed.id == created.id
    assert removed.title == "Todo to delete"
    with pytest.raises(NotFoundError):
        await service.find_one(created.id)


async def test_remove_missing_raises(service: TodoService) -> None:
    with pytest.raises(NotFoundError):
        await service.remove(9999)


async def test_ids_are_not_reused_after_remove(service: TodoService) -> None:
    first = await service.create(TodoCreate(title="one"))
    await service.remove(first.id)

    second = await service.create(TodoCreate(title="two"))

    assert second.id != first.id


# --- stats ---


async def test_stats_on_empty_store(service: TodoService) -> None:
    stats = await service.stats()
    assert (stats.total, stats.completed, stats.pending) == (0, 0, 0)


async def test_stats_counts_completed_and_pending(service: TodoService) -> None:
    todos = [await service.create(TodoCreate(title=f"Todo {i}")) for i in range(3)]
    await service.update(todos[0].id, TodoUpdate(completed=True))

    stats = await service.stats()

    assert stats.model_dump() == {"total": 3, "completed": 1, "pending": 2}
    assert stats.total == stats.completed + stats.pending
