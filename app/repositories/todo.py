"""
Todo repository
Persistence collaborator for the todo lifecycle rules
Reference: https://docs.sqlalchemy.org/en/20/orm/queryguide/select.html
"""
import logging
from typing import List, Optional, Tuple

from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.todo import Todo

logger = logging.getLogger(__name__)


class TodoRepository:
    """
    Data-mapping layer over the todos table

    Flushes but never commits - the get_db() dependency owns the transaction.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def add(self, todo: Todo) -> Todo:
        """
        Insert a new todo

        Flush sends the INSERT and populates the database-generated ID
        """
        self.db.add(todo)
        await self.db.flush()
        return todo

    async def get(self, todo_id: int) -> Optional[Todo]:
        """Return the todo with the given ID, or None"""
        result = await self.db.execute(select(Todo).where(Todo.id == todo_id))
        return result.scalar_one_or_none()

    async def find_many(self, completed: Optional[bool] = None) -> List[Todo]:
        """
        Return todos, newest first

        Args:
            completed: Optional equality filter on completion status

        Todos created at the same instant keep their insertion order
        """
        query = select(Todo)
        if completed is not None:
            query = query.where(Todo.completed == completed)
        query = query.order_by(Todo.created_at.desc(), Todo.id.asc())

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def save(self, todo: Todo) -> Todo:
        """Flush pending changes of an already persisted todo"""
        await self.db.flush()
        return todo

    async def delete(self, todo: Todo) -> None:
        """Hard delete a todo"""
        await self.db.delete(todo)
        await self.db.flush()

    async def counts(self) -> Tuple[int, int]:
        """
        Return (total, completed) from one aggregate query

        Both counts come from the same SELECT so they describe the same snapshot
        """
        query = select(
            func.count(Todo.id),
            func.coalesce(func.sum(case((Todo.completed.is_(True), 1), else_=0)), 0),
        )
        result = await self.db.execute(query)
        total, completed = result.one()
        logger.debug(f"Counted todos: total={total}, completed={completed}")
        return int(total), int(completed)
