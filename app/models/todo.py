"""
Todo database model
SQLAlchemy model for todos
Reference: https://docs.sqlalchemy.org/en/20/orm/declarative_styles.html
"""
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Index, Integer, String, false, func
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base
from app.core.enums import Priority

# Note: priority is stored as String(10), not as a database enum
# Values are checked by the lifecycle rules before they reach the session


class Todo(Base):
    """
    Todo model representing a task in the database

    Attributes:
        id: Primary key, auto-incrementing integer (never reused)
        title: Todo title (required, trimmed, non-empty)
        description: Optional description, NULL when absent
        completed: Whether the todo is completed (default: False)
        priority: One of LOW, MEDIUM, HIGH (default: MEDIUM)
        created_at: Timestamp when the todo was created
        updated_at: Timestamp of the last successful update

    Reference: https://docs.sqlalchemy.org/en/20/orm/mapped_sql_expressions.html
    """
    __tablename__ = "todos"

    # sqlite_autoincrement keeps SQLite from handing out ids of deleted rows
    # Reference: https://docs.sqlalchemy.org/en/20/dialects/sqlite.html#sqlite-autoincrement-behavior
    __table_args__ = (
        Index("ix_todos_created_at", "created_at"),
        Index("ix_todos_completed", "completed"),
        {"sqlite_autoincrement": True},
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    completed: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=false(), nullable=False
    )
    priority: Mapped[str] = mapped_column(
        String(10),
        default=Priority.MEDIUM.value,
        server_default=Priority.MEDIUM.value,
        nullable=False,
    )

    # Timestamps are assigned by TodoService; server_default only covers
    # rows inserted outside the application (fixtures, manual SQL)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        """String representation of Todo"""
        return (
            f"<Todo(id={self.id}, title='{self.title}', "
            f"completed={self.completed}, priority={self.priority})>"
        )
