"""
Enumerations shared by the model, the schemas and the API client
"""
from enum import Enum


class Priority(str, Enum):
    """Todo priority enumeration."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class TodoFilter(str, Enum):
    """Filter tokens accepted by the todo listing."""

    ALL = "all"
    COMPLETED = "completed"
    PENDING = "pending"
