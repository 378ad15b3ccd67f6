"""
Domain exceptions raised by the todo lifecycle rules
Routes translate these into HTTP responses (400 / 404)
"""


class TodoError(Exception):
    """
    Base class for recoverable todo errors
    """
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class ValidationError(TodoError):
    """
    Exception raised when input fails a domain rule
    (empty title, unknown priority, unknown filter token)
    """


class NotFoundError(TodoError):
    """
    Exception raised when the referenced todo does not exist
    """
    def __init__(self, todo_id: int, message: str | None = None):
        self.todo_id = todo_id
        super().__init__(message or f"Todo with ID {todo_id} not found")
