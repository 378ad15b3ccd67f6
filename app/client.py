"""
Async HTTP client for the Todo API
Python counterpart of the frontend's API module
Reference: https://www.python-httpx.org/async/
"""
import logging
from typing import Any, List, Optional, Union

import httpx

from app.api.v1.schemas.todo import TodoCreate, TodoResponse, TodoStats, TodoUpdate
from app.core.enums import TodoFilter
from app.core.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:3001"


class TodoClient:
    """
    Client for the /todos endpoints

    Usage:
        async with TodoClient("http://localhost:3001") as client:
            todo = await client.create_todo(TodoCreate(title="Buy groceries"))
            stats = await client.get_todo_stats()

    404 responses raise NotFoundError and 400 responses raise ValidationError;
    any other error status raises httpx.HTTPStatusError.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            headers={"Content-Type": "application/json"},
            transport=transport,
        )

    async def __aenter__(self) -> "TodoClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        todo_id: Optional[int] = None,
        **kwargs: Any,
    ) -> Any:
        response = await self._client.request(method, path, **kwargs)
        if response.status_code == httpx.codes.NOT_FOUND and todo_id is not None:
            raise NotFoundError(todo_id, _error_detail(response))
        if response.status_code == httpx.codes.BAD_REQUEST:
            raise ValidationError(_error_detail(response))
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError:
            logger.error(f"{method} {path} failed with status {response.status_code}")
            raise
        return response.json()

    async def get_all_todos(
        self, todo_filter: Union[str, TodoFilter, None] = None
    ) -> List[TodoResponse]:
        """
        List todos, newest first

        Args:
            todo_filter: "all", "completed", "pending" or None
        """
        params = {"filter": TodoFilter(todo_filter).value} if todo_filter else {}
        data = await self._request("GET", "/todos", params=params)
        return [TodoResponse.model_validate(item) for item in data]

    async def get_todo_stats(self) -> TodoStats:
        """Total, completed and pending counts computed by the server"""
        data = await self._request("GET", "/todos/stats")
        return TodoStats.model_validate(data)

    async def get_todo_by_id(self, todo_id: int) -> TodoResponse:
        data = await self._request("GET", f"/todos/{todo_id}", todo_id=todo_id)
        return TodoResponse.model_validate(data)

    async def create_todo(self, todo: TodoCreate) -> TodoResponse:
        data = await self._request(
            "POST", "/todos", json=todo.model_dump(mode="json", exclude_unset=True)
        )
        return TodoResponse.model_validate(data)

    async def update_todo(self, todo_id: int, todo: TodoUpdate) -> TodoResponse:
        """Send only the fields that were set on the update model"""
        data = await self._request(
            "PUT",
            f"/todos/{todo_id}",
            todo_id=todo_id,
            json=todo.model_dump(mode="json", exclude_unset=True),
        )
        return TodoResponse.model_validate(data)

    async def delete_todo(self, todo_id: int) -> TodoResponse:
        """Delete a todo; returns the server's snapshot of the deleted todo"""
        data = await self._request("DELETE", f"/todos/{todo_id}", todo_id=todo_id)
        return TodoResponse.model_validate(data)


def _error_detail(response: httpx.Response) -> str:
    # FastAPI error bodies look like {"detail": "..."} or {"detail": [{...}, ...]}
    try:
        body = response.json()
    except ValueError:
        return response.text
    detail = body.get("detail", body) if isinstance(body, dict) else body
    if isinstance(detail, list):
        return "; ".join(
            str(item.get("msg", item)) if isinstance(item, dict) else str(item)
            for item in detail
        )
    return str(detail)
