"""HTTP client for the task tracker API."""

import logging
from typing import Any

import httpx

from tasktracker.client.session import ClientSession
from tasktracker.schemas.auth import AuthResponse, UserResponse
from tasktracker.schemas.enums import TaskStatus
from tasktracker.schemas.task import TaskCreate, TaskResponse, TaskStats, TaskUpdate

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000"


class ApiError(Exception):
    """A request failed; ``status_code`` is 0 for transport failures."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}" if status_code else message)


class SessionExpiredError(ApiError):
    """The server rejected the bearer token; the session has been cleared."""


class TaskTrackerClient:
    """Thin wrapper over the REST API bound to one ``ClientSession``.

    Protected calls carry the session's bearer token. A 401 that challenges the
    token clears the session and raises ``SessionExpiredError``; nothing is
    retried.
    """

    def __init__(
        self,
        session: ClientSession,
        base_url: str = DEFAULT_BASE_URL,
        http: httpx.Client | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.session = session
        self._owns_http = http is None
        self.http = http if http is not None else httpx.Client(base_url=base_url, timeout=timeout)

    def close(self) -> None:
        if self._owns_http:
            self.http.close()

    def __enter__(self) -> "TaskTrackerClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            detail = response.json().get("detail")
        except ValueError:
            detail = None
        return str(detail) if detail else response.reason_phrase

    def _request(self, method: str, path: str, protected: bool = True, **kwargs: Any) -> Any:
        if protected:
            if not self.session.is_authenticated:
                raise SessionExpiredError(401, "Not signed in")
            kwargs["headers"] = {**kwargs.get("headers", {}), **self.session.auth_headers()}

        try:
            response = self.http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"HTTP error calling {method} {path}: {e}")
            raise ApiError(0, str(e)) from e

        if response.status_code == 401 and protected and "www-authenticate" in response.headers:
            self.session.sign_out()
            raise SessionExpiredError(401, self._error_message(response))

        if response.is_error:
            raise ApiError(response.status_code, self._error_message(response))

        return response.json()

    # Auth

    def register(self, name: str, email: str, password: str) -> UserResponse:
        data = self._request(
            "POST",
            "/api/auth/register",
            protected=False,
            json={"name": name, "email": email, "password": password},
        )
        auth = AuthResponse.model_validate(data)
        self.session.sign_in(auth)
        return self.session.user

    def login(self, email: str, password: str) -> UserResponse:
        data = self._request(
            "POST",
            "/api/auth/login",
            protected=False,
            json={"email": email, "password": password},
        )
        auth = AuthResponse.model_validate(data)
        self.session.sign_in(auth)
        return self.session.user

    def logout(self) -> None:
        """Discard the token locally; the server keeps no session."""
        self.session.sign_out()

    def me(self) -> UserResponse:
        return UserResponse.model_validate(self._request("GET", "/api/auth/me"))

    def update_profile(
        self,
        name: str | None = None,
        email: str | None = None,
        password: str | None = None,
    ) -> UserResponse:
        payload = {
            key: value
            for key, value in {"name": name, "email": email, "password": password}.items()
            if value is not None
        }
        user = UserResponse.model_validate(self._request("PUT", "/api/auth/profile", json=payload))
        self.session.update_user(user)
        return user

    def delete_account(self) -> int:
        """Delete the account and its tasks, then sign out. Returns the task count removed."""
        data = self._request("DELETE", "/api/auth/profile")
        self.session.sign_out()
        return data["deleted_tasks"]

    # Tasks

    def list_tasks(
        self, status: TaskStatus | None = None, search: str | None = None
    ) -> list[TaskResponse]:
        params = {}
        if status is not None:
            params["status"] = status.value
        if search:
            params["search"] = search
        data = self._request("GET", "/api/tasks", params=params)
        return [TaskResponse.model_validate(item) for item in data]

    def calendar(self, year: int, month: int) -> list[TaskResponse]:
        data = self._request("GET", "/api/tasks/calendar", params={"year": year, "month": month})
        return [TaskResponse.model_validate(item) for item in data]

    def stats(self) -> TaskStats:
        return TaskStats.model_validate(self._request("GET", "/api/tasks/stats"))

    def create_task(self, task: TaskCreate) -> TaskResponse:
        data = self._request("POST", "/api/tasks", json=task.model_dump(mode="json"))
        return TaskResponse.model_validate(data)

    def update_task(self, task_id: str, changes: TaskUpdate) -> TaskResponse:
        data = self._request(
            "PUT", f"/api/tasks/{task_id}", json=changes.model_dump(mode="json", exclude_unset=True)
        )
        return TaskResponse.model_validate(data)

    def delete_task(self, task_id: str) -> None:
        self._request("DELETE", f"/api/tasks/{task_id}")
