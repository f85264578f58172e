"""Python client for the task tracker API."""

from tasktracker.client.api import ApiError, SessionExpiredError, TaskTrackerClient
from tasktracker.client.board import TaskBoard
from tasktracker.client.session import ClientSession, TokenStore, resolve_route

__all__ = [
    "ApiError",
    "SessionExpiredError",
    "TaskTrackerClient",
    "TaskBoard",
    "ClientSession",
    "TokenStore",
    "resolve_route",
]
