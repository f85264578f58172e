"""Client-side session state.

A ``ClientSession`` is created once per running client and handed to whatever
needs it. Only ``sign_in`` and ``sign_out`` change it; everything else reads.
"""

import json
import logging
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from tasktracker.schemas.auth import AuthResponse, UserResponse

logger = logging.getLogger(__name__)

LOGIN_ROUTE = "/login"
REGISTER_ROUTE = "/register"
DASHBOARD_ROUTE = "/dashboard"
PUBLIC_ROUTES = (LOGIN_ROUTE, REGISTER_ROUTE)


class TokenStore:
    """Persists the token and user summary between client runs."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> AuthResponse | None:
        """Read the persisted session, ignoring missing or corrupt files."""
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

        try:
            return AuthResponse.model_validate(json.loads(raw))
        except (json.JSONDecodeError, PydanticValidationError):
            logger.warning(f"Ignoring unreadable session file {self.path}")
            return None

    def save(self, auth: AuthResponse) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(auth.model_dump_json(), encoding="utf-8")

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


class ClientSession:
    """Current identity and bearer token of a running client."""

    def __init__(self, store: TokenStore | None = None):
        self._store = store
        self._user: UserResponse | None = None
        self._token: str | None = None

    @classmethod
    def restore(cls, store: TokenStore) -> "ClientSession":
        """Build a session initialized from any previously persisted token."""
        session = cls(store)
        persisted = store.load()
        if persisted is not None:
            session._set(persisted)
        return session

    @property
    def user(self) -> UserResponse | None:
        return self._user

    @property
    def token(self) -> str | None:
        return self._token

    @property
    def is_authenticated(self) -> bool:
        return self._token is not None

    def auth_headers(self) -> dict[str, str]:
        """Headers to attach to a protected request."""
        if self._token is None:
            return {}
        return {"Authorization": f"Bearer {self._token}"}

    def sign_in(self, auth: AuthResponse) -> None:
        """Adopt the identity and token returned by register or login."""
        self._set(auth)
        if self._store is not None:
            self._store.save(auth)

    def update_user(self, user: UserResponse) -> None:
        """Replace the cached user summary after a profile change."""
        if self._token is None:
            return
        self._user = user
        if self._store is not None:
            self._store.save(AuthResponse(**user.model_dump(), token=self._token))

    def sign_out(self) -> None:
        """Forget the identity and discard the token."""
        self._user = None
        self._token = None
        if self._store is not None:
            self._store.clear()

    def _set(self, auth: AuthResponse) -> None:
        self._user = UserResponse.model_validate(auth.model_dump())
        self._token = auth.token


def resolve_route(session: ClientSession, path: str) -> str:
    """Route gating: where a request for ``path`` should actually land."""
    if path in PUBLIC_ROUTES:
        return DASHBOARD_ROUTE if session.is_authenticated else path
    if path == DASHBOARD_ROUTE:
        return path if session.is_authenticated else LOGIN_ROUTE
    return resolve_route(session, LOGIN_ROUTE)
