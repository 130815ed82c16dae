"""Session adapter data contract types."""

from __future__ import annotations

from collections.abc import Awaitable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Protocol, TypedDict

DatabaseUser = Mapping[str, Any]
AttributeValue = dict[str, Any]


@dataclass
class DatabaseSession:
    """Logical session record exchanged with the authentication library."""

    id: str
    user_id: str
    expires_at: datetime
    attributes: dict[str, Any] = field(default_factory=dict)


class DynamoDBSessionItem(TypedDict):
    """Physical session item as stored in the sessions table."""

    id: str
    userId: str
    expiresAt: str
    attributes: dict[str, Any]
    ttl: int


class UserLookup(Protocol):
    """Callback resolving the owner of a session."""

    def __call__(self, user_id: str) -> DatabaseUser | None | Awaitable[DatabaseUser | None]: ...


class DynamoDBClient(Protocol):
    """Subset of the async low-level DynamoDB client used by the adapter."""

    async def get_item(self, **kwargs: Any) -> dict[str, Any]: ...

    async def put_item(self, **kwargs: Any) -> dict[str, Any]: ...

    async def delete_item(self, **kwargs: Any) -> dict[str, Any]: ...

    async def query(self, **kwargs: Any) -> dict[str, Any]: ...


class SessionAdapter(Protocol):
    """Persistence contract expected by the authentication library."""

    async def delete_expired_sessions(self) -> None: ...

    async def delete_session(self, session_id: str) -> None: ...

    async def delete_user_sessions(self, user_id: str) -> None: ...

    async def get_session(self, session_id: str) -> DatabaseSession | None: ...

    async def get_session_and_user(
        self, session_id: str
    ) -> tuple[DatabaseSession, DatabaseUser] | tuple[None, None]: ...

    async def get_user_sessions(self, user_id: str) -> list[DatabaseSession]: ...

    async def set_session(self, session: DatabaseSession) -> None: ...

    async def update_session_expiration(self, session_id: str, expires_at: datetime) -> None: ...
