"""DynamoDB-backed session adapter for the authentication library."""

from __future__ import annotations

import inspect
from datetime import datetime
from typing import Any

import structlog

from dynamo_sessions.exceptions import AdapterConfigurationError
from dynamo_sessions.mapping import (
    from_dynamodb_session,
    marshall,
    to_dynamodb_session,
    unmarshall,
)
from dynamo_sessions.types import DatabaseSession, DatabaseUser, DynamoDBClient, UserLookup

logger = structlog.get_logger(__name__)


class DynamoDBAdapter:
    """Session persistence over a DynamoDB table with a ``userId`` index and TTL."""

    def __init__(
        self,
        client: DynamoDBClient,
        session_table_name: str,
        session_user_index_name: str,
        get_user: UserLookup,
    ) -> None:
        if client is None:
            raise AdapterConfigurationError("DynamoDB client is required.", "client")
        if not session_table_name:
            raise AdapterConfigurationError(
                "Session table name is required.", "session_table_name"
            )
        if not session_user_index_name:
            raise AdapterConfigurationError(
                "Session user index name is required.", "session_user_index_name"
            )
        if get_user is None:
            raise AdapterConfigurationError("User lookup callback is required.", "get_user")
        self._client = client
        self._session_table_name = session_table_name
        self._session_user_index_name = session_user_index_name
        self._get_user = get_user

    async def delete_expired_sessions(self) -> None:
        """No-op: expired items are removed by the table's TTL sweep."""
        logger.debug("expired_sessions_skipped", table=self._session_table_name, reason="ttl")

    async def delete_session(self, session_id: str) -> None:
        """Delete a session item; missing items are ignored by DynamoDB."""
        await self._client.delete_item(
            TableName=self._session_table_name,
            Key=self._session_key(session_id),
        )

    async def delete_user_sessions(self, user_id: str) -> None:
        """Delete every session owned by a user, one item at a time."""
        sessions = await self.get_user_sessions(user_id)
        for session in sessions:
            await self.delete_session(session.id)
        logger.debug("user_sessions_deleted", user_id=user_id, count=len(sessions))

    async def get_session(self, session_id: str) -> DatabaseSession | None:
        """Fetch a session by id, returning None when it does not exist."""
        response = await self._client.get_item(
            TableName=self._session_table_name,
            Key=self._session_key(session_id),
        )
        item = response.get("Item")
        if not item:
            return None
        return from_dynamodb_session(unmarshall(item))

    async def get_session_and_user(
        self, session_id: str
    ) -> tuple[DatabaseSession, DatabaseUser] | tuple[None, None]:
        """Fetch a session with its owning user; both or neither are returned."""
        session = await self.get_session(session_id)
        if session is None:
            return None, None

        user = await self._lookup_user(session.user_id)
        if user is None:
            return None, None
        return session, user

    async def get_user_sessions(self, user_id: str) -> list[DatabaseSession]:
        """Query the user index for all sessions owned by a user."""
        query: dict[str, Any] = {
            "TableName": self._session_table_name,
            "IndexName": self._session_user_index_name,
            "KeyConditionExpression": "userId = :userId",
            "ExpressionAttributeValues": {":userId": {"S": user_id}},
        }
        sessions: list[DatabaseSession] = []
        while True:
            response = await self._client.query(**query)
            sessions.extend(
                from_dynamodb_session(unmarshall(item)) for item in response.get("Items", [])
            )
            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                return sessions
            query["ExclusiveStartKey"] = last_key

    async def set_session(self, session: DatabaseSession) -> None:
        """Create or fully overwrite a session item."""
        await self._client.put_item(
            TableName=self._session_table_name,
            Item=marshall(to_dynamodb_session(session)),
        )

    async def update_session_expiration(self, session_id: str, expires_at: datetime) -> None:
        """Rewrite a session with a new expiry; missing sessions are left alone."""
        session = await self.get_session(session_id)
        if session is None:
            return
        session.expires_at = expires_at
        await self.set_session(session)

    async def _lookup_user(self, user_id: str) -> DatabaseUser | None:
        """Resolve a user, treating lookup failures as an absent user."""
        try:
            result = self._get_user(user_id)
            return await result if inspect.isawaitable(result) else result
        except Exception:
            logger.warning("session_user_lookup_failed", user_id=user_id, exc_info=True)
            return None

    @staticmethod
    def _session_key(session_id: str) -> dict[str, dict[str, str]]:
        """Build the primary key for a session item."""
        return {"id": {"S": session_id}}
