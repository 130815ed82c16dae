"""Translation between logical sessions and DynamoDB session items."""

from __future__ import annotations

import math
from collections.abc import Mapping
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

from boto3.dynamodb.types import Binary, TypeDeserializer, TypeSerializer

from dynamo_sessions.types import AttributeValue, DatabaseSession, DynamoDBSessionItem

_serializer = TypeSerializer()
_deserializer = TypeDeserializer()


def _as_utc(value: datetime) -> datetime:
    """Return an aware UTC datetime, treating naive values as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def serialize_timestamp(value: datetime) -> str:
    """Render a datetime as ISO-8601 UTC with millisecond precision and a Z suffix."""
    return _as_utc(value).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    """Parse a stored ISO-8601 timestamp into an aware UTC datetime."""
    return _as_utc(datetime.fromisoformat(value))


def session_ttl(expires_at: datetime) -> int:
    """Return the DynamoDB TTL value (whole epoch seconds) for an expiry time."""
    return math.floor(_as_utc(expires_at).timestamp())


def to_dynamodb_session(session: DatabaseSession) -> DynamoDBSessionItem:
    """Map a logical session to its stored item, deriving the TTL attribute."""
    return {
        "id": session.id,
        "userId": session.user_id,
        "expiresAt": serialize_timestamp(session.expires_at),
        "attributes": dict(session.attributes),
        "ttl": session_ttl(session.expires_at),
    }


def from_dynamodb_session(item: Mapping[str, Any]) -> DatabaseSession:
    """Map a stored item back to a logical session; ``ttl`` is dropped."""
    return DatabaseSession(
        id=str(item["id"]),
        user_id=str(item["userId"]),
        expires_at=parse_timestamp(str(item["expiresAt"])),
        attributes=dict(item.get("attributes") or {}),
    )


def _to_dynamo_value(value: Any) -> Any:
    """Prepare plain Python values for the DynamoDB serializer."""
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, Mapping):
        return {str(key): _to_dynamo_value(inner) for key, inner in value.items()}
    if isinstance(value, list | tuple):
        return [_to_dynamo_value(inner) for inner in value]
    if isinstance(value, set | frozenset):
        return {_to_dynamo_value(inner) for inner in value}
    return value


def _from_dynamo_value(value: Any) -> Any:
    """Convert deserialized DynamoDB values back to plain Python values."""
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, Binary):
        return value.value
    if isinstance(value, dict):
        return {key: _from_dynamo_value(inner) for key, inner in value.items()}
    if isinstance(value, list):
        return [_from_dynamo_value(inner) for inner in value]
    if isinstance(value, set):
        return {_from_dynamo_value(inner) for inner in value}
    return value


def marshall(item: Mapping[str, Any]) -> dict[str, AttributeValue]:
    """Convert a plain mapping into DynamoDB attribute-value JSON."""
    return {key: _serializer.serialize(_to_dynamo_value(value)) for key, value in item.items()}


def unmarshall(item: Mapping[str, AttributeValue]) -> dict[str, Any]:
    """Convert DynamoDB attribute-value JSON into a plain mapping."""
    return {
        key: _from_dynamo_value(_deserializer.deserialize(value)) for key, value in item.items()
    }
