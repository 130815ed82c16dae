"""Public session adapter exports."""

from dynamo_sessions.adapter import DynamoDBAdapter
from dynamo_sessions.config import AdapterSettings, configure_structlog, create_adapter
from dynamo_sessions.exceptions import AdapterConfigurationError, SessionAdapterError
from dynamo_sessions.types import DatabaseSession, DatabaseUser, SessionAdapter

__all__ = [
    "AdapterConfigurationError",
    "AdapterSettings",
    "DatabaseSession",
    "DatabaseUser",
    "DynamoDBAdapter",
    "SessionAdapter",
    "SessionAdapterError",
    "configure_structlog",
    "create_adapter",
]
