"""Adapter settings and logging configuration."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from functools import lru_cache
from typing import Any, Literal

import structlog
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from dynamo_sessions.adapter import DynamoDBAdapter
from dynamo_sessions.types import DynamoDBClient, UserLookup

_LOG_CONTEXT: dict[str, str] = {"environment": "development", "service": "session-adapter"}


class AdapterSettings(BaseSettings):
    """Session table settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SESSION_ADAPTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    session_table_name: str = "sessions"
    session_user_index_name: str = "userId-index"
    environment: Literal["development", "staging", "production"] = "development"
    service: str = "session-adapter"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    @field_validator("session_table_name", "session_user_index_name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        """Reject blank table and index names."""
        value = value.strip()
        if not value:
            raise ValueError("table and index names must not be blank.")
        return value


def _standard_log_fields(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Inject required structured logging fields."""
    event_dict.setdefault("environment", _LOG_CONTEXT["environment"])
    event_dict.setdefault("service", _LOG_CONTEXT["service"])
    event_dict.setdefault("timestamp", datetime.now(UTC).isoformat())
    return event_dict


def configure_structlog(settings: AdapterSettings) -> None:
    """Configure structlog for JSON output with required fields."""
    _LOG_CONTEXT["environment"] = settings.environment
    _LOG_CONTEXT["service"] = settings.service

    log_level = getattr(logging, settings.log_level, logging.INFO)
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            _standard_log_fields,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


@lru_cache
def get_settings() -> AdapterSettings:
    """Load and cache adapter settings from environment variables."""
    return AdapterSettings()


def create_adapter(
    client: DynamoDBClient,
    get_user: UserLookup,
    settings: AdapterSettings | None = None,
) -> DynamoDBAdapter:
    """Build an adapter for an open client using configured table names."""
    settings = settings or get_settings()
    return DynamoDBAdapter(
        client=client,
        session_table_name=settings.session_table_name,
        session_user_index_name=settings.session_user_index_name,
        get_user=get_user,
    )
