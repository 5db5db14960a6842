"""Declarative configuration schema for FeedMixer."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PositiveFloat,
    PositiveInt,
    PrivateAttr,
    StrictInt,
    field_validator,
)
from pydantic_core import PydanticUndefined


class StrictModel(BaseModel):
    """Base model enforcing strict validation rules."""

    model_config = ConfigDict(
        populate_by_name=True,
        extra="forbid",
        validate_assignment=True,
        str_strip_whitespace=True,
    )


class AppSettings(StrictModel):
    """Top-level runtime metadata."""

    environment: str = Field(
        default="development",
        description="Normalized deployment environment name.",
        examples=["production"],
    )
    debug: bool = Field(
        default=False,
        description="When true, enables verbose coloured logging.",
    )

    @field_validator("environment")
    @classmethod
    def _normalize_environment(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in {"development", "production", "staging", "test"}:
            raise ValueError(
                "environment must be one of: development, staging, production, test"
            )
        return normalized


class ServerConfig(StrictModel):
    """Bind address and route of the aggregation endpoint."""

    host: str = Field(
        default="127.0.0.1",
        description="Interface the HTTP server binds to.",
        examples=["0.0.0.0"],
    )
    port: int = Field(
        default=8080,
        ge=1,
        le=65535,
        description="TCP port the HTTP server listens on.",
    )
    request_path: str = Field(
        default="/",
        description="Path of the single aggregation endpoint.",
        examples=["/content"],
    )

    @field_validator("request_path")
    @classmethod
    def _ensure_leading_slash(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError("request_path must start with '/'")
        return value


class FeedsConfig(StrictModel):
    """Remote feeds merged on every request."""

    content_url: str = Field(
        description="URL of the content feed.",
        examples=["https://feeds.example.com/articles.json"],
    )
    advertisements_url: str = Field(
        description="URL of the advertisement feed.",
        examples=["https://feeds.example.com/ads.json"],
    )
    timeout_seconds: PositiveFloat = Field(
        default=3.0,
        description="Per-fetch timeout covering connect, read and body drain.",
    )

    @field_validator("content_url", "advertisements_url")
    @classmethod
    def _require_http_url(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError("feed URLs must start with http:// or https://")
        return value


class MixingConfig(StrictModel):
    """Interleaving rules."""

    ads_frequency: StrictInt = Field(
        gt=0,
        description="Number of content items between two advertisements.",
        examples=[5],
    )
    default_ad_label: str = Field(
        default="Ads",
        description="Type label of the placeholder used once advertisements run out.",
    )


class LoggingConfig(StrictModel):
    """loguru sink settings."""

    level: str = Field(default="INFO", description="Minimum log level.")
    file_path: Optional[Path] = Field(
        default=None,
        description="Optional log file; rotation and compression are applied.",
        examples=["logs/feedmixer.log"],
    )
    max_file_size_mb: PositiveInt = Field(
        default=10, description="Rotate the log file after this many megabytes."
    )
    retention_days: PositiveInt = Field(
        default=30, description="Delete rotated log files older than this."
    )

    @field_validator("level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        normalized = value.upper()
        if normalized not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level '{value}'")
        return normalized

    @field_validator("file_path", mode="before")
    @classmethod
    def _blank_path_is_unset(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class Config(StrictModel):
    """Root configuration object passed explicitly to the application."""

    app: AppSettings = Field(default_factory=AppSettings)
    server: ServerConfig = Field(default_factory=ServerConfig)
    feeds: FeedsConfig
    mixing: MixingConfig
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    _metadata: Any = PrivateAttr(default=None)

    def logging_options(self) -> dict[str, Any]:
        """Return the mapping consumed by ``FeedMixerLogger.configure_logging``."""

        return {
            "level": self.logging.level,
            "file_path": str(self.logging.file_path) if self.logging.file_path else None,
            "max_file_size": f"{self.logging.max_file_size_mb} MB",
            "retention": f"{self.logging.retention_days} days",
            "debug": self.app.debug,
        }

    def summary(self) -> dict[str, Any]:
        """Short, secret-free description logged at startup."""

        return {
            "environment": self.app.environment,
            "bind": f"{self.server.host}:{self.server.port}",
            "request_path": self.server.request_path,
            "content_url": self.feeds.content_url,
            "advertisements_url": self.feeds.advertisements_url,
            "ads_frequency": self.mixing.ads_frequency,
            "default_ad_label": self.mixing.default_ad_label,
        }


def iter_field_docs(
    model: type[BaseModel] = Config,
    prefix: str = "",
) -> Iterable[dict[str, object]]:
    """Yield flattened schema documentation entries."""

    for name, field in model.model_fields.items():
        key = f"{prefix}{name}" if not prefix else f"{prefix}.{name}"
        annotation = field.annotation
        is_nested = isinstance(annotation, type) and issubclass(annotation, BaseModel)
        default: object = None
        if not is_nested and field.default is not PydanticUndefined:
            default = field.default
        entry: dict[str, object] = {
            "name": key,
            "type": getattr(annotation, "__name__", str(annotation)),
            "description": field.description or "",
            "default": default,
            "required": field.is_required(),
            "examples": field.examples or [],
            "constraints": _describe_constraints(field),
            "is_nested": is_nested,
        }
        yield entry
        if is_nested:
            yield from iter_field_docs(annotation, key)


def _describe_constraints(field: Any) -> str:
    """Return a human readable description of field constraints."""

    comparators = {"ge": ">=", "gt": ">", "le": "<=", "lt": "<"}
    parts: list[str] = []
    for item in field.metadata:
        for attr, comparator in comparators.items():
            bound = getattr(item, attr, None)
            if bound is not None:
                parts.append(f"{comparator} {bound}")
    return ", ".join(parts)


__all__ = [
    "AppSettings",
    "Config",
    "FeedsConfig",
    "LoggingConfig",
    "MixingConfig",
    "ServerConfig",
    "StrictModel",
    "iter_field_docs",
]
