"""Configuration management for ssestream."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ssestream.core.exceptions import ConfigurationError

PAYLOAD_TYPES = (str, bytes, bytearray, memoryview, Mapping)


class SSESettings(BaseSettings):
    """
    Transport-level settings shared by every connection.

    Can be loaded from:
    - Environment variables (prefix: SSE_)
    - A .env file in the working directory
    - Direct initialization

    Example:
        >>> settings = SSESettings(connect_timeout=5.0)
        >>> settings = SSESettings()  # SSE_TRANSPORT=httpx-async etc.
    """

    model_config = SettingsConfigDict(
        env_prefix="SSE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_default=True,
    )

    transport: str = Field(
        default="httpx",
        description="Registered transport name (httpx, httpx-async)",
    )
    connect_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Seconds to wait for the connection to be established",
    )
    read_timeout: float | None = Field(
        default=None,
        description="Seconds to wait between body chunks (None = wait forever)",
    )
    verify: bool = Field(
        default=True,
        description="Verify TLS certificates",
    )
    follow_redirects: bool = Field(
        default=True,
        description="Follow HTTP redirects before the stream starts",
    )
    max_connect_retries: int = Field(
        default=0,
        ge=0,
        description="Extra attempts when establishing the response fails to connect",
    )
    user_agent: str | None = Field(
        default=None,
        description="User-Agent header sent with every request",
    )

    def __repr__(self) -> str:
        return (
            f"SSESettings(transport={self.transport!r}, "
            f"connect_timeout={self.connect_timeout}, read_timeout={self.read_timeout})"
        )


class SSEOptions(BaseModel):
    """
    Per-connection options.

    Attributes:
        headers: Request headers, applied in order
        payload: Request body (str, bytes-like, or a form mapping)
        method: HTTP method; defaults to POST when a payload is given, GET otherwise
        with_credentials: Attach the transport's cookies/auth to the request
        start: Begin streaming as soon as the connection object is created
        debug: Log raw chunks and dispatched events
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="forbid")

    headers: dict[str, str] = Field(default_factory=dict)
    payload: Any = ""
    method: str | None = None
    with_credentials: bool = False
    start: bool = True
    debug: bool = False

    @field_validator("payload")
    @classmethod
    def validate_payload(cls, v: Any) -> Any:
        """Accept only body shapes the transports know how to encode."""
        if v is None:
            return ""
        if not isinstance(v, PAYLOAD_TYPES):
            raise ValueError(
                f"Unsupported payload type {type(v).__name__}; expected str, bytes-like or mapping"
            )
        return v

    @model_validator(mode="after")
    def default_method(self) -> SSEOptions:
        """Derive the HTTP method from the payload when not given."""
        if not self.method:
            self.method = "POST" if self.payload else "GET"
        else:
            self.method = self.method.upper()
        return self

    @classmethod
    def build(cls, options: SSEOptions | Mapping[str, Any] | None = None, **overrides: Any) -> SSEOptions:
        """
        Build options from an existing instance, a mapping, or keyword overrides.

        Raises:
            ConfigurationError: If validation fails
        """
        if isinstance(options, SSEOptions):
            if not overrides:
                return options
            data = options.model_dump()
        else:
            data = dict(options or {})
        data.update(overrides)
        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid SSE options: {e}") from e


__all__ = [
    "SSEOptions",
    "SSESettings",
]
