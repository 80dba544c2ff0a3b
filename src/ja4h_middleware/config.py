"""Configuration module for JA4H middleware.

This module provides the JA4HConfig class that controls where the
fingerprint is injected, which headers the fingerprint ignores, and how the
protocol version is resolved.

Example:
    Basic usage with defaults:

        >>> config = JA4HConfig()
        >>> config.header_name
        'X-JA4H-Fingerprint'

    Custom configuration:

        >>> config = JA4HConfig(
        ...     header_name="X-Client-FP",
        ...     http_version_custom_header="X-Forwarded-Proto-Version",
        ...     ignore_headers=["X-Request-ID", "X-Amzn-Trace-Id"],
        ...     include_raw=True,
        ... )

    Loading from environment:

        >>> import os
        >>> os.environ['JA4H_IGNORE_HEADERS'] = 'x-request-id,via'
        >>> os.environ['JA4H_INCLUDE_RAW'] = 'true'
        >>> config = JA4HConfig.from_env()

    Loading from dictionary:

        >>> config = JA4HConfig.from_dict({'trim_xff_header_count': 1})
"""

import os
from typing import Any

from pydantic import BaseModel, Field, field_validator

from ja4h_middleware.models import FingerprintOptions
from ja4h_middleware.utils.headers import ascii_lower

RAW_HEADER_SUFFIX = "-Raw"


class JA4HConfig(BaseModel):
    """Configuration for JA4H middleware.

    Attributes:
        header_name: Request header the compact fingerprint is injected
            into. The raw form, when enabled, uses the same name suffixed
            with "-Raw". Default is "X-JA4H-Fingerprint".
        http_version_custom_header: Name of a request header whose value
            overrides the transport-detected HTTP version, e.g. when a load
            balancer terminates HTTP/2 and forwards HTTP/1.1. Default is None.
        ignore_headers: Header names excluded from the header count and the
            header name list. Case-insensitive, normalized to lowercase.
            Default is empty.
        trim_xff_header_count: Number of right-most X-Forwarded-For entries
            removed before the request reaches the application, for reverse
            proxies in front of the service. Does not affect the fingerprint.
            Default is 0.
        include_raw: Also inject the raw fingerprint. Default is False.
        response_debug_headers: Mirror the compact and raw fingerprints onto
            the response. Default is False.

    Note:
        This class is immutable (frozen=True). Create a new instance if you
        need different settings.
    """

    header_name: str = Field(
        default="X-JA4H-Fingerprint",
        description="Header name to store the JA4H fingerprint",
    )
    http_version_custom_header: str | None = Field(
        default=None,
        description="Custom header name containing HTTP version",
    )
    ignore_headers: list[str] = Field(
        default_factory=list,
        description="List of headers to ignore",
    )
    trim_xff_header_count: int = Field(
        default=0,
        description="Number of X-Forwarded-For IPs to trim from the right side",
    )
    include_raw: bool = Field(
        default=False,
        description="Include raw fingerprint in a <header_name>-Raw header",
    )
    response_debug_headers: bool = Field(
        default=False,
        description="Add fingerprint and raw headers to the downstream response",
    )

    model_config = {"frozen": True}

    @field_validator("header_name")
    @classmethod
    def validate_header_name(cls, v: str) -> str:
        """Validate the output header name is non-empty.

        Raises:
            ValueError: If the name is blank or contains whitespace.
        """
        v = v.strip()
        if not v:
            raise ValueError("header_name must not be empty")
        if any(c.isspace() for c in v) or ":" in v:
            raise ValueError(f"header_name is not a valid header name: {v!r}")
        return v

    @field_validator("http_version_custom_header")
    @classmethod
    def validate_http_version_custom_header(cls, v: str | None) -> str | None:
        """Treat a blank override header name as not configured."""
        if v is None or not v.strip():
            return None
        return v.strip()

    @field_validator("ignore_headers", mode="before")
    @classmethod
    def validate_ignore_headers(cls, v: Any) -> list[str]:
        """Validate and normalize ignored header names.

        Args:
            v: List of header names or comma-separated string.

        Returns:
            List of lowercase header names.

        Example:
            >>> config = JA4HConfig(ignore_headers="X-Request-ID, Via")
            >>> config.ignore_headers
            ['x-request-id', 'via']
        """
        if v is None:
            return []

        if isinstance(v, str):
            # Handle comma-separated string (from environment variables)
            v = [header.strip() for header in v.split(",")]

        if not isinstance(v, list | tuple | set | frozenset):
            raise ValueError("ignore_headers must be a list or comma-separated string")

        return [ascii_lower(header.strip()) for header in v if header.strip()]

    @field_validator("trim_xff_header_count")
    @classmethod
    def validate_trim_xff_header_count(cls, v: int) -> int:
        """Validate the trim count is non-negative.

        Raises:
            ValueError: If value is negative.
        """
        if v < 0:
            raise ValueError(f"trim_xff_header_count must be >= 0, got {v}")
        return v

    @property
    def raw_header_name(self) -> str:
        """Name of the header carrying the raw fingerprint."""
        return f"{self.header_name}{RAW_HEADER_SUFFIX}"

    def to_options(self) -> FingerprintOptions:
        """Build the fingerprint options this configuration implies.

        Example:
            >>> JA4HConfig(ignore_headers=["Via"]).to_options().ignored_headers
            frozenset({'via'})
        """
        return FingerprintOptions(
            ignored_headers=frozenset(self.ignore_headers),
            protocol_version_header=self.http_version_custom_header,
        )

    @classmethod
    def from_env(cls, prefix: str = "JA4H_") -> "JA4HConfig":
        """Create configuration from environment variables.

        Variable names are uppercase field names with the prefix, e.g.
        ``JA4H_HEADER_NAME``. Missing variables use the defaults.

        Args:
            prefix: Prefix for environment variable names. Default is "JA4H_".

        Returns:
            JA4HConfig instance populated from environment variables.

        Example:
            >>> import os
            >>> os.environ['JA4H_HEADER_NAME'] = 'X-FP'
            >>> os.environ['JA4H_TRIM_XFF_HEADER_COUNT'] = '2'
            >>> config = JA4HConfig.from_env()
            >>> config.trim_xff_header_count
            2
        """
        config_dict: dict[str, Any] = {}

        # Map of field names to their types for proper conversion
        field_types = {
            "header_name": str,
            "http_version_custom_header": str,
            "ignore_headers": list,
            "trim_xff_header_count": int,
            "include_raw": bool,
            "response_debug_headers": bool,
        }

        for field_name, field_type in field_types.items():
            env_var = f"{prefix}{field_name.upper()}"
            env_value = os.environ.get(env_var)

            if env_value is not None:
                if field_type is int:
                    config_dict[field_name] = int(env_value)
                else:
                    # pydantic parses "true"/"false"/"1"/"0" for booleans and
                    # the ignore_headers validator splits comma-separated lists
                    config_dict[field_name] = env_value

        return cls(**config_dict)

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "JA4HConfig":
        """Create configuration from a dictionary.

        Args:
            config_dict: Dictionary with configuration values.

        Returns:
            JA4HConfig instance populated from the dictionary.

        Raises:
            ValidationError: If the dictionary contains invalid values.
        """
        return cls(**config_dict)
