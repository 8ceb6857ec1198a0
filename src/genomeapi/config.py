"""Configuration for genomeapi, loaded from environment variables."""

import os
from dataclasses import dataclass

from .constants import (
    DEFAULT_DATABASE_URL,
    DEFAULT_EMAIL_PASSWORD_ENABLED,
    DEFAULT_HOST,
    DEFAULT_ISSUER_URL,
    DEFAULT_LOG_LEVEL,
    DEFAULT_PORT,
    DEFAULT_RATE_LIMIT_MAX_REQUESTS,
    DEFAULT_RATE_LIMIT_WINDOW_SECONDS,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_REQUIRE_EMAIL_VERIFICATION,
    DEFAULT_RESOURCE_SERVER_URL,
    DEFAULT_SESSION_EXPIRES_IN_SECONDS,
    DEFAULT_SESSION_UPDATE_AGE_SECONDS,
    DEFAULT_TRANSPORT,
)

VALID_TRANSPORTS = ("stdio", "sse", "streamable-http")
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "")
    return raw.lower() == "true" if raw else default


@dataclass
class GenomeApiConfig:
    """Client and server configuration loaded from environment variables."""

    # Upstream settings
    analyze_variant_url: str | None = None
    ncbi_api_key: str | None = None
    request_timeout: float | None = DEFAULT_REQUEST_TIMEOUT

    # Transport settings
    transport: str = DEFAULT_TRANSPORT
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = DEFAULT_LOG_LEVEL

    # Auth settings
    auth_enabled: bool = False
    issuer_url: str = DEFAULT_ISSUER_URL
    resource_server_url: str = DEFAULT_RESOURCE_SERVER_URL
    required_scopes: list[str] | None = None
    database_url: str = DEFAULT_DATABASE_URL
    session_expires_in: int = DEFAULT_SESSION_EXPIRES_IN_SECONDS
    session_update_age: int = DEFAULT_SESSION_UPDATE_AGE_SECONDS
    email_password_enabled: bool = DEFAULT_EMAIL_PASSWORD_ENABLED
    require_email_verification: bool = DEFAULT_REQUIRE_EMAIL_VERIFICATION

    # Rate limiting
    rate_limit_max_requests: int = DEFAULT_RATE_LIMIT_MAX_REQUESTS
    rate_limit_window_seconds: int = DEFAULT_RATE_LIMIT_WINDOW_SECONDS

    def __post_init__(self) -> None:
        """Validate config values."""
        if self.request_timeout is not None and self.request_timeout <= 0:
            raise ValueError(f"request_timeout must be positive, got {self.request_timeout}")

        if self.transport not in VALID_TRANSPORTS:
            raise ValueError(f"transport must be one of {VALID_TRANSPORTS}, got '{self.transport}'")

        if not 1 <= self.port <= 65535:
            raise ValueError(f"port must be between 1 and 65535, got {self.port}")

        self.log_level = self.log_level.upper()
        if self.log_level not in VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {VALID_LOG_LEVELS}, got '{self.log_level}'")

        if self.session_expires_in < 1:
            raise ValueError(
                f"session_expires_in must be at least 1 second, got {self.session_expires_in}"
            )

        if not 0 <= self.session_update_age <= self.session_expires_in:
            raise ValueError(
                "session_update_age must be between 0 and session_expires_in, "
                f"got {self.session_update_age}"
            )

        if self.rate_limit_max_requests < 1:
            raise ValueError(
                f"rate_limit_max_requests must be at least 1, got {self.rate_limit_max_requests}"
            )

        if self.rate_limit_window_seconds < 1:
            raise ValueError(
                "rate_limit_window_seconds must be at least 1, "
                f"got {self.rate_limit_window_seconds}"
            )

    @classmethod
    def from_env(cls) -> "GenomeApiConfig":
        """Create config from environment variables."""
        env = os.environ

        scopes_raw = env.get("GENOMEAPI_REQUIRED_SCOPES", "")
        scopes = [s.strip() for s in scopes_raw.split(",") if s.strip()] or None

        timeout_raw = env.get("GENOMEAPI_REQUEST_TIMEOUT", "")
        timeout = float(timeout_raw) if timeout_raw else DEFAULT_REQUEST_TIMEOUT

        return cls(
            analyze_variant_url=env.get("GENOMEAPI_ANALYZE_VARIANT_URL") or None,
            ncbi_api_key=env.get("GENOMEAPI_NCBI_API_KEY") or None,
            request_timeout=timeout,
            transport=env.get("GENOMEAPI_TRANSPORT", DEFAULT_TRANSPORT),
            host=env.get("GENOMEAPI_HOST", DEFAULT_HOST),
            port=int(env.get("GENOMEAPI_PORT", str(DEFAULT_PORT))),
            log_level=env.get("GENOMEAPI_LOG_LEVEL", DEFAULT_LOG_LEVEL),
            auth_enabled=env.get("GENOMEAPI_AUTH_ENABLED", "").lower() == "true",
            issuer_url=env.get("GENOMEAPI_ISSUER_URL", DEFAULT_ISSUER_URL),
            resource_server_url=env.get(
                "GENOMEAPI_RESOURCE_SERVER_URL", DEFAULT_RESOURCE_SERVER_URL
            ),
            required_scopes=scopes,
            database_url=env.get("GENOMEAPI_DATABASE_URL", DEFAULT_DATABASE_URL),
            session_expires_in=int(
                env.get("GENOMEAPI_SESSION_EXPIRES_IN", str(DEFAULT_SESSION_EXPIRES_IN_SECONDS))
            ),
            session_update_age=int(
                env.get("GENOMEAPI_SESSION_UPDATE_AGE", str(DEFAULT_SESSION_UPDATE_AGE_SECONDS))
            ),
            email_password_enabled=_env_flag(
                "GENOMEAPI_EMAIL_PASSWORD_ENABLED", DEFAULT_EMAIL_PASSWORD_ENABLED
            ),
            require_email_verification=_env_flag(
                "GENOMEAPI_REQUIRE_EMAIL_VERIFICATION", DEFAULT_REQUIRE_EMAIL_VERIFICATION
            ),
            rate_limit_max_requests=int(
                env.get("GENOMEAPI_RATE_LIMIT_MAX", str(DEFAULT_RATE_LIMIT_MAX_REQUESTS))
            ),
            rate_limit_window_seconds=int(
                env.get("GENOMEAPI_RATE_LIMIT_WINDOW", str(DEFAULT_RATE_LIMIT_WINDOW_SECONDS))
            ),
        )
