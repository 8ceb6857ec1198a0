"""Database-backed token sessions.

A session row holds one issued token (access or refresh) with its owner,
scopes and timestamps. Rows are plain SQLAlchemy Core; any database with a
SQLAlchemy dialect works.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import (
    Column,
    Integer,
    MetaData,
    String,
    Table,
    create_engine,
    delete,
    select,
    update,
)
from sqlalchemy.engine import make_url
from sqlalchemy.pool import StaticPool

from ..config import GenomeApiConfig
from ..constants import (
    DEFAULT_EMAIL_PASSWORD_ENABLED,
    DEFAULT_RATE_LIMIT_MAX_REQUESTS,
    DEFAULT_RATE_LIMIT_WINDOW_SECONDS,
    DEFAULT_REQUIRE_EMAIL_VERIFICATION,
    DEFAULT_SESSION_EXPIRES_IN_SECONDS,
    DEFAULT_SESSION_UPDATE_AGE_SECONDS,
)

ACCESS = "access"
REFRESH = "refresh"


@dataclass(frozen=True)
class SessionPolicy:
    """Session lifetime, sign-in and request-rate values handed to the auth layer.

    The email/password flags are not enforced here; they are carried for the
    identity provider that owns sign-up and verification.
    """

    expires_in: int = DEFAULT_SESSION_EXPIRES_IN_SECONDS
    update_age: int = DEFAULT_SESSION_UPDATE_AGE_SECONDS
    rate_limit_max_requests: int = DEFAULT_RATE_LIMIT_MAX_REQUESTS
    rate_limit_window_seconds: int = DEFAULT_RATE_LIMIT_WINDOW_SECONDS
    email_password_enabled: bool = DEFAULT_EMAIL_PASSWORD_ENABLED
    require_email_verification: bool = DEFAULT_REQUIRE_EMAIL_VERIFICATION

    @classmethod
    def from_config(cls, config: GenomeApiConfig) -> SessionPolicy:
        return cls(
            expires_in=config.session_expires_in,
            update_age=config.session_update_age,
            rate_limit_max_requests=config.rate_limit_max_requests,
            rate_limit_window_seconds=config.rate_limit_window_seconds,
            email_password_enabled=config.email_password_enabled,
            require_email_verification=config.require_email_verification,
        )

    def needs_renewal(self, updated_at: int, now: int) -> bool:
        return now - updated_at >= self.update_age


@dataclass(frozen=True)
class SessionRecord:
    token: str
    kind: str
    client_id: str
    scopes: list[str]
    expires_at: int | None
    updated_at: int

    def expired(self, now: int) -> bool:
        return self.expires_at is not None and self.expires_at < now


class SessionStore:
    """Token sessions in a relational table.

    Args:
        database_url: SQLAlchemy URL, e.g. ``postgresql://...`` or
            ``sqlite:///genomeapi.db``. The table is created if missing.

    Methods are synchronous; the auth provider calls them from a worker
    thread so token checks do not block the event loop.
    """

    def __init__(self, database_url: str):
        url = make_url(database_url)
        if url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:"):
            # One shared connection, so worker threads see the same in-memory database
            self.engine = create_engine(
                url, poolclass=StaticPool, connect_args={"check_same_thread": False}
            )
        else:
            self.engine = create_engine(url)
        self._metadata = MetaData()
        self.sessions = Table(
            "sessions",
            self._metadata,
            Column("token", String(128), primary_key=True),
            Column("kind", String(16), nullable=False),
            Column("client_id", String(255), nullable=False),
            Column("scopes", String(1024), nullable=False, default=""),
            Column("expires_at", Integer, nullable=True),
            Column("updated_at", Integer, nullable=False),
        )
        self._metadata.create_all(self.engine)

    def add(self, record: SessionRecord) -> None:
        with self.engine.begin() as conn:
            conn.execute(
                self.sessions.insert().values(
                    token=record.token,
                    kind=record.kind,
                    client_id=record.client_id,
                    scopes=" ".join(record.scopes),
                    expires_at=record.expires_at,
                    updated_at=record.updated_at,
                )
            )

    def get(self, token: str, kind: str) -> SessionRecord | None:
        with self.engine.connect() as conn:
            row = conn.execute(
                select(self.sessions).where(
                    self.sessions.c.token == token, self.sessions.c.kind == kind
                )
            ).first()
        if row is None:
            return None
        return SessionRecord(
            token=row.token,
            kind=row.kind,
            client_id=row.client_id,
            scopes=row.scopes.split() if row.scopes else [],
            expires_at=row.expires_at,
            updated_at=row.updated_at,
        )

    def touch(self, token: str, updated_at: int, expires_at: int) -> None:
        with self.engine.begin() as conn:
            conn.execute(
                update(self.sessions)
                .where(self.sessions.c.token == token)
                .values(updated_at=updated_at, expires_at=expires_at)
            )

    def remove(self, token: str) -> None:
        with self.engine.begin() as conn:
            conn.execute(delete(self.sessions).where(self.sessions.c.token == token))

    def purge_expired(self, now: int) -> int:
        """Delete expired sessions, returning how many were removed."""
        with self.engine.begin() as conn:
            result = conn.execute(
                delete(self.sessions).where(
                    self.sessions.c.expires_at.is_not(None), self.sessions.c.expires_at < now
                )
            )
        return result.rowcount or 0
