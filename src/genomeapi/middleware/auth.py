"""OAuth 2.0 authorization server for the genomeapi HTTP transports.

Issued tokens are sessions persisted through :class:`SessionStore`, with a
fixed lifetime and rolling renewal: a session used after ``update_age``
seconds gets its expiry pushed out by a full lifetime again. Registered
clients and short-lived authorization codes stay in process memory.
"""

from __future__ import annotations

import secrets
import time
from collections.abc import Callable
from functools import partial
from typing import Any, TypeVar, cast
from urllib.parse import urlencode

import anyio.to_thread
from mcp.server.auth.provider import (
    AccessToken,
    AuthorizationCode,
    AuthorizationParams,
    OAuthAuthorizationServerProvider,
    RefreshToken,
)
from mcp.server.auth.settings import (
    AuthSettings,
    ClientRegistrationOptions,
    RevocationOptions,
)
from mcp.shared.auth import OAuthClientInformationFull, OAuthToken
from pydantic import AnyHttpUrl

from ..config import GenomeApiConfig
from ..constants import AUTH_CODE_LIFETIME_SECONDS
from .sessions import ACCESS, REFRESH, SessionPolicy, SessionRecord, SessionStore

__all__ = [
    "ACCESS",
    "REFRESH",
    "GenomeApiAuthProvider",
    "SessionPolicy",
    "SessionRecord",
    "SessionStore",
    "build_auth_settings",
]

T = TypeVar("T")


def build_auth_settings(config: GenomeApiConfig) -> AuthSettings:
    """AuthSettings with dynamic client registration and revocation enabled."""
    scopes = list(config.required_scopes or [])
    return AuthSettings(
        issuer_url=cast(AnyHttpUrl, config.issuer_url),
        resource_server_url=cast(AnyHttpUrl, config.resource_server_url),
        required_scopes=scopes,
        client_registration_options=ClientRegistrationOptions(
            enabled=True, valid_scopes=scopes, default_scopes=scopes
        ),
        revocation_options=RevocationOptions(enabled=True),
    )


def _owner(client: OAuthClientInformationFull) -> str:
    return client.client_id or ""


class GenomeApiAuthProvider(
    OAuthAuthorizationServerProvider[AuthorizationCode, RefreshToken, AccessToken],
):
    """OAuth 2.0 authorization server with database-backed sessions."""

    def __init__(self, store: SessionStore, policy: SessionPolicy | None = None) -> None:
        self.store = store
        self.policy = policy or SessionPolicy()
        self._clients: dict[str, OAuthClientInformationFull] = {}
        self._codes: dict[str, AuthorizationCode] = {}

    async def get_client(self, client_id: str) -> OAuthClientInformationFull | None:
        return self._clients.get(client_id)

    async def register_client(self, client_info: OAuthClientInformationFull) -> None:
        if client_info.client_id:
            self._clients[client_info.client_id] = client_info

    async def authorize(
        self, client: OAuthClientInformationFull, params: AuthorizationParams
    ) -> str:
        """Issue a single-use authorization code and return the client redirect."""
        code = AuthorizationCode(
            code=secrets.token_urlsafe(32),
            scopes=list(params.scopes or []),
            expires_at=time.time() + AUTH_CODE_LIFETIME_SECONDS,
            client_id=_owner(client),
            code_challenge=params.code_challenge,
            redirect_uri=params.redirect_uri,
            redirect_uri_provided_explicitly=params.redirect_uri_provided_explicitly,
        )
        self._codes[code.code] = code
        query = {"code": code.code, "state": params.state}
        return f"{params.redirect_uri}?{urlencode({k: v for k, v in query.items() if v})}"

    async def load_authorization_code(
        self, client: OAuthClientInformationFull, authorization_code: str
    ) -> AuthorizationCode | None:
        code = self._codes.get(authorization_code)
        if code is not None and code.expires_at < time.time():
            del self._codes[authorization_code]
            return None
        if code is None or code.client_id != _owner(client):
            return None
        return code

    async def exchange_authorization_code(
        self, client: OAuthClientInformationFull, authorization_code: AuthorizationCode
    ) -> OAuthToken:
        self._codes.pop(authorization_code.code, None)
        return await self._start_session(_owner(client), authorization_code.scopes)

    async def load_refresh_token(
        self, client: OAuthClientInformationFull, refresh_token: str
    ) -> RefreshToken | None:
        record = await self._db(self.store.get, refresh_token, REFRESH)
        if record is None or record.client_id != _owner(client):
            return None
        return RefreshToken(
            token=record.token,
            client_id=record.client_id,
            scopes=record.scopes,
            expires_at=record.expires_at,
        )

    async def exchange_refresh_token(
        self,
        client: OAuthClientInformationFull,
        refresh_token: RefreshToken,
        scopes: list[str],
    ) -> OAuthToken:
        """Rotate the refresh token; empty ``scopes`` keeps the original grant."""
        await self._db(self.store.remove, refresh_token.token)
        return await self._start_session(_owner(client), scopes or refresh_token.scopes)

    async def load_access_token(self, token: str) -> AccessToken | None:
        """Load a session, renewing its expiry once it is older than update_age."""
        record = await self._db(self.store.get, token, ACCESS)
        if record is None:
            return None

        now = int(time.time())
        if record.expired(now):
            await self._db(self.store.remove, token)
            return None

        expires_at = record.expires_at
        if self.policy.needs_renewal(record.updated_at, now):
            expires_at = now + self.policy.expires_in
            await self._db(self.store.touch, token, updated_at=now, expires_at=expires_at)

        return AccessToken(
            token=record.token,
            client_id=record.client_id,
            scopes=record.scopes,
            expires_at=expires_at,
        )

    async def revoke_token(self, token: AccessToken | RefreshToken) -> None:
        await self._db(self.store.remove, token.token)

    async def _db(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        # SQLAlchemy calls block, so they run on a worker thread
        return await anyio.to_thread.run_sync(partial(func, *args, **kwargs))

    async def _start_session(self, client_id: str, scopes: list[str]) -> OAuthToken:
        """Persist a fresh access/refresh pair; refresh tokens never expire."""
        now = int(time.time())
        await self._db(self.store.purge_expired, now)

        tokens = {ACCESS: secrets.token_urlsafe(32), REFRESH: secrets.token_urlsafe(32)}
        for kind, value in tokens.items():
            await self._db(
                self.store.add,
                SessionRecord(
                    token=value,
                    kind=kind,
                    client_id=client_id,
                    scopes=scopes,
                    expires_at=now + self.policy.expires_in if kind == ACCESS else None,
                    updated_at=now,
                ),
            )

        return OAuthToken(
            access_token=tokens[ACCESS],
            token_type="Bearer",  # noqa: S106
            expires_in=self.policy.expires_in,
            refresh_token=tokens[REFRESH],
            scope=" ".join(scopes) or None,
        )
