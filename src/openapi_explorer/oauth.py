"""OAuth2 client-credentials token acquisition."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Protocol

import httpx

from .errors import PreconditionError, TokenAcquisitionError, UnsupportedGrantType
from .logging import redact_payload


logger = logging.getLogger(__name__)


CLIENT_CREDENTIALS = "client_credentials"
DEFAULT_TOKEN_PATH = "/oauth/token"

Token = Dict[str, Any]


@dataclass(frozen=True)
class ClientCredentialsRequest:
    token_url: str
    client_id: str
    client_secret: str
    scope: str = ""


class TokenProvider(Protocol):
    async def exchange(self, request: ClientCredentialsRequest) -> Token:
        ...


class HttpxTokenProvider:
    """Exchange client credentials for a token at an OAuth2 token endpoint."""

    def __init__(
        self,
        timeout_seconds: float = 20,
        verify_ssl: bool = True,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.timeout_seconds = timeout_seconds
        self.verify_ssl = verify_ssl
        self.transport = transport

    async def exchange(self, request: ClientCredentialsRequest) -> Token:
        form = {"grant_type": CLIENT_CREDENTIALS}
        if request.scope:
            form["scope"] = request.scope

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds,
                verify=self.verify_ssl,
                transport=self.transport,
            ) as client:
                response = await client.post(
                    request.token_url,
                    data=form,
                    auth=(request.client_id, request.client_secret),
                    headers={"Accept": "application/json"},
                )
        except httpx.HTTPError as exc:
            raise TokenAcquisitionError(str(exc) or exc.__class__.__name__) from exc

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if not response.is_success:
            raise TokenAcquisitionError(self._error_message(response, payload))
        if not isinstance(payload, dict):
            raise TokenAcquisitionError("Token endpoint returned a non-JSON response")

        if "expires_in" in payload:
            try:
                expires_at = datetime.now(timezone.utc) + timedelta(
                    seconds=float(payload["expires_in"])
                )
                payload["expires_at"] = expires_at.isoformat()
            except (TypeError, ValueError):
                logger.debug("Ignoring non-numeric expires_in: %r", payload["expires_in"])
        return payload

    def _error_message(self, response: httpx.Response, payload: Any) -> str:
        if isinstance(payload, dict):
            detail = payload.get("error_description") or payload.get("error")
            if detail:
                return f"Token endpoint returned HTTP {response.status_code}: {detail}"
        return f"Token endpoint returned HTTP {response.status_code}"


class TokenAcquirer:
    def __init__(self, provider: TokenProvider, default_token_path: str = DEFAULT_TOKEN_PATH) -> None:
        self.provider = provider
        self.default_token_path = default_token_path

    async def acquire_client_credentials_token(
        self,
        token_host: Optional[str],
        token_path: Optional[str],
        client_id: Optional[str],
        client_secret: Optional[str],
        scope: Optional[str] = None,
        grant_type: str = CLIENT_CREDENTIALS,
    ) -> Token:
        if grant_type != CLIENT_CREDENTIALS:
            raise UnsupportedGrantType(grant_type)
        if not token_host or not client_id or not client_secret:
            raise PreconditionError("Required OAuth2 parameters are missing")

        path = token_path or self.default_token_path
        if not path.startswith("/"):
            path = f"/{path}"
        request = ClientCredentialsRequest(
            token_url=f"{token_host.rstrip('/')}{path}",
            client_id=client_id,
            client_secret=client_secret,
            scope=scope or "",
        )

        logger.info(
            "Requesting client credentials token %s",
            redact_payload(
                {
                    "token_url": request.token_url,
                    "client_id": request.client_id,
                    "client_secret": request.client_secret,
                    "scope": request.scope,
                }
            ),
        )
        return await self.provider.exchange(request)


def access_token_of(token: Token) -> Optional[str]:
    value = token.get("access_token")
    return str(value) if value else None
