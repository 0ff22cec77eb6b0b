"""Authentication strategies and JWT inspection."""

from __future__ import annotations

import base64
import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Union

import jwt

from .errors import JwtDecodeError, PreconditionError
from .logging import redact_payload
from .models import RequestConfig


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NoAuth:
    pass


@dataclass(frozen=True)
class BasicAuth:
    username: str
    password: str


@dataclass(frozen=True)
class BearerAuth:
    token: str


@dataclass(frozen=True)
class ApiKeyAuth:
    name: str
    value: str
    location: str = "header"


@dataclass(frozen=True)
class OAuth2Auth:
    """Bearer token obtained through the token-exchange flow."""

    token: str


AuthConfig = Union[NoAuth, BasicAuth, BearerAuth, ApiKeyAuth, OAuth2Auth]


def parse_auth_config(payload: Optional[Dict[str, Any]]) -> AuthConfig:
    if not payload or not payload.get("type"):
        return NoAuth()

    auth_type = payload["type"]
    if auth_type == "none":
        return NoAuth()
    if auth_type == "basic":
        return BasicAuth(
            username=str(payload.get("username") or ""),
            password=str(payload.get("password") or ""),
        )
    if auth_type == "bearer":
        return BearerAuth(token=str(payload.get("token") or ""))
    if auth_type == "apiKey":
        return ApiKeyAuth(
            name=str(payload.get("name") or ""),
            value=str(payload.get("value") or ""),
            location=payload.get("in") or payload.get("location") or "",
        )
    if auth_type == "oauth2":
        return OAuth2Auth(token=str(payload.get("token") or ""))

    logger.warning("Unknown authentication type: %s auth=%s", auth_type, redact_payload(payload))
    return NoAuth()


def apply_auth(request: RequestConfig, auth: AuthConfig) -> RequestConfig:
    headers: Dict[str, str] = {}
    query: Dict[str, str] = {}

    if isinstance(auth, BasicAuth):
        credentials = base64.b64encode(f"{auth.username}:{auth.password}".encode("utf-8"))
        headers["Authorization"] = f"Basic {credentials.decode('ascii')}"
    elif isinstance(auth, (BearerAuth, OAuth2Auth)):
        headers["Authorization"] = f"Bearer {auth.token}"
    elif isinstance(auth, ApiKeyAuth):
        if auth.location == "header":
            headers[auth.name] = auth.value
        elif auth.location == "query":
            query[auth.name] = auth.value

    if not headers and not query:
        return request
    return replace(
        request,
        headers={**request.headers, **headers},
        query={**request.query, **query},
    )


_HMAC_ALGORITHMS = ["HS256", "HS384", "HS512"]


def decode_jwt(token: str, secret: Optional[str] = None) -> Dict[str, Any]:
    """Decode a JWT, verifying its signature only when a secret is given."""
    if not token:
        raise PreconditionError("Token is required")

    try:
        if not secret:
            return jwt.decode(token, options={"verify_signature": False})
        return jwt.decode(
            token,
            key=secret,
            algorithms=_HMAC_ALGORITHMS,
            options={"verify_aud": False},
        )
    except jwt.PyJWTError as exc:
        logger.warning("JWT decode failed: %s", exc)
        raise JwtDecodeError(str(exc)) from exc
