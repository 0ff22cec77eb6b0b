"""JSON API routes for the explorer."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from starlette.requests import Request
from starlette.responses import JSONResponse

from .errors import (
    JwtDecodeError,
    PreconditionError,
    SpecParseError,
    TokenAcquisitionError,
    UnsupportedGrantType,
)
from .oauth import access_token_of
from .service import ExplorerService


logger = logging.getLogger(__name__)


class ParseSpecRequest(BaseModel):
    url: Optional[str] = None


class ExecuteRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    url: Optional[str] = None
    method: Optional[str] = None
    headers: Dict[str, Any] = Field(default_factory=dict)
    params: Dict[str, Any] = Field(default_factory=dict)
    data: Any = None
    auth: Optional[Dict[str, Any]] = None
    path: Optional[str] = None
    param_values: Dict[str, Any] = Field(default_factory=dict, alias="paramValues")


class TokenRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    grant_type: Optional[str] = Field(default=None, alias="grantType")
    token_host: Optional[str] = Field(default=None, alias="tokenHost")
    token_path: Optional[str] = Field(default=None, alias="tokenPath")
    client_id: Optional[str] = Field(default=None, alias="clientId")
    client_secret: Optional[str] = Field(default=None, alias="clientSecret")
    scope: Optional[str] = None


class DecodeJwtRequest(BaseModel):
    token: Optional[str] = None
    secret: Optional[str] = None


def mount_api(app, service: ExplorerService) -> None:  # type: ignore[no-untyped-def]
    async def parse_spec(request: Request) -> JSONResponse:
        body = await _read_model(request, ParseSpecRequest)
        if isinstance(body, JSONResponse):
            return body
        try:
            parsed = await service.parse_spec(body.url)
        except PreconditionError as exc:
            return _error(str(exc), 400)
        except SpecParseError as exc:
            logger.error("Error parsing OpenAPI spec: %s", exc)
            return _error(str(exc), 500)
        return JSONResponse(
            {"message": "OpenAPI specification parsed successfully", **parsed.to_dict()}
        )

    async def spec_info(_request: Request) -> JSONResponse:
        parsed = service.spec
        if parsed is None:
            return _error("No OpenAPI specification has been parsed yet", 404)
        return JSONResponse(parsed.to_dict())

    async def execute(request: Request) -> JSONResponse:
        body = await _read_model(request, ExecuteRequest)
        if isinstance(body, JSONResponse):
            return body
        try:
            envelope = await service.execute(body.model_dump(by_alias=True))
        except PreconditionError as exc:
            return _error(str(exc), 400)
        return JSONResponse(envelope.to_dict())

    async def oauth2_token(request: Request) -> JSONResponse:
        body = await _read_model(request, TokenRequest)
        if isinstance(body, JSONResponse):
            return body
        try:
            token = await service.acquire_token(body.model_dump(by_alias=True))
        except (PreconditionError, UnsupportedGrantType) as exc:
            return _error(str(exc), 400)
        except TokenAcquisitionError as exc:
            logger.error("Error generating OAuth2 token: %s", exc)
            return _error(str(exc), 502)
        return JSONResponse({"token": token, "accessToken": access_token_of(token)})

    async def decode_jwt(request: Request) -> JSONResponse:
        body = await _read_model(request, DecodeJwtRequest)
        if isinstance(body, JSONResponse):
            return body
        try:
            decoded = service.decode_token(body.model_dump())
        except (PreconditionError, JwtDecodeError) as exc:
            return _error(str(exc), 400)
        return JSONResponse({"decoded": decoded})

    app.add_route("/api/parse-spec", parse_spec, methods=["POST"])
    app.add_route("/api/spec-info", spec_info, methods=["GET"])
    app.add_route("/api/execute", execute, methods=["POST"])
    app.add_route("/api/auth/oauth2/token", oauth2_token, methods=["POST"])
    app.add_route("/api/auth/decode-jwt", decode_jwt, methods=["POST"])


async def _read_model(request: Request, model: type[BaseModel]):  # type: ignore[no-untyped-def]
    try:
        payload = await request.json()
    except ValueError:
        return _error("Request body must be JSON", 400)
    if not isinstance(payload, dict):
        return _error("Request body must be a JSON object", 400)
    try:
        return model(**payload)
    except ValidationError as exc:
        return JSONResponse(
            {"error": "Invalid payload", "details": exc.errors(include_url=False)}, status_code=422
        )


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)
