"""Core explorer service logic."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from .auth import apply_auth, decode_jwt, parse_auth_config
from .binding import bind_parameters
from .config import Settings
from .errors import PreconditionError
from .executors import RequestExecutor
from .models import ParsedSpec, RequestConfig, ResponseEnvelope
from .oauth import HttpxTokenProvider, Token, TokenAcquirer
from .openapi import SpecLoader, SpecNormalizer
from .urls import compose_url

logger = logging.getLogger(__name__)


class ExplorerService:
    """
    Owns the active specification and assembles outbound requests.

    At most one ParsedSpec is held at a time. A successful parse replaces it
    with a single attribute assignment; a failed parse leaves it untouched.
    """

    def __init__(
        self,
        settings: Settings,
        spec_loader: Optional[SpecLoader] = None,
        request_executor: Optional[RequestExecutor] = None,
        token_acquirer: Optional[TokenAcquirer] = None,
    ) -> None:
        self.settings = settings
        self.spec_loader = spec_loader or SpecLoader(
            timeout_seconds=settings.spec_fetch_timeout_seconds,
            verify_ssl=settings.verify_ssl,
        )
        self.normalizer = SpecNormalizer()
        self.request_executor = request_executor or RequestExecutor(
            timeout_seconds=settings.request_timeout_seconds,
            verify_ssl=settings.verify_ssl,
        )
        self.token_acquirer = token_acquirer or TokenAcquirer(
            HttpxTokenProvider(
                timeout_seconds=settings.token_timeout_seconds,
                verify_ssl=settings.verify_ssl,
            ),
            default_token_path=settings.default_token_path,
        )
        self._spec: Optional[ParsedSpec] = None

    @property
    def spec(self) -> Optional[ParsedSpec]:
        return self._spec

    async def parse_spec(self, url: Optional[str]) -> ParsedSpec:
        if not url:
            raise PreconditionError("OpenAPI specification URL is required")

        document = await self.spec_loader.load(url)
        parsed = self.normalizer.normalize(document)
        self._spec = parsed
        logger.info(
            "Parsed OpenAPI spec url=%s endpoints=%s servers=%s",
            url,
            len(parsed.endpoints),
            parsed.servers,
        )
        return parsed

    async def execute(self, payload: Dict[str, Any]) -> ResponseEnvelope:
        """
        Assemble and send a request described by an execute payload.

        Args:
            payload: ``url`` and ``method`` plus optional ``headers``, ``params``,
                ``data``, ``auth``, ``path`` and ``paramValues``.

        Returns:
            The normalized response, also for transport failures.
        """
        url = payload.get("url")
        method = payload.get("method")
        if not url or not method:
            raise PreconditionError("URL and method are required")

        query: Dict[str, Any] = dict(payload.get("params") or {})
        param_headers: Dict[str, Any] = {}
        bound_body: Any = None

        path = payload.get("path")
        spec = self._spec
        if spec is not None and path:
            endpoint = spec.find_endpoint(path, method)
            if endpoint is None:
                logger.info("No endpoint %s %s in the active spec; sending as-is", method, path)
            else:
                bound = bind_parameters(endpoint.parameters, payload.get("paramValues") or {})
                query.update(bound.query)
                param_headers = bound.header
                bound_body = bound.body
                url = compose_url(url, path, bound.path)

        data = payload.get("data")
        request = RequestConfig(
            url=url,
            method=method,
            headers={**param_headers, **(payload.get("headers") or {})},
            query=query,
            body=data if data else bound_body,
        )
        request = apply_auth(request, parse_auth_config(payload.get("auth")))
        return await self.request_executor.execute(request)

    async def acquire_token(self, payload: Dict[str, Any]) -> Token:
        if not payload.get("grantType"):
            raise PreconditionError("Required OAuth2 parameters are missing")
        return await self.token_acquirer.acquire_client_credentials_token(
            token_host=payload.get("tokenHost"),
            token_path=payload.get("tokenPath"),
            client_id=payload.get("clientId"),
            client_secret=payload.get("clientSecret"),
            scope=payload.get("scope"),
            grant_type=payload["grantType"],
        )

    def decode_token(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return decode_jwt(payload.get("token") or "", payload.get("secret"))
