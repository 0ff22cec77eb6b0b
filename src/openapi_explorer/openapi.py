"""OpenAPI/Swagger spec loader and normalizer."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import httpx
import yaml
from prance.util.resolver import (
    RESOLVE_FILES,
    RESOLVE_HTTP,
    RESOLVE_INTERNAL,
    RefResolver,
)

from .errors import SpecParseError
from .models import HTTP_METHODS, Endpoint, Parameter, ParsedSpec


logger = logging.getLogger(__name__)


class _SpecYamlLoader(yaml.SafeLoader):
    """SafeLoader that keeps unquoted dates and times as plain strings."""


_SpecYamlLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != "tag:yaml.org,2002:timestamp"]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def parse_document(text: str) -> Any:
    """Parse JSON or YAML text into plain JSON-compatible values."""
    return yaml.load(text, Loader=_SpecYamlLoader)


class SpecLoader:
    """Fetch a specification document and resolve its ``$ref`` pointers."""

    def __init__(
        self,
        timeout_seconds: float = 30,
        verify_ssl: bool = True,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.timeout_seconds = timeout_seconds
        self.verify_ssl = verify_ssl
        self.transport = transport

    async def load(self, url: str) -> Dict[str, Any]:
        try:
            text, base_url = await self._read(url)
            document = parse_document(text)
            if not isinstance(document, dict):
                raise SpecParseError("document is not a mapping")
            return await asyncio.to_thread(self._dereference, document, base_url)
        except Exception as exc:
            logger.warning("Failed to parse OpenAPI spec %s: %s", url, exc)
            raise SpecParseError(f"Failed to parse OpenAPI specification: {exc}") from exc

    async def _read(self, url: str) -> Tuple[str, str]:
        if url.startswith(("http://", "https://")):
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds,
                verify=self.verify_ssl,
                follow_redirects=True,
                transport=self.transport,
            ) as client:
                response = await client.get(url)
            if not response.is_success:
                raise SpecParseError(f"{url} returned HTTP {response.status_code}")
            return response.text, url

        path = Path(url).expanduser().resolve()
        text = await asyncio.to_thread(path.read_text, encoding="utf-8")
        return text, path.as_uri()

    def _dereference(self, document: Dict[str, Any], base_url: str) -> Dict[str, Any]:
        resolver = RefResolver(
            document,
            base_url,
            resolve_types=RESOLVE_HTTP | RESOLVE_FILES | RESOLVE_INTERNAL,
        )
        resolver.resolve_references()
        return resolver.specs


class SpecNormalizer:
    """Turn a dereferenced Swagger 2.0 or OpenAPI 3.x document into a ParsedSpec."""

    def normalize(self, document: Dict[str, Any]) -> ParsedSpec:
        if not isinstance(document, dict):
            raise SpecParseError("Failed to parse OpenAPI specification: document is not a mapping")
        return ParsedSpec(
            endpoints=self.extract_endpoints(document),
            security_schemes=self.extract_security_schemes(document),
            servers=self.extract_servers(document),
            info=document.get("info") or {},
        )

    def extract_endpoints(self, document: Dict[str, Any]) -> List[Endpoint]:
        endpoints: List[Endpoint] = []
        base_path = document.get("basePath") or ""
        paths = document.get("paths") or {}
        if not isinstance(paths, dict):
            raise SpecParseError("Failed to parse OpenAPI specification: 'paths' is not a mapping")
        default_security = document.get("security") or []

        for path, path_item in paths.items():
            if not isinstance(path_item, dict):
                continue
            shared_parameters = path_item.get("parameters") or []
            for method, operation in path_item.items():
                if method.lower() not in HTTP_METHODS or not isinstance(operation, dict):
                    continue

                if "security" in operation:
                    security = operation.get("security") or []
                else:
                    security = default_security

                endpoints.append(
                    Endpoint(
                        path=f"{base_path}{path}",
                        method=method.upper(),
                        operation_id=operation.get("operationId")
                        or self._fallback_operation_id(method, path),
                        summary=operation.get("summary") or "",
                        description=operation.get("description") or "",
                        parameters=self._merge_parameters(
                            shared_parameters, operation.get("parameters") or []
                        ),
                        responses=operation.get("responses") or {},
                        security=list(security),
                        tags=list(operation.get("tags") or []),
                        request_body=operation.get("requestBody"),
                    )
                )

        return endpoints

    def extract_security_schemes(self, document: Dict[str, Any]) -> Dict[str, Any]:
        components = document.get("components") or {}
        if isinstance(components, dict) and components.get("securitySchemes"):
            return components["securitySchemes"]

        if document.get("securityDefinitions"):
            return document["securityDefinitions"]

        return {}

    def extract_servers(self, document: Dict[str, Any]) -> List[str]:
        servers = document.get("servers") or []
        if servers:
            return [server.get("url", "") if isinstance(server, dict) else str(server) for server in servers]

        host = document.get("host")
        if host:
            schemes = document.get("schemes") or []
            scheme = schemes[0] if schemes else "https"
            return [f"{scheme}://{host}{document.get('basePath') or ''}"]

        return [""]

    def _merge_parameters(
        self, shared: List[Dict[str, Any]], own: List[Dict[str, Any]]
    ) -> Tuple[Parameter, ...]:
        merged: Dict[Tuple[str, str], Parameter] = {}
        for raw in [*shared, *own]:
            parameter = self._to_parameter(raw)
            if parameter is None:
                continue
            # an operation-level parameter replaces a shared one with the same name and location
            merged[(parameter.name, parameter.location)] = parameter
        return tuple(merged.values())

    def _to_parameter(self, raw: Any) -> Optional[Parameter]:
        if not isinstance(raw, dict) or not raw.get("name"):
            return None
        return Parameter(
            name=raw["name"],
            location=raw.get("in") or "",
            required=bool(raw.get("required", False)),
            description=raw.get("description") or "",
            schema=raw.get("schema") or {},
        )

    def _fallback_operation_id(self, method: str, path: str) -> str:
        return f"{method.lower()}{path}"
