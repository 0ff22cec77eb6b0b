"""Internal models for parsed specifications and outbound requests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


HTTP_METHODS = ("get", "post", "put", "delete", "patch", "options", "head")


@dataclass(frozen=True)
class Parameter:
    name: str
    location: str
    required: bool = False
    description: str = ""
    schema: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "in": self.location,
            "required": self.required,
            "description": self.description,
        }
        if self.schema:
            data["schema"] = self.schema
        return data


@dataclass(frozen=True)
class Endpoint:
    path: str
    method: str
    operation_id: str
    summary: str = ""
    description: str = ""
    parameters: Tuple[Parameter, ...] = ()
    responses: Dict[str, Any] = field(default_factory=dict)
    security: List[Dict[str, Any]] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    request_body: Optional[Dict[str, Any]] = None

    @property
    def key(self) -> Tuple[str, str]:
        return self.path, self.method.upper()

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "path": self.path,
            "method": self.method,
            "operationId": self.operation_id,
            "summary": self.summary,
            "description": self.description,
            "parameters": [parameter.to_dict() for parameter in self.parameters],
            "responses": self.responses,
            "security": self.security,
            "tags": self.tags,
        }
        if self.request_body is not None:
            data["requestBody"] = self.request_body
        return data


@dataclass(frozen=True)
class ParsedSpec:
    """Snapshot of one normalized specification.

    Endpoint lookups go through an index built once at construction; when a
    malformed document declares the same ``(path, method)`` twice, the later
    declaration is the one returned.
    """

    endpoints: List[Endpoint]
    security_schemes: Dict[str, Any]
    servers: List[str]
    info: Dict[str, Any] = field(default_factory=dict)
    _index: Dict[Tuple[str, str], Endpoint] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        for endpoint in self.endpoints:
            self._index[endpoint.key] = endpoint

    def find_endpoint(self, path: str, method: str) -> Optional[Endpoint]:
        return self._index.get((path, method.upper()))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "info": self.info,
            "endpoints": [endpoint.to_dict() for endpoint in self.endpoints],
            "securitySchemes": self.security_schemes,
            "servers": self.servers,
        }


@dataclass(frozen=True)
class BoundParameters:
    path: Dict[str, Any] = field(default_factory=dict)
    query: Dict[str, Any] = field(default_factory=dict)
    header: Dict[str, Any] = field(default_factory=dict)
    body: Any = None


@dataclass(frozen=True)
class RequestConfig:
    url: str
    method: str
    headers: Dict[str, str] = field(default_factory=dict)
    query: Dict[str, Any] = field(default_factory=dict)
    body: Any = None


@dataclass(frozen=True)
class ResponseEnvelope:
    status: int
    status_text: str
    headers: Dict[str, str] = field(default_factory=dict)
    data: Any = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "statusText": self.status_text,
            "headers": self.headers,
            "data": self.data,
        }
