"""Logging setup and the log records this service writes."""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict

from .models import RequestConfig


_SENSITIVE_KEYS = re.compile(
    r"(token|secret|api[_-]?key|password|authorization)", re.IGNORECASE
)
_REDACTED = "***REDACTED***"
BODY_PREVIEW_LIMIT = 500


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    # The executor writes its own record for every outbound call.
    logging.getLogger("httpx").setLevel(logging.WARNING)


def redact_payload(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Copy ``payload`` with credential-looking keys masked, descending into dicts and lists."""
    return {
        key: _REDACTED if _SENSITIVE_KEYS.search(str(key)) else _redact_value(value)
        for key, value in payload.items()
    }


def _redact_value(value: Any) -> Any:
    if isinstance(value, dict):
        return redact_payload(value)
    if isinstance(value, list):
        return [_redact_value(item) for item in value]
    return value


def describe_body(body: Any, limit: int = BODY_PREVIEW_LIMIT) -> str:
    if body is None or body == {}:
        return "-"
    if isinstance(body, bytes):
        return f"<{len(body)} bytes>"
    text = body if isinstance(body, str) else json.dumps(body, default=str)
    if len(text) > limit:
        return f"{text[:limit]}... ({len(text)} chars)"
    return text


def format_request_record(config: RequestConfig) -> str:
    """One-line summary of an outbound request as the executor is about to send it.

    Header and query values are logged verbatim so the operator sees exactly
    what went over the wire; only the body is shortened.
    """
    return "{method} {url} headers={headers} query={query} body={body}".format(
        method=config.method.upper(),
        url=config.url,
        headers=dict(config.headers),
        query=dict(config.query),
        body=describe_body(config.body),
    )
