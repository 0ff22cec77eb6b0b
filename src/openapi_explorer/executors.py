"""Execution layer for outbound API requests."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from .logging import format_request_record
from .models import RequestConfig, ResponseEnvelope

logger = logging.getLogger(__name__)


class RequestExecutor:
    """Send a RequestConfig and always hand back a ResponseEnvelope.

    Every HTTP status is a normal result here; only transport failures
    (connection refused, DNS, timeouts, unusable URLs) are turned into a
    synthesized 500 envelope carrying the error message.
    """

    def __init__(
        self,
        timeout_seconds: float = 30,
        verify_ssl: bool = True,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.timeout_seconds = timeout_seconds
        self.verify_ssl = verify_ssl
        self.transport = transport

    async def execute(self, config: RequestConfig) -> ResponseEnvelope:
        method = config.method.upper()
        headers = {key: str(value) for key, value in config.headers.items()}

        logger.info("Executing request %s", format_request_record(config))

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds,
                verify=self.verify_ssl,
                transport=self.transport,
            ) as client:
                response = await client.request(
                    method,
                    config.url,
                    headers=headers,
                    params=config.query or None,
                    **self._body_kwargs(config.body),
                )
        except Exception as exc:
            message = str(exc) or exc.__class__.__name__
            logger.error("Request to %s failed: %s", config.url, message)
            return ResponseEnvelope(
                status=500,
                status_text=message,
                headers={},
                data={"error": message},
            )

        return ResponseEnvelope(
            status=response.status_code,
            status_text=response.reason_phrase,
            headers=dict(response.headers),
            data=self._decode_body(response),
        )

    def _body_kwargs(self, body: Any) -> Dict[str, Any]:
        if body is None or body == {}:
            return {}
        if isinstance(body, (str, bytes)):
            return {"content": body}
        return {"json": body}

    def _decode_body(self, response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text
