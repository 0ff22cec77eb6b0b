"""Tests for the request executor"""

import json

import httpx
import pytest

from openapi_explorer.executors import RequestExecutor
from openapi_explorer.models import RequestConfig, ResponseEnvelope


def _executor(handler) -> RequestExecutor:
    return RequestExecutor(timeout_seconds=5, transport=httpx.MockTransport(handler))


class TestRequestExecutorSuccess:
    """Tests for responses that reach the server"""

    @pytest.mark.asyncio
    async def test_returns_json_envelope(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"id": 1}, headers={"X-Rate": "10"})

        envelope = await _executor(handler).execute(
            RequestConfig(url="https://api.example.com/pets/1", method="get")
        )
        assert envelope.status == 200
        assert envelope.status_text == "OK"
        assert envelope.data == {"id": 1}
        assert envelope.headers["x-rate"] == "10"

    @pytest.mark.asyncio
    async def test_method_is_upper_cased(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            return httpx.Response(204)

        await _executor(handler).execute(RequestConfig(url="https://h/x", method="delete"))
        assert seen["method"] == "DELETE"

    @pytest.mark.asyncio
    async def test_error_statuses_are_returned_not_raised(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, json={"message": "missing"})

        envelope = await _executor(handler).execute(RequestConfig(url="https://h/x", method="GET"))
        assert envelope.status == 404
        assert envelope.status_text == "Not Found"
        assert envelope.data == {"message": "missing"}

    @pytest.mark.asyncio
    async def test_sends_headers_query_and_json_body(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["headers"] = request.headers
            seen["params"] = dict(request.url.params)
            seen["body"] = json.loads(request.content)
            return httpx.Response(201, text="created")

        envelope = await _executor(handler).execute(
            RequestConfig(
                url="https://h/orders",
                method="post",
                headers={"X-Trace": 5, "Authorization": "Bearer t"},
                query={"dry_run": "true"},
                body={"qty": 2},
            )
        )
        assert seen["headers"]["x-trace"] == "5"
        assert seen["headers"]["authorization"] == "Bearer t"
        assert seen["headers"]["content-type"] == "application/json"
        assert seen["params"] == {"dry_run": "true"}
        assert seen["body"] == {"qty": 2}
        assert envelope.data == "created"

    @pytest.mark.asyncio
    async def test_string_body_is_sent_raw(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["content"] = request.content
            return httpx.Response(200)

        await _executor(handler).execute(
            RequestConfig(url="https://h/raw", method="PUT", body="<xml/>")
        )
        assert seen["content"] == b"<xml/>"

    @pytest.mark.asyncio
    async def test_empty_body_sends_nothing(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["content"] = request.content
            return httpx.Response(200)

        envelope = await _executor(handler).execute(
            RequestConfig(url="https://h/x", method="GET", body={})
        )
        assert seen["content"] == b""
        assert envelope.data is None


class TestRequestExecutorFailures:
    """Tests for transport failures"""

    @pytest.mark.asyncio
    async def test_connection_failure_is_normalized(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        envelope = await _executor(handler).execute(
            RequestConfig(url="https://unreachable.invalid/x", method="GET")
        )
        assert envelope.status == 500
        assert envelope.status_text == "Connection refused"
        assert envelope.headers == {}
        assert envelope.data == {"error": "Connection refused"}

    @pytest.mark.asyncio
    async def test_timeout_is_normalized(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        envelope = await _executor(handler).execute(RequestConfig(url="https://h/slow", method="GET"))
        assert envelope.status == 500
        assert envelope.data["error"] == "timed out"

    @pytest.mark.asyncio
    async def test_empty_exception_message_falls_back_to_class_name(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("", request=request)

        envelope = await _executor(handler).execute(RequestConfig(url="https://h/x", method="GET"))
        assert envelope.data == {"error": "ConnectError"}

    @pytest.mark.asyncio
    async def test_url_without_scheme_is_normalized(self) -> None:
        envelope = await RequestExecutor(timeout_seconds=1).execute(
            RequestConfig(url="/pets/{petId}", method="GET")
        )
        assert envelope.status == 500
        assert envelope.data["error"]

    def test_envelope_serializes_with_camel_case(self) -> None:
        payload = ResponseEnvelope(status=500, status_text="boom", data={"error": "boom"}).to_dict()
        assert payload == {
            "status": 500,
            "statusText": "boom",
            "headers": {},
            "data": {"error": "boom"},
        }
