"""Tests for ExtractionClient (resume parser HTTP client)."""

from __future__ import annotations

import httpx
import pytest

from jobinfo_capture.clients.extraction_client import (
    DEFAULT_ENDPOINT,
    ErrorKind,
    ExtractionClient,
    ExtractionError,
)

ENDPOINT = "http://parser.test/parse-resume"


def _client(handler) -> ExtractionClient:
    return ExtractionClient(ENDPOINT, transport=httpx.MockTransport(handler))


class TestExtractionClientInit:
    def test_endpoint_argument(self):
        assert ExtractionClient("http://a/b").endpoint == "http://a/b"

    def test_endpoint_from_env(self, monkeypatch):
        monkeypatch.setenv("EXTRACTION_API_URL", "http://env/parse")
        assert ExtractionClient().endpoint == "http://env/parse"

    def test_default_endpoint(self, monkeypatch):
        monkeypatch.delenv("EXTRACTION_API_URL", raising=False)
        assert ExtractionClient().endpoint == DEFAULT_ENDPOINT


class TestExtract:
    async def test_returns_technologies(self, sample_pdf):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"technologies": ["Python", "SQL"]})

        async with _client(handler) as client:
            result = await client.extract(sample_pdf)

        assert result == ["Python", "SQL"]
        assert len(seen) == 1
        assert seen[0].method == "POST"
        assert str(seen[0].url) == ENDPOINT

    async def test_sends_multipart_file_field(self, sample_pdf):
        bodies: list[bytes] = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(request.read())
            assert request.headers["content-type"].startswith("multipart/form-data")
            return httpx.Response(200, json={"technologies": []})

        async with _client(handler) as client:
            await client.extract(sample_pdf)

        assert b'name="resume"' in bodies[0]
        assert b'filename="resume.pdf"' in bodies[0]
        assert sample_pdf.content in bodies[0]

    async def test_custom_fields(self, sample_pdf):
        bodies: list[bytes] = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(request.read())
            return httpx.Response(200, json={"skills": ["Go"]})

        client = ExtractionClient(
            ENDPOINT,
            file_field="file",
            result_field="skills",
            transport=httpx.MockTransport(handler),
        )
        async with client:
            assert await client.extract(sample_pdf) == ["Go"]
        assert b'name="file"' in bodies[0]

    async def test_result_returned_unchanged(self, sample_pdf):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"technologies": ["Go", "Go", ""]})

        async with _client(handler) as client:
            assert await client.extract(sample_pdf) == ["Go", "Go", ""]


class TestExtractErrors:
    async def test_non_pdf_rejected_without_network(self, sample_docx):
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json={"technologies": []})

        async with _client(handler) as client:
            with pytest.raises(ExtractionError) as exc_info:
                await client.extract(sample_docx)

        assert exc_info.value.kind is ErrorKind.INVALID_FILE_TYPE
        assert calls == []

    async def test_transport_error(self, sample_pdf):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with _client(handler) as client:
            with pytest.raises(ExtractionError) as exc_info:
                await client.extract(sample_pdf)
        assert exc_info.value.kind is ErrorKind.NETWORK_FAILURE

    @pytest.mark.parametrize("status", [400, 404, 500, 502])
    async def test_error_status(self, sample_pdf, status):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status, json={"error": "Failed to parse resume"})

        async with _client(handler) as client:
            with pytest.raises(ExtractionError) as exc_info:
                await client.extract(sample_pdf)
        assert exc_info.value.kind is ErrorKind.NETWORK_FAILURE
        assert str(status) in exc_info.value.message

    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(200, text="not json"),
            httpx.Response(200, json=["Python"]),
            httpx.Response(200, json={"skills": ["Python"]}),
            httpx.Response(200, json={"technologies": "Python"}),
            httpx.Response(200, json={"technologies": None}),
            httpx.Response(200, json={"technologies": [{"name": "Go"}, "Rust"]}),
            httpx.Response(200, json={"technologies": [1, "Rust"]}),
        ],
        ids=[
            "not-json",
            "top-level-list",
            "missing-field",
            "string-field",
            "null-field",
            "object-entry",
            "number-entry",
        ],
    )
    async def test_malformed_response(self, sample_pdf, response):
        def handler(request: httpx.Request) -> httpx.Response:
            return response

        async with _client(handler) as client:
            with pytest.raises(ExtractionError) as exc_info:
                await client.extract(sample_pdf)
        assert exc_info.value.kind is ErrorKind.MALFORMED_RESPONSE
