"""Tests for the backend HTTP client."""

import json
from typing import Any

import httpx
import pytest
import respx

from hack_introspector.api.http import ApiError, ReportClient

BASE_URL = "http://localhost:8080"
ANALYZE_URL = f"{BASE_URL}/api/analyze"
REPO_URL = "https://github.com/team/hackproject"


@pytest.fixture
def report_payload(sample_report_path) -> dict[str, Any]:
    """Raw JSON body of the sample report."""
    return json.loads(sample_report_path.read_text(encoding="utf-8"))


class TestApiError:
    """Tests for ApiError."""

    def test_fields(self) -> None:
        """Test status and message are kept."""
        error = ApiError(503, "API Error: Service Unavailable")
        assert error.status == 503
        assert str(error) == "API Error: Service Unavailable"


class TestReportClientInit:
    """Tests for ReportClient construction."""

    def test_defaults(self) -> None:
        """Test the default base URL and timeout."""
        client = ReportClient()
        assert client._base_url == BASE_URL
        assert client._timeout == 60.0
        assert client._client is None

    def test_trailing_slash_stripped(self) -> None:
        """Test that a trailing slash on the base URL is dropped."""
        assert ReportClient(base_url="https://api.example.com/")._base_url == (
            "https://api.example.com"
        )


class TestAnalyzeRepository:
    """Tests for ReportClient.analyze_repository."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_success(self, report_payload: dict[str, Any]) -> None:
        """Test a successful analysis request."""
        route = respx.post(ANALYZE_URL).mock(
            return_value=httpx.Response(200, json=report_payload)
        )

        async with ReportClient() as client:
            report = await client.analyze_repository(REPO_URL)

        assert route.called
        request = route.calls.last.request
        assert json.loads(request.content) == {"repoUrl": REPO_URL}
        assert request.headers["Content-Type"] == "application/json"
        assert request.headers["User-Agent"].startswith("hack-introspector/")
        assert report.repo_info.full_name == "team/hackproject"
        assert len(report.contributors) == 3

    @pytest.mark.asyncio
    @respx.mock
    async def test_custom_base_url(self, report_payload: dict[str, Any]) -> None:
        """Test that the configured base URL is used."""
        route = respx.post("https://api.example.com/api/analyze").mock(
            return_value=httpx.Response(200, json=report_payload)
        )

        async with ReportClient(base_url="https://api.example.com/") as client:
            await client.analyze_repository(REPO_URL)

        assert route.called

    @pytest.mark.asyncio
    @respx.mock
    async def test_http_error_status(self) -> None:
        """Test that a non-2xx response raises ApiError with its status."""
        respx.post(ANALYZE_URL).mock(return_value=httpx.Response(500))

        async with ReportClient() as client:
            with pytest.raises(ApiError) as exc_info:
                await client.analyze_repository(REPO_URL)

        assert exc_info.value.status == 500
        assert str(exc_info.value) == "API Error: Internal Server Error"

    @pytest.mark.asyncio
    @respx.mock
    async def test_not_found(self) -> None:
        """Test a 404 from the backend."""
        respx.post(ANALYZE_URL).mock(return_value=httpx.Response(404))

        async with ReportClient() as client:
            with pytest.raises(ApiError) as exc_info:
                await client.analyze_repository(REPO_URL)

        assert exc_info.value.status == 404

    @pytest.mark.asyncio
    @respx.mock
    async def test_network_error(self) -> None:
        """Test that connection failures raise ApiError with status 0."""
        respx.post(ANALYZE_URL).mock(side_effect=httpx.ConnectError("Connection refused"))

        async with ReportClient() as client:
            with pytest.raises(ApiError) as exc_info:
                await client.analyze_repository(REPO_URL)

        assert exc_info.value.status == 0
        assert "Network error" in str(exc_info.value)

    @pytest.mark.asyncio
    @respx.mock
    async def test_timeout(self) -> None:
        """Test that timeouts raise ApiError with status 0."""
        respx.post(ANALYZE_URL).mock(side_effect=httpx.ReadTimeout("timed out"))

        async with ReportClient() as client:
            with pytest.raises(ApiError) as exc_info:
                await client.analyze_repository(REPO_URL)

        assert exc_info.value.status == 0
        assert "Request timeout" in str(exc_info.value)

    @pytest.mark.asyncio
    @respx.mock
    async def test_invalid_json_body(self) -> None:
        """Test that a non-JSON body raises ApiError."""
        respx.post(ANALYZE_URL).mock(return_value=httpx.Response(200, text="<html>oops</html>"))

        async with ReportClient() as client:
            with pytest.raises(ApiError, match="Invalid JSON response"):
                await client.analyze_repository(REPO_URL)

    @pytest.mark.asyncio
    @respx.mock
    async def test_malformed_report(self) -> None:
        """Test that a JSON body of the wrong shape raises ApiError."""
        respx.post(ANALYZE_URL).mock(
            return_value=httpx.Response(200, json={"contributors": "not-a-list"})
        )

        async with ReportClient() as client:
            with pytest.raises(ApiError, match="Malformed report"):
                await client.analyze_repository(REPO_URL)

    @pytest.mark.asyncio
    @respx.mock
    async def test_sparse_report_accepted(self) -> None:
        """Test that nulls in the body are read as empty collections."""
        respx.post(ANALYZE_URL).mock(
            return_value=httpx.Response(
                200, json={"repo_info": None, "contributors": None, "commit_timeline": None}
            )
        )

        async with ReportClient() as client:
            report = await client.analyze_repository(REPO_URL)

        assert report.contributors == []
        assert report.commit_timeline == []


class TestReportClientLifecycle:
    """Tests for client setup and teardown."""

    @pytest.mark.asyncio
    async def test_context_manager_closes(self) -> None:
        """Test that leaving the context closes the HTTP client."""
        client = ReportClient()
        async with client:
            assert client._client is not None
        assert client._client is None

    @pytest.mark.asyncio
    async def test_close_without_open(self) -> None:
        """Test that closing an unused client is a no-op."""
        client = ReportClient()
        await client.close()
        assert client._client is None
