"""Async HTTP client for the analysis backend.

One request, one response: no retries and no backoff. A failed analysis
surfaces as a single ApiError for the caller to show.
"""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from hack_introspector import __version__
from hack_introspector.report.models import AnalyticsReport

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Raised when the backend rejects a request or cannot be reached.

    ``status`` is the HTTP status code, or 0 for transport failures.
    """

    def __init__(self, status: int, message: str) -> None:
        self.status = status
        super().__init__(message)


class ReportClient:
    """Async client for the backend's analyze endpoint."""

    DEFAULT_BASE_URL = "http://localhost:8080"
    DEFAULT_TIMEOUT = 60.0
    ANALYZE_PATH = "/api/analyze"

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Backend base URL.
            timeout: Request timeout in seconds. Analyses of large repos are slow.
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                headers={
                    "Content-Type": "application/json",
                    "User-Agent": f"hack-introspector/{__version__}",
                },
            )
        return self._client

    async def _post(self, path: str, payload: dict[str, Any]) -> Any:
        """POST JSON and return the decoded response body.

        Raises:
            ApiError: On non-2xx responses, transport errors or non-JSON bodies.
        """
        client = await self._ensure_client()
        logger.debug("POST %s", path)

        try:
            response = await client.post(path, json=payload)
        except httpx.TimeoutException as e:
            logger.warning("Timeout for POST %s", path)
            raise ApiError(0, f"Request timeout: {e}") from e
        except httpx.HTTPError as e:
            logger.warning("Network error for POST %s: %s", path, e)
            raise ApiError(0, f"Network error: {e}") from e

        if not response.is_success:
            logger.warning("Backend returned %d for POST %s", response.status_code, path)
            raise ApiError(
                response.status_code,
                f"API Error: {response.reason_phrase or response.status_code}",
            )

        try:
            return response.json()
        except ValueError as e:
            raise ApiError(response.status_code, f"Invalid JSON response: {e}") from e

    async def analyze_repository(self, repo_url: str) -> AnalyticsReport:
        """Ask the backend to analyze a repository.

        Args:
            repo_url: GitHub repository URL.

        Returns:
            The analytics report.

        Raises:
            ApiError: If the request fails or the response is not a report.
        """
        data = await self._post(self.ANALYZE_PATH, {"repoUrl": repo_url})
        try:
            report = AnalyticsReport.model_validate(data)
        except ValidationError as e:
            raise ApiError(200, f"Malformed report: {e.error_count()} validation errors") from e

        logger.info(
            "Received report for %s (%d commits)",
            report.repo_info.full_name or repo_url,
            len(report.commit_timeline),
        )
        return report

    async def close(self) -> None:
        """Close the HTTP client and cleanup resources."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "ReportClient":
        await self._ensure_client()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
