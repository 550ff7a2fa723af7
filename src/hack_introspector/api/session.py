"""Latest-request-wins guard for report fetches.

Each fetch takes a ticket from a monotonic counter. When a response
arrives, it is accepted only if no newer fetch has started since; a slow
response for an old URL can then never replace the report for the URL the
user asked about last.
"""

import itertools
import logging

from hack_introspector.api.http import ReportClient
from hack_introspector.report.models import AnalyticsReport

logger = logging.getLogger(__name__)


class ReportSession:
    """Holds the most recent accepted report."""

    def __init__(self, client: ReportClient) -> None:
        self._client = client
        self._tickets = itertools.count(1)
        self._latest_ticket = 0
        self.report: AnalyticsReport | None = None

    @property
    def latest_ticket(self) -> int:
        return self._latest_ticket

    def begin(self) -> int:
        """Start a request and return its ticket."""
        self._latest_ticket = next(self._tickets)
        return self._latest_ticket

    def accept(self, ticket: int, report: AnalyticsReport) -> bool:
        """Store a report if its ticket is still the newest.

        Returns:
            True if stored, False if the response was stale and discarded.
        """
        if ticket != self._latest_ticket:
            logger.info(
                "Discarding stale report (ticket %d, latest %d)", ticket, self._latest_ticket
            )
            return False
        self.report = report
        return True

    async def load(self, repo_url: str) -> AnalyticsReport | None:
        """Fetch a report and keep it unless a newer load started meanwhile.

        Returns:
            The report if accepted, None if it was superseded.

        Raises:
            ApiError: If the fetch fails.
        """
        ticket = self.begin()
        report = await self._client.analyze_repository(repo_url)
        return report if self.accept(ticket, report) else None
