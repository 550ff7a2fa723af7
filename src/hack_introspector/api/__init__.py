"""Backend API client."""

from hack_introspector.api.http import ApiError, ReportClient
from hack_introspector.api.session import ReportSession

__all__ = ["ApiError", "ReportClient", "ReportSession"]
