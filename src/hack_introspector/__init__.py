"""Hackathon repository analytics: turns backend reports into chart-ready data."""

__version__ = "0.1.0"
