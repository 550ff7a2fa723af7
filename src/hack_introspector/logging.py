"""Logging configuration with secret redaction."""

import logging
import re
from typing import ClassVar


class SecretRedactingFilter(logging.Filter):
    """Filter that redacts secrets from log messages."""

    # Patterns that should be redacted
    SECRET_PATTERNS: ClassVar[list[tuple[re.Pattern[str], str]]] = [
        # GitHub tokens
        (re.compile(r"gh[pousr]_[a-zA-Z0-9]{20,}"), "[REDACTED_GH_TOKEN]"),
        (re.compile(r"github_pat_[a-zA-Z0-9_]+"), "[REDACTED_GH_PAT]"),
        # Google API keys (Gemini)
        (re.compile(r"AIza[0-9A-Za-z_\-]{30,}"), "[REDACTED_GOOGLE_KEY]"),
        # ElevenLabs keys
        (re.compile(r"sk_[a-f0-9]{32,}"), "[REDACTED_ELEVENLABS_KEY]"),
        (re.compile(r"Bearer\s+[a-zA-Z0-9_\-\.]+"), "Bearer [REDACTED]"),
        (re.compile(r"(xi-api-key:\s*)[^\s,\[\]]+", re.IGNORECASE), r"\1[REDACTED]"),
        # key=..., token=..., api_key=... in URLs and messages
        (re.compile(r"([?&]key=)[^\s&]+", re.IGNORECASE), r"\1[REDACTED]"),
        (re.compile(r"(token[=:]\s*)[^\s,\[\]]+", re.IGNORECASE), r"\1[REDACTED]"),
        (re.compile(r"(api[_-]?key[=:]\s*)[^\s,\[\]]+", re.IGNORECASE), r"\1[REDACTED]"),
    ]

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter and redact secrets from log record."""
        record.msg = self._redact(str(record.msg))
        if record.args:
            record.args = tuple(
                self._redact(str(arg)) if isinstance(arg, str) else arg for arg in record.args
            )
        return True

    def _redact(self, text: str) -> str:
        for pattern, replacement in self.SECRET_PATTERNS:
            text = pattern.sub(replacement, text)
        return text


def setup_logging(
    verbose: bool = False,
    json_format: bool = False,
) -> None:
    """Configure logging for the application.

    Args:
        verbose: Enable debug level logging.
        json_format: Use JSON format for logs (useful for structured logging).
    """
    level = logging.DEBUG if verbose else logging.INFO

    if json_format:
        format_str = '{"time": "%(asctime)s", "level": "%(levelname)s", "name": "%(name)s", "message": "%(message)s"}'
    else:
        format_str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

    logging.basicConfig(
        level=level,
        format=format_str,
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    redaction_filter = SecretRedactingFilter()

    for handler in root_logger.handlers:
        if not any(isinstance(f, SecretRedactingFilter) for f in handler.filters):
            handler.addFilter(redaction_filter)

    # Keep the HTTP stack quiet unless something goes wrong
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name.

    Args:
        name: Logger name, typically __name__ of the calling module.

    Returns:
        Configured logger instance.
    """
    return logging.getLogger(name)
