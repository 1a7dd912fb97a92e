"""Logging configuration and utilities.

Structured logging via structlog, rendered as JSON or console text, with
upstream credentials scrubbed from every event before rendering.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

import structlog

from .config import Settings

REDACTED = "**********"


def setup_logging(settings: Settings) -> None:
    """Setup structured logging configuration.

    Args:
        settings: Application settings.
    """
    level = getattr(logging, settings.log_level)
    register_secret(settings.upstream_key)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )

    if settings.log_file:
        log_path = Path(settings.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            filename=log_path,
            maxBytes=_parse_size(settings.log_max_size),
            backupCount=settings.log_backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        logging.getLogger().addHandler(file_handler)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        secret_redactor,
        structlog.processors.StackInfoRenderer(),
    ]

    if settings.log_format == "json":
        processors.extend([
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(),
        ])
    else:
        processors.extend([
            structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
            structlog.dev.ConsoleRenderer(),
        ])

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def _parse_size(size_str: str) -> int:
    """Parse size string like '10MB' or '1GB' to bytes."""
    size_str = size_str.upper().strip()

    if size_str.endswith('KB'):
        return int(size_str[:-2]) * 1024
    elif size_str.endswith('MB'):
        return int(size_str[:-2]) * 1024 * 1024
    elif size_str.endswith('GB'):
        return int(size_str[:-2]) * 1024 * 1024 * 1024
    else:
        return int(size_str)


class SecretRedactor:
    """Processor that masks known secret values and ``api_key`` fields."""

    def __init__(self, secrets: Iterable[str], keys: Iterable[str] = ("api_key",)) -> None:
        """Initialize the processor.

        Args:
            secrets: Literal secret values to mask wherever they appear in
                string fields.
            keys: Event keys whose values are always masked.
        """
        self.secrets = [secret for secret in secrets if secret]
        self.keys = set(keys)

    def add(self, secret: Optional[str]) -> None:
        """Start masking another secret value. Empty values are ignored."""
        if secret and secret not in self.secrets:
            self.secrets.append(secret)

    def __call__(self, logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
        for key, value in event_dict.items():
            if key in self.keys:
                event_dict[key] = REDACTED
            elif isinstance(value, str):
                for secret in self.secrets:
                    value = value.replace(secret, REDACTED)
                event_dict[key] = value
        return event_dict


# Shared by every configuration so secrets registered later still apply to
# loggers cached on first use.
secret_redactor = SecretRedactor([])


def register_secret(secret: Optional[str]) -> None:
    """Mask a secret value in all structured log output.

    Args:
        secret: Value to mask. Empty values are ignored.
    """
    secret_redactor.add(secret)


def bind_context(**kwargs: Any) -> None:
    """Bind context variables to the current context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all context variables."""
    structlog.contextvars.clear_contextvars()


def setup_cli_logging(verbose: bool = False) -> None:
    """Configure structlog for the terminal client.

    Diagnostics go to stderr so command output on stdout stays clean. Only
    warnings are shown unless ``verbose`` is set.

    Args:
        verbose: Also show request and response lines.
    """
    level = logging.INFO if verbose else logging.WARNING

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            secret_redactor,
            structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        cache_logger_on_first_use=False,
    )
