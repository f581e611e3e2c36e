"""
Logging configuration for the API server.

Everything goes to stdout. Access-log lines for probe endpoints are
dropped, and auth events stay at INFO even when the service runs quieter.
"""

import logging
from typing import Any, Dict

PROBE_PATHS = ("/health", "/healthz", "/metrics")


class HealthCheckFilter(logging.Filter):
    """Drop uvicorn access-log lines for probe endpoints."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name != "uvicorn.access":
            return True
        message = record.getMessage()
        return not any(f"GET {path} " in message for path in PROBE_PATHS)


def _logger(handler: str, level: str) -> Dict[str, Any]:
    return {"handlers": [handler], "level": level, "propagate": False}


def get_logging_config(level: str = "INFO") -> Dict[str, Any]:
    """
    Build a ``logging.config.dictConfig`` dict.

    Args:
        level: Level for service and root loggers (case-insensitive)
    """
    level = level.upper()
    # Auth events are never hidden by a quieter service level
    auth_level = level if logging.getLevelName(level) == logging.DEBUG else "INFO"

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "probes": {"()": HealthCheckFilter},
        },
        "formatters": {
            "service": {"format": "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"},
            "access": {"format": "%(asctime)s %(message)s"},
        },
        "handlers": {
            "stdout": {
                "class": "logging.StreamHandler",
                "formatter": "service",
                "stream": "ext://sys.stdout",
            },
            "access": {
                "class": "logging.StreamHandler",
                "formatter": "access",
                "stream": "ext://sys.stdout",
                "filters": ["probes"],
            },
        },
        "loggers": {
            "uvicorn": _logger("stdout", "INFO"),
            "uvicorn.error": _logger("stdout", "INFO"),
            "uvicorn.access": _logger("access", "INFO"),
            "nucampsite": _logger("stdout", level),
            "nucampsite.modules.auth": _logger("stdout", auth_level),
        },
        "root": {"level": level, "handlers": ["stdout"]},
    }
