import logging
import sys
from typing import Any, List
import structlog
from callpulse.core.config import settings


def _renderer() -> Any:
    # Readable console output while developing, JSON lines everywhere else
    if settings.ENVIRONMENT == "development":
        return structlog.dev.ConsoleRenderer(colors=False)
    return structlog.processors.JSONRenderer()


def setup_logging() -> None:
    """Configure structured logging for the service."""
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )
    # httpx logs every request at INFO; probes would drown the service's own events
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))

    processors: List[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.processors.TimeStamper(fmt="ISO"),
        structlog.processors.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FUNC_NAME,
                        structlog.processors.CallsiteParameter.LINENO]
        ),
        structlog.processors.format_exc_info,
        _renderer(),
    ]

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> Any:
    """Get a configured logger instance."""
    return structlog.get_logger(name)


def bind_remote_api(base_url: str) -> None:
    """Attach the remote API base URL to every subsequent log event."""
    structlog.contextvars.bind_contextvars(remote_api=base_url)
