"""
structlog setup for the parsing service and CLI.

Every event carries the pipeline version that produced it, so log lines can
be matched against stored bodies after a decoder or sanitizer change.
"""

import logging
from typing import Any, MutableMapping, Optional

import structlog

from .config import settings
from .version import get_current_pipeline_version


def add_pipeline_version(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """structlog processor stamping the current pipeline version on each event."""
    event_dict.setdefault("pipeline", get_current_pipeline_version().to_repr())
    return event_dict


def setup_logging(log_level: Optional[str] = None, log_json: Optional[bool] = None) -> None:
    """
    Configure structlog.

    Request-scoped values bound with structlog.contextvars (request_id in the
    API) are merged into every event.

    Args:
        log_level: Level name overriding settings.log_level
        log_json: Renderer choice overriding settings.log_json
    """
    level = (log_level or settings.log_level).upper()
    if log_json is None:
        log_json = settings.log_json

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            add_pipeline_version,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer() if log_json else structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
