"""Logging for the vendorwalk command — structlog rendered through stdlib logging."""

from __future__ import annotations

import logging
import os
import sys

import structlog


def setup_logging(level: str | None = None) -> None:
    """Send structured logs to stderr; stdout is left to the skip report.

    ``VENDORWALK_LOG_LEVEL`` (default INFO) sets the level unless *level* is
    given. ``VENDORWALK_LOG_FORMAT=json`` switches from console to JSON lines.
    """
    log_level = (level or os.environ.get("VENDORWALK_LOG_LEVEL", "INFO")).upper()
    if os.environ.get("VENDORWALK_LOG_FORMAT", "console").lower() == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    pre_chain: list[structlog.types.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *pre_chain,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )
    logger = logging.getLogger("vendorwalk")
    logger.handlers[:] = [handler]
    logger.setLevel(log_level)
    logger.propagate = False
