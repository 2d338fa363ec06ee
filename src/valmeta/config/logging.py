"""structlog configuration for valmeta.

Everything valmeta logs goes through stdlib ``logging.getLogger(__name__)``
and is rendered by structlog's ``ProcessorFormatter`` on stderr:

- Human (default): console renderer, colored on a TTY
- JSON (--log-json): one JSON object per line, tracebacks flattened into
  an ``exception`` string
"""

from __future__ import annotations

import logging
import sys

import structlog

PACKAGE_LOGGER = "valmeta"


def _renderer_chain(log_json: bool) -> list[structlog.types.Processor]:
    if log_json:
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Route stdlib and structlog records to a single stderr handler.

    Args:
        verbose: Let the ``valmeta`` logger emit DEBUG records (skipped
            constraint kinds, catalogue loads). Otherwise WARNING and up.
        log_json: Use JSON lines instead of the console renderer.

    Third-party loggers stay at WARNING either way. Calling this again
    replaces the handler rather than adding one.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *_renderer_chain(log_json),
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
