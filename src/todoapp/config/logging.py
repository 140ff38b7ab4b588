"""Route todoapp log records through structlog onto stderr.

Library modules log with plain ``logging.getLogger(__name__)``; the CLI calls
:func:`configure_logging` once per invocation. stdout stays reserved for
command results, so every log line goes to stderr, rendered either for a
terminal or as one JSON object per line (``--log-json``).
"""

from __future__ import annotations

import logging
import sys

import structlog

APP_LOGGER = "todoapp"
HANDLER_NAME = "todoapp.stderr"


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Install the stderr handler and set the todoapp level.

    Calling it again replaces the handler it installed earlier and leaves any
    other root handlers alone.

    Args:
        verbose: Let DEBUG records from ``todoapp.*`` through (policy edits,
            service failures). Third-party loggers stay at WARNING either way.
        log_json: Render JSON lines instead of console output.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
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

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    root = logging.getLogger()
    for stale in [h for h in root.handlers if h.get_name() == HANDLER_NAME]:
        root.removeHandler(stale)
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger(APP_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
