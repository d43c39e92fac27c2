"""Structured logging via structlog.

Configures structlog once at startup. Library modules keep using
`logging.getLogger(__name__)`; the root handler formats those records with
structlog's `ProcessorFormatter`, so stdlib and structlog events share one
renderer and one stream.

Renderer selection:
  debug=True  -- `ConsoleRenderer` with colours for local use.
  debug=False -- `JSONRenderer` for machine-parseable logs (CI, pipelines).
"""

from __future__ import annotations

import logging
import sys

import structlog


def configure_structlog(debug: bool = True, level: str | None = None) -> None:
    """Configure structlog for the process lifetime.

    `level` is a stdlib level name ("DEBUG", "INFO", ...). When omitted it
    follows `debug`. Logs go to stderr so a JSON report on stdout stays
    parseable. Calling multiple times is safe.
    """
    if level is None:
        log_level = logging.DEBUG if debug else logging.INFO
    else:
        log_level = logging.getLevelName(level.upper())
        if not isinstance(log_level, int):
            log_level = logging.INFO

    shared_processors: list = [
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if debug:
        render_processors: list = [structlog.dev.ConsoleRenderer()]
    else:
        render_processors = [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=[structlog.stdlib.filter_by_level]
        + shared_processors
        + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Stdlib records from detector and registry modules go through the same
    # processors and renderer as structlog events.
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta]
        + render_processors,
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    logging.basicConfig(handlers=[handler], level=log_level, force=True)
