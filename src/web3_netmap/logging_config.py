"""structlog setup shared by the CLI and library callers.

Both ``structlog.get_logger()`` and stdlib ``logging.getLogger()`` output
go through one ``ProcessorFormatter``, so library code logs the same way
no matter who configured the process.  Output goes to stderr by default
because the CLI reserves stdout for its JSON results.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, TextIO

import structlog

if TYPE_CHECKING:
    from web3_netmap.config.settings import Settings


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
    ]


def configure_logging(
    json_output: bool = False,
    log_level: str = "INFO",
    stream: TextIO | None = None,
) -> None:
    """Route structlog and stdlib logging through a single handler.

    Args:
        json_output: Render JSON lines instead of the coloured console format.
        log_level: Root log level name, case-insensitive.
        stream: Destination stream; ``sys.stderr`` when omitted.
    """
    shared = _shared_processors()
    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, log_level.upper()))


def configure_from_settings(settings: Settings) -> None:
    """Apply the ``log_json`` / ``log_level`` settings."""
    configure_logging(json_output=settings.log_json, log_level=settings.log_level)
