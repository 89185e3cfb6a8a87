"""Route ``nullable`` log records through structlog.

The package logs with ``logging.getLogger(__name__)`` and attaches no
handlers of its own. An application that wants those records rendered
calls :func:`configure_logging` once at startup; the result is either
console lines or one JSON object per line on stderr.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from nullable.config.settings import NullableSettings

_PRE_CHAIN: tuple[structlog.types.Processor, ...] = (
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
)


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(
    *,
    verbose: bool | None = None,
    log_json: bool | None = None,
    settings: NullableSettings | None = None,
) -> None:
    """Install a stderr handler that renders records with structlog.

    Keyword arguments override the matching fields of *settings*, which
    defaults to the cached process settings.

    Args:
        verbose: Let ``nullable`` DEBUG records through; otherwise WARNING.
        log_json: Render JSON lines rather than console output.
        settings: Source of the defaults for *verbose* and *log_json*.
    """
    if settings is None:
        from nullable.config.settings import get_settings

        settings = get_settings()
    verbose = settings.verbose if verbose is None else verbose
    log_json = settings.log_json if log_json is None else log_json

    structlog.configure(
        processors=[*_PRE_CHAIN, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=list(_PRE_CHAIN),
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger("nullable").setLevel(logging.DEBUG if verbose else logging.WARNING)
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)
