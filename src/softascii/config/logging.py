"""structlog configuration for softascii.

Library modules log through plain ``logging.getLogger(__name__)`` and never
install handlers.  Applications that want to see those records (checked
construction rejections, failed revalidations) call
:func:`configure_logging` directly, or :func:`apply_logging` to take the
flags from ``SOFTASCII_*`` environment variables.

Two output modes:
- Human (default): console-rendered lines on stderr
- JSON (``log_json``): one JSON object per record on stderr
"""

from __future__ import annotations

import logging
import sys

import structlog

from softascii.config.settings import SoftAsciiSettings

PACKAGE_LOGGER = "softascii"


def _pre_chain() -> list[structlog.types.Processor]:
    """Processors applied to both structlog and stdlib records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Route softascii (and structlog) records to a single stderr handler.

    Calling this again replaces the previous handler instead of adding one.

    Args:
        verbose: Show the package's DEBUG records. When False, only WARNING+.
        log_json: Use the JSON renderer instead of the console renderer.
    """
    pre_chain = _pre_chain()

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)


def apply_logging(settings: SoftAsciiSettings | None = None) -> None:
    """Configure logging from *settings*, read from the environment if omitted."""
    if settings is None:
        settings = SoftAsciiSettings()
    configure_logging(verbose=settings.verbose, log_json=settings.log_json)
