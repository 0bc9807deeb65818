"""
Centralized Logging Configuration.

All modules must use this logging setup. Do not create standalone loggers.
Configuration comes from the ``logging`` section of the settings file and
can be overridden by the global --verbose/--debug flags.

Log records are written to stderr so that command output on stdout can be
piped safely. An optional rotating JSONL file receives every record.

Usage:
    from rpaasv2.core.logging import get_logger, setup_logging

    # Setup once per invocation
    setup_logging(app_config.logging, level="DEBUG")

    # Get logger in modules
    logger = get_logger(__name__)
    logger.debug("API request", method="GET", path="/resources/foo/autoscale")
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import structlog
from structlog.typing import Processor

from rpaasv2.core.config_schema import LoggingSchema


def setup_logging(
    config: LoggingSchema | None = None,
    level: str | None = None,
    format_type: str | None = None,
) -> None:
    """
    Configure structured logging for the CLI.

    Args:
        config: Logging settings. Defaults apply when None.
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Overrides config.
        format_type: Output format ('json' or 'console'). Overrides config.
    """
    config = config or LoggingSchema()

    effective_level = level if level is not None else config.level
    effective_format = format_type if format_type is not None else config.format

    log_level = getattr(logging, effective_level.upper())

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    json_formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.processors.JSONRenderer(),
        foreign_pre_chain=shared_processors,
    )

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    if effective_format == "console":
        console_formatter = structlog.stdlib.ProcessorFormatter(
            processor=structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
            foreign_pre_chain=shared_processors,
        )
    else:
        console_formatter = json_formatter

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if config.handlers.console.enabled:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(console_formatter)
        root_logger.addHandler(console_handler)

    file_config = config.handlers.file
    if file_config.enabled:
        log_path = Path(file_config.path).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            filename=str(log_path),
            maxBytes=file_config.max_bytes,
            backupCount=file_config.backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(json_formatter)
        root_logger.addHandler(file_handler)

    # httpx logs every request at INFO; keep it for --debug only
    third_party_level = log_level if log_level <= logging.DEBUG else logging.WARNING
    logging.getLogger("httpx").setLevel(third_party_level)
    logging.getLogger("httpcore").setLevel(third_party_level)


def get_logger(name: str) -> Any:
    """
    Get a logger instance for the given name.

    Args:
        name: Logger name, typically __name__

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)
