"""
Logging Setup.

structlog rendering on top of the standard logging module, so records from
uvicorn and SQLAlchemy share one format with our own. Settings come from
config/settings/logging.yaml; arguments to setup_logging() override them.

Every record carries timestamp, level, logger, event, func_name and lineno.
Inside a request it also carries request_id, method and path (bound by
RequestContextMiddleware). Keys passed as `extra={...}` are lifted to the
top level of the record.

Usage:
    from notebook.core.logging import get_logger, setup_logging

    setup_logging(level="DEBUG", format_type="console")

    logger = get_logger(__name__)
    logger.info("Note created", extra={"note_id": 12, "tags": ["work"]})
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Any

import structlog
from structlog.typing import EventDict, Processor, WrappedLogger

from notebook.core.config import find_project_root, load_yaml_config
from notebook.core.config_schema import FileHandlerSchema, LoggingSchema

# Third-party loggers that are too chatty at INFO
QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "aiosqlite", "asyncio")


def load_logging_settings() -> LoggingSchema:
    """Read and validate config/settings/logging.yaml."""
    return LoggingSchema(**load_yaml_config("logging.yaml"))


def lift_extra(_: WrappedLogger, __: str, event_dict: EventDict) -> EventDict:
    """Merge the `extra` mapping of a log call into the record itself."""
    extra = event_dict.pop("extra", None)
    if isinstance(extra, dict):
        for key, value in extra.items():
            event_dict.setdefault(key, value)
    return event_dict


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        lift_extra,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ],
        ),
    ]


def _formatter(renderer: Processor) -> structlog.stdlib.ProcessorFormatter:
    return structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=_shared_processors(),
    )


def _file_handler(
    config: FileHandlerSchema,
    formatter: logging.Formatter,
) -> RotatingFileHandler:
    """Rotating JSONL file under the project root."""
    path = find_project_root() / config.path
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        filename=str(path),
        maxBytes=config.max_bytes,
        backupCount=config.backup_count,
        encoding="utf-8",
    )
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    level: str | None = None,
    format_type: str | None = None,
    enable_console: bool | None = None,
    enable_file_logging: bool | None = None,
) -> None:
    """
    Configure structlog and the root logger.

    Safe to call more than once; existing root handlers are replaced.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        format_type: "json" or "console"
        enable_console: Write records to stdout
        enable_file_logging: Write JSON records to the configured file
    """
    settings = load_logging_settings()
    handlers = settings.handlers

    level = level or settings.level
    format_type = format_type or settings.format
    if enable_console is None:
        enable_console = handlers.console.enabled
    if enable_file_logging is None:
        enable_file_logging = handlers.file.enabled

    structlog.configure(
        processors=_shared_processors() + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    json_formatter = _formatter(structlog.processors.JSONRenderer())

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        if format_type == "console":
            console_handler.setFormatter(_formatter(structlog.dev.ConsoleRenderer(colors=True)))
        else:
            console_handler.setFormatter(json_formatter)
        root_logger.addHandler(console_handler)

    if enable_file_logging:
        root_logger.addHandler(_file_handler(handlers.file, json_formatter))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> Any:
    """Get a structlog logger, typically `get_logger(__name__)`."""
    return structlog.get_logger(name)
