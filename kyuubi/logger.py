import logging
import os
from typing import Any

import structlog
from structlog.types import EventDict, Processor


def drop_color_message_key(_, __, event_dict: EventDict) -> EventDict:
    """
    Uvicorn logs the message a second time in the extra `color_message`, but we don't
    need it. This processor drops the key from the event dict if it exists.
    """
    event_dict.pop("color_message", None)
    return event_dict


def _is_configured() -> bool:
    """Tell whether the root logger already carries a structlog formatter."""
    for handler in logging.getLogger().handlers:
        if (isinstance(handler, logging.StreamHandler) and
                isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter)):
            return True
    return False


def setup_logging(json_logs: bool = False, log_level: str = "INFO"):
    """Configure structlog for the kyuubi package"""

    root_logger = logging.getLogger()
    if _is_configured():
        # structlog is already set up, don't interfere
        root_logger.setLevel(log_level.upper())
        return

    timestamper = structlog.processors.TimeStamper(fmt="iso")

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.stdlib.ExtraAdder(),
        drop_color_message_key,
        timestamper,
        structlog.processors.StackInfoRenderer(),
    ]

    if json_logs:
        # Format the exception only for JSON logs, as we want to pretty-print them when
        # using the ConsoleRenderer
        shared_processors.append(structlog.processors.format_exc_info)

    structlog.configure(
        processors=shared_processors
        + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    log_renderer: structlog.types.Processor
    if json_logs:
        log_renderer = structlog.processors.JSONRenderer()
    else:
        log_renderer = structlog.dev.ConsoleRenderer()

    formatter = structlog.stdlib.ProcessorFormatter(
        # These run ONLY on `logging` entries that do NOT originate within
        # structlog.
        foreign_pre_chain=shared_processors,
        # These run on ALL entries after the pre_chain is done.
        processors=[
            # Remove _record & _from_structlog.
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            log_renderer,
        ],
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level.upper())


class KyuubiStructLogger:
    """
    Structured logger for the Kyuubi package.
    Values passed to `bind` are attached to every message of the returned logger.
    The wrapped structlog logger stays lazy, so loggers created at import time
    follow a later `setup_logging`.
    """

    def __init__(self, log_name: str = "kyuubi", **initial_values: Any):
        self.log_name = log_name
        self.initial_values = initial_values
        self.logger = structlog.stdlib.get_logger(log_name, **initial_values)

    def bind(self, **new_values: Any) -> "KyuubiStructLogger":
        """Return a new logger carrying `new_values` on each event."""
        return KyuubiStructLogger(self.log_name, **{**self.initial_values, **new_values})

    def debug(self, event: str | None = None, *args: Any, **kw: Any):
        self.logger.debug(event, *args, **kw)

    def info(self, event: str | None = None, *args: Any, **kw: Any):
        self.logger.info(event, *args, **kw)

    def warning(self, event: str | None = None, *args: Any, **kw: Any):
        self.logger.warning(event, *args, **kw)

    warn = warning

    def error(self, event: str | None = None, *args: Any, **kw: Any):
        self.logger.error(event, *args, **kw)

    def critical(self, event: str | None = None, *args: Any, **kw: Any):
        self.logger.critical(event, *args, **kw)

    def exception(self, event: str | None = None, *args: Any, **kw: Any):
        self.logger.exception(event, *args, **kw)


def get_kyuubi_logger(log_name: str = "kyuubi") -> KyuubiStructLogger:
    """Return the package logger without touching the logging configuration."""
    return KyuubiStructLogger(log_name)


def init_logger(debug: bool = None, json_logs: bool = None) -> KyuubiStructLogger:
    """
    Initialize the structured logger for kyuubi package.

    Args:
        debug: Log at DEBUG level, defaults to the KYUUBI_LOG_LEVEL environment variable
        json_logs: Render JSON lines, defaults to the KYUUBI_JSON_LOGS environment variable

    Returns:
        KyuubiStructLogger: Configured structured logger instance
    """
    if debug is None:
        log_level = os.environ.get("KYUUBI_LOG_LEVEL", "INFO")
    else:
        log_level = "DEBUG" if debug else "INFO"
    if json_logs is None:
        json_logs = os.environ.get("KYUUBI_JSON_LOGS", "false").strip().lower() == "true"

    setup_logging(json_logs=json_logs, log_level=log_level)

    return KyuubiStructLogger("kyuubi")
