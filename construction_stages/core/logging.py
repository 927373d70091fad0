"""structlog setup for the stages API.

Application events (stage_created, stage_update_rejected, ...) and stdlib
records from uvicorn and SQLAlchemy go through one ProcessorFormatter, so both
render as JSON in production or through ConsoleRenderer in debug.
"""

import logging.config

import structlog
from asgi_correlation_id.context import correlation_id


def add_correlation_id(logger, method, event_dict):
    """Tag the event with the X-Request-ID of the current request, if any."""
    cid = correlation_id.get(None)
    if cid:
        event_dict["correlation_id"] = cid
    return event_dict


def configure_structlog(log_level: str = "INFO", json_logs: bool = True, log_sql: bool = False) -> None:
    """Configure structlog and route stdlib logging through it.

    Must run before modules call structlog.get_logger() (loggers are cached
    on first use).

    Args:
        log_level: Root log level
        json_logs: JSONRenderer when True, ConsoleRenderer otherwise
        log_sql: Emit SQLAlchemy statements at INFO
    """
    pre_chain = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_correlation_id,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if json_logs:
        # unhandled_exception logs exc_info=True; render the traceback as a string
        render = [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        render = [structlog.dev.ConsoleRenderer()]

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "structured": {
                "()": structlog.stdlib.ProcessorFormatter,
                "processors": [structlog.stdlib.ProcessorFormatter.remove_processors_meta, *render],
                "foreign_pre_chain": pre_chain,
            },
        },
        "handlers": {
            "stdout": {
                "class": "logging.StreamHandler",
                "formatter": "structured",
                "stream": "ext://sys.stdout",
            },
        },
        "root": {"handlers": ["stdout"], "level": log_level},
        "loggers": {
            "uvicorn.access": {"level": "WARNING"},
            "sqlalchemy.engine": {"level": "INFO" if log_sql else "WARNING"},
        },
    })

    structlog.configure(
        processors=pre_chain + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
