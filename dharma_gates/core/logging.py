"""Logging configuration for the directory service."""
from __future__ import annotations

import logging
from logging.config import dictConfig

import structlog


def _resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: int | str = logging.INFO, *, json_output: bool = True) -> None:
    """Route stdlib and structlog records through one console handler.

    ``json_output=False`` swaps the JSON renderer for the human readable
    console renderer, which the CLI uses.
    """

    numeric_level = _resolve_level(level)
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "console": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "processor": structlog.dev.ConsoleRenderer(colors=False),
                }
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "console",
                    "level": numeric_level,
                }
            },
            "root": {"handlers": ["console"], "level": numeric_level},
            "loggers": {
                # request lines from the geocoder client are too chatty at INFO
                "httpx": {"level": max(numeric_level, logging.WARNING)},
            },
        }
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    processors = [
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.StackInfoRenderer(),
    ]
    if json_output:
        processors.extend(
            [
                structlog.processors.format_exc_info,
                structlog.processors.EventRenamer("message"),
                structlog.processors.dict_tracebacks,
            ]
        )
    processors.append(renderer)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
