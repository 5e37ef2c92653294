"""Observability – structlog configuration."""
from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from feature_registry.config.settings import RegistrySettings


def configure_logging(level: int | str = logging.INFO, *, json: bool = True) -> None:
    """Route structlog through stdlib logging with a JSON or console renderer.

    Call once from the application's composition root; see
    :func:`configure_logging_from_settings` for the env-driven variant.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    renderer: Any = (
        structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer()
    )
    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def configure_logging_from_settings(settings: RegistrySettings, *, json: bool = True) -> None:
    """Apply ``settings.log_level`` (``FEATURE_REGISTRY_LOG_LEVEL``)."""
    configure_logging(settings.log_level_number, json=json)


__all__ = ["configure_logging", "configure_logging_from_settings"]
