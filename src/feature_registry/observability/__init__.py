"""Observability – structured logging."""

from feature_registry.observability.logging import (
    configure_logging,
    configure_logging_from_settings,
    get_logger,
)

__all__ = ["configure_logging", "configure_logging_from_settings", "get_logger"]
