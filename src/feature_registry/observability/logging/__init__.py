"""Observability – structured logging helpers."""
from feature_registry.observability.logging.factory import (
    configure_logging,
    configure_logging_from_settings,
)
from feature_registry.observability.logging.processors import get_logger

__all__ = ["configure_logging", "configure_logging_from_settings", "get_logger"]
