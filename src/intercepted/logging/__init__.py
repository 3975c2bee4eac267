"""Intercepted Logging — hexagonal logging port and structlog adapter."""

from intercepted.logging.port import LoggingPort
from intercepted.logging.structlog_adapter import StructlogAdapter, default_adapter, get_logger

__all__ = ["LoggingPort", "StructlogAdapter", "default_adapter", "get_logger"]
