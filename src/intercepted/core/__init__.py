"""Intercepted Core — configuration."""

from intercepted.core.config import Config, config_properties

__all__ = ["Config", "config_properties"]
