"""Settings and logging configuration."""

from nullable.config.logging import configure_logging
from nullable.config.settings import NullableSettings, get_settings

__all__ = ["NullableSettings", "configure_logging", "get_settings"]
