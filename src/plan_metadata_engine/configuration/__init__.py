"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import ConfigurationError, load_configuration
from .runtime_settings import (
    DEFAULT_NOTIFICATION_CAPACITY,
    AuditSettings,
    Configuration,
    NotificationSettings,
    RenderingSettings,
    SchemaSettings,
)

__all__ = [
    "AuditSettings",
    "Configuration",
    "NotificationSettings",
    "RenderingSettings",
    "SchemaSettings",
    "ConfigurationError",
    "load_configuration",
    "DEFAULT_CONFIG_FILENAME",
    "DEFAULT_NOTIFICATION_CAPACITY",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]
