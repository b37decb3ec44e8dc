"""Configuration: packaged settings and the dotted-key repository."""

from .repository import ConfigRepository
from .settings import ResponderSettings, SerializerSettings, clear_settings_cache, get_settings

__all__ = [
    "ConfigRepository",
    "ResponderSettings",
    "SerializerSettings",
    "clear_settings_cache",
    "get_settings",
]
