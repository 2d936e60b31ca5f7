"""Configuration for nomad-export."""

from .constants import DEFAULT_ADDRESS, EXCLUDABLE_DATA_TYPES
from .settings import ClientSettings, get_env_var

__all__ = ["ClientSettings", "DEFAULT_ADDRESS", "EXCLUDABLE_DATA_TYPES", "get_env_var"]
