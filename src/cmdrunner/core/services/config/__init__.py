"""Settings file services"""

from .config_defaults import (
    DEFAULT_DARK_THEME,
    PLACEHOLDER_COMMAND,
    PLACEHOLDER_LABEL,
    get_default_config,
    get_default_payload,
)
from .config_model import CommandEntry, Configuration, NormalizationResult
from .config_reader import ConfigReader
from .config_validator import ConfigValidator
from .config_writer import ConfigWriter
from .settings_store import SettingsStore, default_settings_path

__all__ = [
    "DEFAULT_DARK_THEME",
    "PLACEHOLDER_COMMAND",
    "PLACEHOLDER_LABEL",
    "get_default_config",
    "get_default_payload",
    "CommandEntry",
    "Configuration",
    "NormalizationResult",
    "ConfigReader",
    "ConfigValidator",
    "ConfigWriter",
    "SettingsStore",
    "default_settings_path",
]
