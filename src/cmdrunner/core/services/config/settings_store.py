"""Settings store - facade over reader, writer and validator

Owns the on-disk settings file: ensures it exists (seeding defaults on
first run), loads and parses it, and applies validation/defaulting rules.
"""

from pathlib import Path
from typing import Any, List, Optional, Union

from ....utils import app_logger, get_app_data_dir
from .config_defaults import SETTINGS_FILENAME
from .config_model import NormalizationResult
from .config_reader import ConfigReader
from .config_validator import ConfigValidator
from .config_writer import ConfigWriter


def default_settings_path() -> Path:
    """Per-user settings file location"""
    return get_app_data_dir() / SETTINGS_FILENAME


class SettingsStore:
    """Settings file facade

    Usage:
        store = SettingsStore()
        store.ensure_exists()
        result = store.normalize(store.load())
    """

    def __init__(self, settings_path: Optional[Union[str, Path]] = None):
        """
        Args:
            settings_path: settings file path, None for the per-user default
        """
        self._settings_path = Path(settings_path) if settings_path else default_settings_path()

        self._reader = ConfigReader(self._settings_path)
        self._writer = ConfigWriter(self._settings_path)
        self._validator = ConfigValidator()

        app_logger.log_config_event(
            "SettingsStore initialized", {"settings_path": str(self._settings_path)}
        )

    @property
    def settings_path(self) -> Path:
        return self._settings_path

    def ensure_exists(self) -> bool:
        """Create the settings file with the default payload if it is absent

        Returns:
            True if the file was created by this call

        Raises:
            ConfigurationError: creation failed for a reason other than
                the file already existing
        """
        return self._writer.create_default()

    def load(self) -> Any:
        """Read and parse the settings file (never cached)

        Raises:
            SettingsParseError: malformed JSON
            ConfigurationError: file missing or unreadable
        """
        return self._reader.load_raw()

    def validate(self, raw: Any) -> List[str]:
        """Hard validation violations for a parsed settings value"""
        return self._validator.validate_config(raw)["issues"]

    def normalize(self, raw: Any) -> NormalizationResult:
        """Fill defaults; structural violations yield an empty command list"""
        return self._validator.normalize(raw)

    def load_normalized(self) -> NormalizationResult:
        return self.normalize(self.load())
