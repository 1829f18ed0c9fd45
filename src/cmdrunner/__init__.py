"""CMD Runner - tray launcher for shell commands

Reads a JSON settings file, shows its commands in a system tray menu and
rebuilds the menu whenever the file changes.
"""

__version__ = "1.0.0"
__description__ = "CMD Runner"

from .core.app_lifecycle import AppLifecycle
from .utils import app_logger

__all__ = ["AppLifecycle", "app_logger"]
