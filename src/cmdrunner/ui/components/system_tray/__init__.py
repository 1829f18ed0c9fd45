"""System tray component"""

from .tray_controller import DEFAULT_ACTIONS, TrayController
from .tray_widget import TrayWidget

__all__ = ["DEFAULT_ACTIONS", "TrayController", "TrayWidget"]
