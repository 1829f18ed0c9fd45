"""UI components"""

from .system_tray import TrayController, TrayWidget

__all__ = ["TrayController", "TrayWidget"]
