"""User interface: tray, about view, dialogs"""

from .about_page import show_about_page
from .components import TrayController, TrayWidget

__all__ = ["TrayController", "TrayWidget", "show_about_page"]
