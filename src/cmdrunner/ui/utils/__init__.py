"""UI utilities"""

from .error_dialogs import show_error_list, show_error_with_details
from .icon_utils import ICON_DARK, ICON_LIGHT, get_tray_icon, icon_variant

__all__ = [
    "ICON_DARK",
    "ICON_LIGHT",
    "get_tray_icon",
    "icon_variant",
    "show_error_list",
    "show_error_with_details",
]
