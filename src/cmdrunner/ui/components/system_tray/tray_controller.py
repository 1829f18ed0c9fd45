"""System tray controller - Business logic component

Handles the business logic for system tray operations including:
- Publishing menu trees with the fixed Settings/About/Quit actions
- Resolving leaf clicks to commands and dispatching them
- Icon theme selection and error notifications
"""

from pathlib import Path
from typing import List, Optional

from PySide6.QtCore import QObject, QUrl, Signal
from PySide6.QtGui import QDesktopServices
from PySide6.QtWidgets import QSystemTrayIcon

from ....core.services.command_dispatcher import CommandDispatcher
from ....core.services.menu_builder import MenuAction, MenuLeaf, MenuTree, iter_leaves
from ....utils import app_logger, LogCategory
from ...about_page import show_about_page
from ...utils import get_tray_icon, show_error_list
from .tray_widget import MenuItem, TrayWidget

ACTION_SETTINGS = "open_settings"
ACTION_ABOUT = "show_about"
ACTION_QUIT = "quit"

DEFAULT_ACTIONS = (
    MenuAction("Settings", ACTION_SETTINGS),
    MenuAction("About", ACTION_ABOUT),
    MenuAction("Quit", ACTION_QUIT),
)

APP_TITLE = "CMD Runner"


class TrayController(QObject):
    """System tray controller

    Owns the tray widget and the currently published menu. Quitting is
    forwarded as a signal; the application lifecycle decides what that means.
    """

    settings_requested = Signal()
    about_requested = Signal()
    quit_requested = Signal()
    settings_opened = Signal(str)
    command_launched = Signal(str)

    def __init__(
        self,
        dispatcher: Optional[CommandDispatcher] = None,
        settings_path: Optional[Path] = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)

        self._component_name = "tray_controller"
        self._dispatcher = dispatcher or CommandDispatcher()
        self._settings_path = Path(settings_path) if settings_path else None

        self._tray_widget = TrayWidget(self)
        self._tray_widget.command_triggered.connect(self._on_command_triggered)
        self._tray_widget.menu_action_triggered.connect(self._on_menu_action)
        self._tray_widget.icon_activated.connect(self._on_icon_activated)
        self.settings_requested.connect(self.open_settings)
        self.about_requested.connect(self.show_about)

        self._published_items: List[MenuItem] = []
        self._published_leaves: List[MenuLeaf] = []
        self._dark_theme: Optional[bool] = None
        self._about_box = None

    # ==================== Lifecycle ====================

    def start(self) -> None:
        """Show the tray icon"""
        self._tray_widget.show()
        app_logger.log_event(
            "Tray started",
            {"tray_available": self._tray_widget.is_tray_available()},
            LogCategory.UI,
        )

    def cleanup(self) -> None:
        self._tray_widget.cleanup()
        self._published_items = []
        self._published_leaves = []
        app_logger.info("Tray cleaned up", LogCategory.UI, component=self._component_name)

    # ==================== Publishing ====================

    def set_icon(self, dark_theme: bool) -> None:
        if dark_theme == self._dark_theme:
            return
        self._dark_theme = dark_theme
        self._tray_widget.set_icon(get_tray_icon(dark_theme))

    def publish(self, tree: MenuTree) -> None:
        """Replace the visible menu with `tree` followed by the fixed actions"""
        items: List[MenuItem] = list(tree) + list(DEFAULT_ACTIONS)
        leaves = iter_leaves(tree)

        self._tray_widget.set_menu(items)
        self._published_items = items
        self._published_leaves = leaves

        count = len(leaves)
        noun = "command" if count == 1 else "commands"
        self._tray_widget.set_tooltip(f"{APP_TITLE} - {count} {noun}")

        app_logger.debug(
            "Menu published",
            LogCategory.MENU,
            {"items": len(items), "commands": count},
            component=self._component_name,
        )

    @property
    def published_items(self) -> List[MenuItem]:
        return list(self._published_items)

    @property
    def published_leaves(self) -> List[MenuLeaf]:
        return list(self._published_leaves)

    @property
    def widget(self) -> TrayWidget:
        return self._tray_widget

    @property
    def dark_theme(self) -> Optional[bool]:
        return self._dark_theme

    # ==================== Notifications ====================

    def show_error_notification(self, title: str, message: str) -> None:
        """Balloon message when supported, otherwise a non-modal box"""
        app_logger.warning(
            f"{title}: {message}", LogCategory.UI, component=self._component_name
        )
        self._notify(title, message, QSystemTrayIcon.MessageIcon.Warning)

    def show_info_notification(self, title: str, message: str) -> None:
        app_logger.info(
            f"{title}: {message}", LogCategory.UI, component=self._component_name
        )
        self._notify(title, message, QSystemTrayIcon.MessageIcon.Information)

    def _notify(self, title: str, message: str, icon: QSystemTrayIcon.MessageIcon) -> None:
        if not self._tray_widget.show_message(title, message, icon, 5000):
            show_error_list(None, title, message)

    # ==================== Event Handlers ====================

    def _on_command_triggered(self, index: int) -> None:
        try:
            leaf = self._published_leaves[index]
        except IndexError:
            app_logger.warning(
                f"Menu index {index} is not part of the current menu",
                LogCategory.MENU,
                component=self._component_name,
            )
            return

        app_logger.info(
            f"Menu item clicked: {leaf.label}", LogCategory.COMMAND, component=self._component_name
        )
        if self._dispatcher.launch(leaf.command):
            self.command_launched.emit(leaf.command)

    def _on_icon_activated(self, reason) -> None:
        if reason == QSystemTrayIcon.ActivationReason.DoubleClick:
            self.settings_requested.emit()

    def _on_menu_action(self, action: str) -> None:
        try:
            if action == ACTION_SETTINGS:
                self.settings_requested.emit()
            elif action == ACTION_ABOUT:
                self.about_requested.emit()
            elif action == ACTION_QUIT:
                self.quit_requested.emit()
            else:
                app_logger.warning(
                    f"Unknown tray action: {action}", LogCategory.UI, component=self._component_name
                )
        except Exception as e:
            app_logger.log_error(e, f"{self._component_name}_{action}")

    def open_settings(self) -> bool:
        """Open the settings file in the system default editor"""
        if self._settings_path is None:
            return False

        path = str(self._settings_path)
        opened = QDesktopServices.openUrl(QUrl.fromLocalFile(path))
        if opened:
            self.settings_opened.emit(path)
        else:
            app_logger.warning(
                f"No application available to open {path}",
                LogCategory.UI,
                component=self._component_name,
            )
        return opened

    def show_about(self) -> None:
        self._about_box = show_about_page()
