"""System tray widget - Pure UI component

Handles only the visual aspects of the system tray icon and menu.
No business logic or state management.
"""

from typing import Optional, Sequence, Union

from PySide6.QtCore import QObject, Signal
from PySide6.QtGui import QAction, QIcon
from PySide6.QtWidgets import QMenu, QSystemTrayIcon

from ....core.services.menu_builder import MenuAction, MenuLeaf, SubMenu
from ....utils import app_logger, LogCategory

MenuItem = Union[MenuLeaf, SubMenu, MenuAction]


class TrayWidget(QObject):
    """Pure UI component for system tray

    Responsible only for:
    - Creating and displaying the tray icon
    - Rendering menu items into a context menu
    - User interaction event forwarding

    Leaf actions carry only their position in display order; clicks are
    forwarded as that index and resolved by the controller.
    """

    icon_activated = Signal(object)  # QSystemTrayIcon.ActivationReason
    command_triggered = Signal(int)  # leaf index in display order
    menu_action_triggered = Signal(str)  # fixed action name

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)

        self._tray_icon: Optional[QSystemTrayIcon] = None
        self._context_menu: Optional[QMenu] = None

        if not QSystemTrayIcon.isSystemTrayAvailable():
            # Headless sessions and tests: keep rendering menus, skip the icon
            app_logger.warning(
                "System tray is not available on this system",
                LogCategory.UI,
                component="tray_widget",
            )
            return

        self._tray_icon = QSystemTrayIcon(self)
        self._tray_icon.activated.connect(self._on_icon_activated)

    # ==================== Menu rendering ====================

    def set_menu(self, items: Sequence[MenuItem]) -> QMenu:
        """Replace the context menu with a freshly built one

        The new menu is built completely before it is swapped in.
        """
        menu = QMenu()
        leaf_index = 0

        for item in items:
            if isinstance(item, SubMenu):
                submenu = menu.addMenu(item.label)
                for child in item.children:
                    self._add_leaf(submenu, child, leaf_index)
                    leaf_index += 1
            elif isinstance(item, MenuLeaf):
                self._add_leaf(menu, item, leaf_index)
                leaf_index += 1
            else:
                self._add_fixed_action(menu, item)

        old_menu = self._context_menu
        self._context_menu = menu
        if self._tray_icon:
            self._tray_icon.setContextMenu(menu)
        if old_menu is not None:
            old_menu.deleteLater()

        return menu

    def _add_leaf(self, menu: QMenu, leaf: MenuLeaf, index: int) -> QAction:
        action = QAction(leaf.label, menu)
        action.setData(index)
        action.triggered.connect(lambda _checked=False, i=index: self.command_triggered.emit(i))
        menu.addAction(action)
        return action

    def _add_fixed_action(self, menu: QMenu, item: MenuAction) -> QAction:
        action = QAction(item.label, menu)
        action.setData(item.action)
        action.triggered.connect(
            lambda _checked=False, name=item.action: self.menu_action_triggered.emit(name)
        )
        menu.addAction(action)
        return action

    def context_menu(self) -> Optional[QMenu]:
        return self._context_menu

    def _on_icon_activated(self, reason) -> None:
        self.icon_activated.emit(reason)

    # ==================== Public UI Interface ====================

    def set_icon(self, icon: QIcon) -> None:
        if self._tray_icon:
            self._tray_icon.setIcon(icon)

    def set_tooltip(self, tooltip: str) -> None:
        if self._tray_icon:
            self._tray_icon.setToolTip(tooltip)

    def show_message(
        self,
        title: str,
        message: str,
        icon: QSystemTrayIcon.MessageIcon = QSystemTrayIcon.MessageIcon.Information,
        timeout: int = 3000,
    ) -> bool:
        """Show a system tray message

        Returns:
            True if message was shown, False if not supported or the
            icon is not visible yet
        """
        if self.supports_messages() and self.is_visible():
            self._tray_icon.showMessage(title, message, icon, timeout)
            return True
        return False

    def show(self) -> None:
        if self._tray_icon:
            self._tray_icon.show()

    def is_visible(self) -> bool:
        return self._tray_icon is not None and self._tray_icon.isVisible()

    def supports_messages(self) -> bool:
        return self._tray_icon is not None and QSystemTrayIcon.supportsMessages()

    def is_tray_available(self) -> bool:
        return self._tray_icon is not None

    def cleanup(self) -> None:
        if self._tray_icon:
            self._tray_icon.hide()
            self._tray_icon.setContextMenu(None)
            self._tray_icon = None

        if self._context_menu:
            self._context_menu.deleteLater()
            self._context_menu = None

