"""Application lifecycle - startup, reconciliation and shutdown

Drives the process through a linear set of states:

    STARTING -> ENSURING_SETTINGS -> BUILDING_INITIAL_MENU -> WATCHING
    WATCHING <-> RECONCILING (repeated on every settings change)
    any state -> QUITTING

Any exception before WATCHING is reached is fatal: the report is copied to
the clipboard, shown in a blocking dialog, and the process exits with 1.
Problems with the settings content after that point never end the process.
"""

import sys
import traceback
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Sequence, Union

import pyperclip
from PySide6.QtCore import QTimer
from PySide6.QtWidgets import QApplication

from ..ui.components.system_tray import TrayController
from ..ui.utils import show_error_with_details
from ..utils import (
    CmdRunnerError,
    ConfigurationError,
    LogCategory,
    StartupError,
    ValidationError,
    app_logger,
    logger,
)
from .services.command_dispatcher import CommandDispatcher
from .services.config import DEFAULT_DARK_THEME, SettingsStore
from .services.config_watcher import DEBOUNCE_DELAY_MS, ChangeWatcher
from .services.instance_lock import InstanceLock
from .services.menu_builder import MenuBuilder

APP_NAME = "CMD Runner"
SIGNAL_POLL_INTERVAL_MS = 100


class LifecycleState(Enum):
    STARTING = "starting"
    ENSURING_SETTINGS = "ensuring_settings"
    BUILDING_INITIAL_MENU = "building_initial_menu"
    WATCHING = "watching"
    RECONCILING = "reconciling"
    QUITTING = "quitting"
    FATAL_ERROR = "fatal_error"


_PRE_WATCHING_STATES = (
    LifecycleState.STARTING,
    LifecycleState.ENSURING_SETTINGS,
    LifecycleState.BUILDING_INITIAL_MENU,
)


@dataclass
class AppContext:
    """Handles owned by the running application

    Created once during startup and torn down on quit.
    """

    store: SettingsStore
    dispatcher: CommandDispatcher
    builder: MenuBuilder = field(default_factory=MenuBuilder)
    tray: Optional[TrayController] = None
    watcher: Optional[ChangeWatcher] = None


class AppLifecycle:
    """Owns the tray application from process start to exit

    Usage:
        lifecycle = AppLifecycle(settings_path=args.settings)
        sys.exit(lifecycle.run())
    """

    def __init__(
        self,
        settings_path: Optional[Union[str, Path]] = None,
        instance_lock: Optional[InstanceLock] = None,
        debounce_ms: int = DEBOUNCE_DELAY_MS,
    ):
        self._settings_path = settings_path
        self._instance_lock = instance_lock or InstanceLock()
        self._debounce_ms = debounce_ms

        self._state = LifecycleState.STARTING
        self._state_history: List[LifecycleState] = []
        self._context: Optional[AppContext] = None
        self._qt_app: Optional[QApplication] = None
        self._signal_timer: Optional[QTimer] = None

    # ==================== State ====================

    @property
    def state(self) -> LifecycleState:
        return self._state

    @property
    def state_history(self) -> List[LifecycleState]:
        return list(self._state_history)

    @property
    def context(self) -> Optional[AppContext]:
        return self._context

    def _set_state(self, state: LifecycleState) -> None:
        if state is self._state and self._state_history:
            return
        app_logger.debug(
            f"Lifecycle: {self._state.value} -> {state.value}",
            LogCategory.STARTUP,
            component="app_lifecycle",
        )
        self._state = state
        self._state_history.append(state)

    # ==================== Entry point ====================

    def run(self, argv: Optional[Sequence[str]] = None) -> int:
        """Run the application until Quit

        Returns:
            Process exit code. 0 without doing anything when another
            instance is already running.
        """
        if not self._instance_lock.acquire():
            app_logger.info(
                f"{APP_NAME} is already running, exiting",
                LogCategory.STARTUP,
                component="app_lifecycle",
            )
            return 0

        exit_code = 0
        try:
            qt_app = QApplication.instance()
            if qt_app is None:
                qt_app = QApplication(list(argv) if argv is not None else sys.argv)
            qt_app.setApplicationName(APP_NAME)
            qt_app.setQuitOnLastWindowClosed(False)  # System tray app
            self._qt_app = qt_app

            self.start()

            # Qt event loop blocks Python signal handlers; wake it up periodically
            self._signal_timer = QTimer()
            self._signal_timer.timeout.connect(lambda: None)
            self._signal_timer.start(SIGNAL_POLL_INTERVAL_MS)

            exit_code = qt_app.exec()
        finally:
            if self._signal_timer is not None:
                self._signal_timer.stop()
                self._signal_timer = None
            self._teardown()

        return exit_code

    def start(self) -> None:
        """Ensure settings, show the tray with the initial menu, start watching

        Raises:
            SystemExit: startup failed; the failure has been reported
        """
        self._set_state(LifecycleState.STARTING)
        app_logger.log_startup()

        try:
            store = SettingsStore(self._settings_path)
            self._context = AppContext(store=store, dispatcher=CommandDispatcher())

            self._set_state(LifecycleState.ENSURING_SETTINGS)
            if store.ensure_exists():
                app_logger.log_config_event(
                    "Default settings created", {"path": str(store.settings_path)}
                )

            self._set_state(LifecycleState.BUILDING_INITIAL_MENU)
            tray = TrayController(
                dispatcher=self._context.dispatcher,
                settings_path=store.settings_path,
            )
            tray.quit_requested.connect(self.quit)
            self._context.tray = tray

            # Balloon messages are dropped while the icon is hidden
            tray.set_icon(DEFAULT_DARK_THEME)
            tray.publish([])
            tray.start()
            self._refresh_menu()

            watcher = ChangeWatcher(store.settings_path, self.reconcile, self._debounce_ms)
            watcher.start()
            self._context.watcher = watcher

            self._set_state(LifecycleState.WATCHING)
        except Exception as e:
            self._handle_fatal(e)

        app_logger.log_event(
            f"{APP_NAME} is running",
            {"settings_path": str(self._context.store.settings_path)},
            LogCategory.STARTUP,
        )

    # ==================== Reconciliation ====================

    def reconcile(self) -> None:
        """Reload the settings file and republish the menu

        Always ends back in WATCHING, whatever the file contains.
        """
        if self._state is not LifecycleState.WATCHING or self._context is None:
            app_logger.debug(
                f"Reconcile skipped in state {self._state.value}",
                LogCategory.CONFIG,
                component="app_lifecycle",
            )
            return

        self._set_state(LifecycleState.RECONCILING)
        try:
            with logger.trace("reconcile", "app_lifecycle"):
                self._refresh_menu()
        except Exception as e:
            app_logger.log_error(e, "app_lifecycle_reconcile")
        finally:
            self._set_state(LifecycleState.WATCHING)

    def _refresh_menu(self) -> None:
        """Load, normalize, build and publish; report bad content to the user"""
        context = self._context
        tray = context.tray

        try:
            result = context.store.load_normalized()
        except ConfigurationError as e:
            app_logger.warning(
                f"Settings could not be loaded: {e.message}",
                LogCategory.CONFIG,
                e.to_dict(),
                component="app_lifecycle",
            )
            tray.publish([])
            tray.show_error_notification(
                f"{APP_NAME}: cannot read settings", e.get_user_message()
            )
            return

        for warning in result.warnings:
            app_logger.warning(warning, LogCategory.CONFIG, component="app_lifecycle")

        tray.set_icon(result.config.dark_theme)
        tray.publish(context.builder.build(result.config))

        if not result.is_valid:
            error = ValidationError("Settings file is invalid", violations=result.errors)
            app_logger.warning(
                error.message,
                LogCategory.CONFIG,
                error.to_dict(),
                component="app_lifecycle",
            )
            tray.show_error_notification(
                f"{APP_NAME}: invalid settings", error.get_user_message()
            )
            return

        if result.entry_warnings:
            # Placeholders were used; the menu is still published as is
            tray.show_info_notification(
                f"{APP_NAME}: incomplete commands", "\n".join(result.entry_warnings)
            )

        app_logger.log_config_event(
            "Menu reconciled", {"commands": len(result.config.commands)}
        )

    # ==================== Shutdown ====================

    def quit(self) -> None:
        """Stop watching, remove the tray and leave the event loop"""
        if self._state is LifecycleState.QUITTING:
            return

        self._set_state(LifecycleState.QUITTING)
        app_logger.log_shutdown()
        self._teardown()

        qt_app = self._qt_app or QApplication.instance()
        if qt_app is not None:
            qt_app.quit()

    def _teardown(self) -> None:
        context = self._context
        if context is not None:
            # Watcher first so no reconcile runs against a half-removed tray
            if context.watcher is not None:
                try:
                    context.watcher.stop()
                except Exception as e:
                    app_logger.log_error(e, "app_lifecycle_stop_watcher")
                context.watcher = None

            if context.tray is not None:
                try:
                    context.tray.cleanup()
                except Exception as e:
                    app_logger.log_error(e, "app_lifecycle_cleanup_tray")
                context.tray = None

        self._instance_lock.release()

    # ==================== Fatal errors ====================

    def _handle_fatal(self, exc: Exception) -> None:
        stage = self._state.value if self._state in _PRE_WATCHING_STATES else "unknown"
        self._set_state(LifecycleState.FATAL_ERROR)

        if isinstance(exc, StartupError):
            error = exc
        else:
            kwargs = {}
            if isinstance(exc, CmdRunnerError):
                kwargs["recovery_suggestions"] = exc.recovery_suggestions
            error = StartupError(
                f"{APP_NAME} failed to start: {exc}", stage=stage, original_exception=exc, **kwargs
            )
        details = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        app_logger.log_error(exc, f"startup_{stage}")

        report = f"{error.message}\n\n{details}"
        message = error.get_user_message()
        try:
            pyperclip.copy(report)
            message += "\n\nThe error details have been copied to the clipboard."
        except pyperclip.PyperclipException as clip_error:
            app_logger.warning(
                f"Could not copy error report to clipboard: {clip_error}",
                LogCategory.ERROR,
                component="app_lifecycle",
            )

        show_error_with_details(None, f"{APP_NAME} - Fatal Error", message, details)

        self._teardown()
        sys.exit(1)
