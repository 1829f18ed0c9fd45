"""AppLifecycle tests: startup, reconciliation, fatal errors, quit"""
from unittest.mock import MagicMock

import pyperclip
import pytest
from PySide6.QtCore import QTimer

from cmdrunner.core import app_lifecycle
from cmdrunner.core.app_lifecycle import AppLifecycle, LifecycleState
from cmdrunner.core.services.config import PLACEHOLDER_LABEL, SettingsStore, get_default_payload
from cmdrunner.core.services.config_watcher import ChangeWatcher
from cmdrunner.core.services.instance_lock import InstanceLock
from cmdrunner.ui.components.system_tray import TrayController, TrayWidget
from cmdrunner.utils import ConfigurationError

pytestmark = pytest.mark.gui


@pytest.fixture
def lock_path(tmp_path):
    return tmp_path / "cmdrunner-test.lock"


@pytest.fixture
def notifications(monkeypatch):
    """Capture error notifications instead of showing them"""
    mock = MagicMock()
    monkeypatch.setattr(TrayController, "show_error_notification", mock)
    return mock


@pytest.fixture
def make_lifecycle(settings_path, lock_path):
    created = []

    def _make(**kwargs):
        kwargs.setdefault("instance_lock", InstanceLock(lock_path))
        lifecycle = AppLifecycle(settings_path=settings_path, **kwargs)
        created.append(lifecycle)
        return lifecycle

    yield _make

    for lifecycle in created:
        if lifecycle.state not in (LifecycleState.QUITTING, LifecycleState.FATAL_ERROR):
            lifecycle.quit()


def menu_labels(lifecycle):
    return [item.label for item in lifecycle.context.tray.published_items]


class TestSingleInstance:
    """Second instance exits before touching anything"""

    def test_second_instance_exits_immediately(self, monkeypatch, settings_path, lock_path, make_lifecycle):
        tray_cls = MagicMock()
        monkeypatch.setattr(app_lifecycle, "TrayController", tray_cls)
        holder = InstanceLock(lock_path)
        assert holder.acquire()

        try:
            lifecycle = make_lifecycle()
            assert lifecycle.run([]) == 0
        finally:
            holder.release()

        assert not settings_path.exists()
        assert not settings_path.parent.exists()
        tray_cls.assert_not_called()
        assert lifecycle.context is None

    def test_run_until_quit_releases_lock(self, qapp, lock_path, make_lifecycle, notifications):
        lifecycle = make_lifecycle()
        QTimer.singleShot(0, lifecycle.quit)

        assert lifecycle.run([]) == 0
        assert lifecycle.state is LifecycleState.QUITTING

        other = InstanceLock(lock_path)
        assert other.acquire()
        other.release()


class TestStartup:
    """Happy path to WATCHING"""

    def test_first_start_creates_settings_and_menu(self, qapp, settings_path, make_lifecycle, notifications):
        lifecycle = make_lifecycle()
        lifecycle.start()

        assert lifecycle.state is LifecycleState.WATCHING
        assert lifecycle.state_history == [
            LifecycleState.STARTING,
            LifecycleState.ENSURING_SETTINGS,
            LifecycleState.BUILDING_INITIAL_MENU,
            LifecycleState.WATCHING,
        ]
        assert settings_path.read_text(encoding="utf-8") == get_default_payload()
        assert menu_labels(lifecycle) == ["Example: Open Google", "Settings", "About", "Quit"]
        assert lifecycle.context.watcher.is_running
        notifications.assert_not_called()

    def test_existing_settings_untouched(self, qapp, write_settings, make_lifecycle, notifications):
        path = write_settings({"general": {"darkTheme": True}, "commands": [{"label": "A", "command": "a"}]})
        before = path.read_bytes()

        lifecycle = make_lifecycle()
        lifecycle.start()

        assert path.read_bytes() == before
        assert lifecycle.context.tray.dark_theme is True
        assert menu_labels(lifecycle) == ["A", "Settings", "About", "Quit"]


class TestReconcile:
    """Menu follows the settings file"""

    def test_missing_commands_publishes_default_actions_only(
        self, qapp, write_settings, make_lifecycle, notifications
    ):
        write_settings({"general": {"darkTheme": False}})

        lifecycle = make_lifecycle()
        lifecycle.start()

        assert menu_labels(lifecycle) == ["Settings", "About", "Quit"]
        notifications.assert_called_once()
        title, message = notifications.call_args[0]
        assert "invalid settings" in title
        assert 'Settings missing "commands" array.' in message
        assert 'Make sure the settings file has a "commands" array' in message
        assert lifecycle.state is LifecycleState.WATCHING

    def test_tray_is_visible_before_startup_notification(self, qapp, monkeypatch, write_settings, make_lifecycle):
        """A hidden tray icon silently drops balloon messages"""
        events = []
        original_show = TrayWidget.show

        def show(self):
            events.append("tray_shown")
            original_show(self)

        monkeypatch.setattr(TrayWidget, "show", show)
        monkeypatch.setattr(
            TrayController, "show_error_notification", lambda self, title, message: events.append("notification")
        )
        write_settings({"general": {"darkTheme": False}})

        lifecycle = make_lifecycle()
        lifecycle.start()

        assert events == ["tray_shown", "notification"]
        assert menu_labels(lifecycle) == ["Settings", "About", "Quit"]

    def test_missing_fields_are_listed_without_rejecting(self, qapp, monkeypatch, write_settings, make_lifecycle, notifications):
        notices = MagicMock()
        monkeypatch.setattr(TrayController, "show_info_notification", notices)
        write_settings({"commands": [{"command": "a"}, {"label": "B", "command": "b"}]})

        lifecycle = make_lifecycle()
        lifecycle.start()

        assert menu_labels(lifecycle) == [PLACEHOLDER_LABEL, "B", "Settings", "About", "Quit"]
        notifications.assert_not_called()
        notices.assert_called_once()
        assert notices.call_args[0][1] == "label field missing for entry at index 0"

    def test_parse_error_at_startup_is_not_fatal(self, qapp, write_settings, make_lifecycle, notifications):
        write_settings('{"commands": [')

        lifecycle = make_lifecycle()
        lifecycle.start()

        assert lifecycle.state is LifecycleState.WATCHING
        assert menu_labels(lifecycle) == ["Settings", "About", "Quit"]
        assert "not valid JSON" in notifications.call_args[0][1]
        assert "Open Settings from the tray menu and fix the JSON syntax" in notifications.call_args[0][1]

    def test_reconcile_picks_up_edits(self, qapp, write_settings, make_lifecycle, notifications):
        write_settings({"commands": [{"label": "Old", "command": "o"}]})
        lifecycle = make_lifecycle()
        lifecycle.start()

        write_settings({"commands": [{"label": "New", "command": "n", "group": "G"}]})
        lifecycle.reconcile()

        assert [leaf.label for leaf in lifecycle.context.tray.published_leaves] == ["New"]
        assert menu_labels(lifecycle) == ["G", "Settings", "About", "Quit"]
        assert lifecycle.state is LifecycleState.WATCHING
        assert LifecycleState.RECONCILING in lifecycle.state_history

    def test_broken_edit_then_fix(self, qapp, write_settings, make_lifecycle, notifications):
        """A bad save never ends the process; the next good save recovers"""
        write_settings({"commands": [{"label": "A", "command": "a"}]})
        lifecycle = make_lifecycle()
        lifecycle.start()

        write_settings("{ oops")
        lifecycle.reconcile()
        assert menu_labels(lifecycle) == ["Settings", "About", "Quit"]

        write_settings({"commands": [{"label": "B", "command": "b"}]})
        lifecycle.reconcile()
        assert menu_labels(lifecycle) == ["B", "Settings", "About", "Quit"]
        assert lifecycle.state is LifecycleState.WATCHING

    def test_file_change_triggers_debounced_reconcile(
        self, qtbot, write_settings, make_lifecycle, notifications
    ):
        write_settings({"commands": []})
        lifecycle = make_lifecycle(debounce_ms=50)
        lifecycle.start()

        write_settings({"commands": [{"label": "Live", "command": "l"}]})

        qtbot.waitUntil(lambda: menu_labels(lifecycle)[0] == "Live", timeout=5000)

    def test_reconcile_ignored_after_quit(self, qapp, write_settings, make_lifecycle, notifications):
        write_settings({"commands": []})
        lifecycle = make_lifecycle()
        lifecycle.start()
        lifecycle.quit()

        lifecycle.reconcile()

        assert lifecycle.state is LifecycleState.QUITTING


class TestFatalStartup:
    """Startup failures: clipboard, dialog, exit 1"""

    @pytest.fixture
    def failing_store(self, monkeypatch):
        def fail(self):
            raise PermissionError("access denied")

        monkeypatch.setattr(SettingsStore, "ensure_exists", fail)

    @pytest.fixture
    def dialog(self, monkeypatch):
        mock = MagicMock()
        monkeypatch.setattr(app_lifecycle, "show_error_with_details", mock)
        return mock

    def test_failure_copies_report_and_exits(self, qapp, monkeypatch, failing_store, dialog, make_lifecycle):
        copy = MagicMock()
        monkeypatch.setattr(app_lifecycle.pyperclip, "copy", copy)

        lifecycle = make_lifecycle()
        with pytest.raises(SystemExit) as exc_info:
            lifecycle.start()

        assert exc_info.value.code == 1
        assert lifecycle.state is LifecycleState.FATAL_ERROR
        assert lifecycle.state_history[-2:] == [LifecycleState.ENSURING_SETTINGS, LifecycleState.FATAL_ERROR]

        report = copy.call_args[0][0]
        assert "access denied" in report
        assert "Traceback" in report

        dialog.assert_called_once()
        _, title, message, details = dialog.call_args[0]
        assert "Fatal" in title
        assert "copied to the clipboard" in message
        assert "Check app.log in the CMDRunner logs folder for details" in message
        assert "PermissionError" in details

    def test_settings_failure_keeps_its_suggestions(self, qapp, monkeypatch, dialog, make_lifecycle):
        def fail(self):
            raise ConfigurationError("Cannot create settings directory")

        monkeypatch.setattr(SettingsStore, "ensure_exists", fail)
        monkeypatch.setattr(app_lifecycle.pyperclip, "copy", MagicMock())

        with pytest.raises(SystemExit):
            make_lifecycle().start()

        message = dialog.call_args[0][2]
        assert "Cannot create settings directory" in message
        assert "Check that the settings folder is writable" in message

    def test_clipboard_failure_still_shows_dialog(self, qapp, monkeypatch, failing_store, dialog, make_lifecycle):
        monkeypatch.setattr(
            app_lifecycle.pyperclip, "copy", MagicMock(side_effect=pyperclip.PyperclipException("no clipboard"))
        )

        with pytest.raises(SystemExit):
            make_lifecycle().start()

        dialog.assert_called_once()
        assert "copied to the clipboard" not in dialog.call_args[0][2]


class TestQuit:
    """Shutdown order"""

    def test_quit_from_tray(self, qapp, write_settings, make_lifecycle, notifications):
        write_settings({"commands": []})
        lifecycle = make_lifecycle()
        lifecycle.start()

        lifecycle.context.tray.quit_requested.emit()

        assert lifecycle.state is LifecycleState.QUITTING
        assert lifecycle.context.watcher is None
        assert lifecycle.context.tray is None

    def test_watcher_stops_before_tray_cleanup(
        self, qapp, monkeypatch, write_settings, make_lifecycle, notifications
    ):
        order = []
        original_stop = ChangeWatcher.stop
        original_cleanup = TrayController.cleanup

        def stop(self):
            order.append("watcher")
            original_stop(self)

        def cleanup(self):
            order.append("tray")
            original_cleanup(self)

        monkeypatch.setattr(ChangeWatcher, "stop", stop)
        monkeypatch.setattr(TrayController, "cleanup", cleanup)

        write_settings({"commands": []})
        lifecycle = make_lifecycle()
        lifecycle.start()
        lifecycle.quit()

        assert order == ["watcher", "tray"]

    def test_quit_is_idempotent(self, qapp, write_settings, make_lifecycle, notifications):
        write_settings({"commands": []})
        lifecycle = make_lifecycle()
        lifecycle.start()

        lifecycle.quit()
        lifecycle.quit()

        assert lifecycle.state_history.count(LifecycleState.QUITTING) == 1
