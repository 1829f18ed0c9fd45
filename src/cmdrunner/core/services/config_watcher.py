"""Settings file change watcher

Listens for modification notifications on the settings file and
debounces bursts into a single reconciliation callback.
"""

from pathlib import Path
from typing import Callable, Optional

from loguru import logger
from PySide6.QtCore import QFileSystemWatcher, QObject

from .debounce_timer import DebounceTimer

DEBOUNCE_DELAY_MS = 500


class ChangeWatcher(QObject):
    """Watch one settings file and trigger a debounced callback

    Editors that save by writing a temp file and renaming it over the
    original make Qt drop the watched path. The parent directory is watched
    as well so the path can be re-added once the file is back.
    """

    def __init__(
        self,
        settings_path: Path,
        on_change: Callable[[], None],
        delay_ms: int = DEBOUNCE_DELAY_MS,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self._settings_path = Path(settings_path)
        self._watcher: Optional[QFileSystemWatcher] = None
        self._debounce = DebounceTimer(delay_ms, on_change, self)
        self._notification_count = 0

    @property
    def settings_path(self) -> Path:
        return self._settings_path

    @property
    def is_running(self) -> bool:
        return self._watcher is not None

    @property
    def pending(self) -> bool:
        return self._debounce.is_pending

    @property
    def watched_files(self):
        return self._watcher.files() if self._watcher is not None else []

    @property
    def notification_count(self) -> int:
        return self._notification_count

    def start(self) -> None:
        if self._watcher is not None:
            return

        self._watcher = QFileSystemWatcher(self)
        self._watcher.fileChanged.connect(self._on_file_changed)
        self._watcher.directoryChanged.connect(self._on_directory_changed)

        if not self._watcher.addPath(str(self._settings_path)):
            logger.warning("Could not watch settings file {}", self._settings_path)
        self._watcher.addPath(str(self._settings_path.parent))

        logger.info("Watching settings file {}", self._settings_path)

    def stop(self) -> None:
        """Close the watcher and drop any pending reconciliation"""
        self._debounce.cancel()
        if self._watcher is None:
            return

        watched = self._watcher.files() + self._watcher.directories()
        if watched:
            self._watcher.removePaths(watched)
        self._watcher.fileChanged.disconnect(self._on_file_changed)
        self._watcher.directoryChanged.disconnect(self._on_directory_changed)
        self._watcher.deleteLater()
        self._watcher = None

        logger.info("Stopped watching {}", self._settings_path)

    def notify_changed(self) -> None:
        """Record one change notification and (re)start the quiet period"""
        self._notification_count += 1
        self._debounce.schedule()

    def _on_file_changed(self, path: str) -> None:
        logger.debug("Settings file change notification: {}", path)
        self._rewatch_if_needed()
        self.notify_changed()

    def _on_directory_changed(self, path: str) -> None:
        # Only interesting when the settings file came back after a rename
        if self._rewatch_if_needed():
            logger.debug("Settings file re-created in {}", path)
            self.notify_changed()

    def _rewatch_if_needed(self) -> bool:
        if self._watcher is None:
            return False
        path = str(self._settings_path)
        if path in self._watcher.files() or not self._settings_path.exists():
            return False
        return self._watcher.addPath(path)
