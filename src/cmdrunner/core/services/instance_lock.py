"""Process-wide single-instance lock backed by QLockFile"""

from pathlib import Path
from typing import Optional, Union

from loguru import logger
from PySide6.QtCore import QLockFile

from ...utils import get_app_data_dir

LOCK_FILENAME = "cmdrunner.lock"

# Age never makes a lock stale; only a dead owner process does
STALE_LOCK_TIME_MS = 0


def default_lock_path() -> Path:
    return get_app_data_dir() / LOCK_FILENAME


class InstanceLock:
    """Ensures only one CMD Runner process runs per user

    A lock left behind by a crashed process names a PID that is no longer
    running; QLockFile treats it as stale and replaces it, so a restart
    after a crash is not blocked.
    """

    def __init__(self, lock_path: Optional[Union[str, Path]] = None):
        self._lock_path = Path(lock_path) if lock_path else default_lock_path()
        self._lock = QLockFile(str(self._lock_path))
        self._lock.setStaleLockTime(STALE_LOCK_TIME_MS)

    @property
    def lock_path(self) -> Path:
        return self._lock_path

    def acquire(self) -> bool:
        """Try to take the lock without waiting

        Returns:
            False when another running instance holds it
        """
        if self._lock.isLocked():
            return True

        try:
            self._lock_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning("Cannot create lock directory {}: {}", self._lock_path.parent, e)

        if self._lock.tryLock(0):
            logger.debug("Instance lock acquired: {}", self._lock_path)
            return True

        error = self._lock.error()
        if error == QLockFile.LockError.LockFailedError:
            logger.info("Another instance holds {}", self._lock_path)
        else:
            logger.warning("Could not create lock file {} ({})", self._lock_path, error)
        return False

    def is_locked(self) -> bool:
        return self._lock.isLocked()

    def release(self) -> None:
        if self._lock.isLocked():
            self._lock.unlock()
            logger.debug("Instance lock released: {}", self._lock_path)
