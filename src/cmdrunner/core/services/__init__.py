"""Core services: settings, watching, menu building, dispatch, locking"""

from .command_dispatcher import CommandDispatcher
from .config import SettingsStore
from .config_watcher import ChangeWatcher, DEBOUNCE_DELAY_MS
from .debounce_timer import DebounceTimer
from .instance_lock import InstanceLock
from .menu_builder import MenuAction, MenuBuilder, MenuLeaf, MenuTree, SubMenu

__all__ = [
    "CommandDispatcher",
    "SettingsStore",
    "ChangeWatcher",
    "DEBOUNCE_DELAY_MS",
    "DebounceTimer",
    "InstanceLock",
    "MenuAction",
    "MenuBuilder",
    "MenuLeaf",
    "MenuTree",
    "SubMenu",
]
