"""Core: application lifecycle and services"""

from .app_lifecycle import AppContext, AppLifecycle, LifecycleState

__all__ = ["AppContext", "AppLifecycle", "LifecycleState"]
