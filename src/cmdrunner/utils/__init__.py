"""Shared utilities: logging and exception hierarchy"""

from .exceptions import (  # noqa: F401
    ErrorCategory,
    ErrorSeverity,
    CmdRunnerError,
    ConfigurationError,
    SettingsParseError,
    ValidationError,
    CommandLaunchError,
    StartupError,
)
from .unified_logger import (  # noqa: F401
    logger,
    app_logger,
    get_app_data_dir,
    LogLevel,
    LogCategory,
    TraceContext,
)

__all__ = [
    # Exceptions
    "ErrorCategory",
    "ErrorSeverity",
    "CmdRunnerError",
    "ConfigurationError",
    "SettingsParseError",
    "ValidationError",
    "CommandLaunchError",
    "StartupError",
    # Logging
    "logger",
    "app_logger",
    "get_app_data_dir",
    "LogLevel",
    "LogCategory",
    "TraceContext",
]
