"""Exception hierarchy for CMD Runner

Provides structured error handling with context information,
error codes, and recovery suggestions.
"""

import time
from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorSeverity(Enum):
    """Error severity levels"""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Error categories for better classification"""

    INITIALIZATION = "initialization"
    CONFIGURATION = "configuration"
    VALIDATION = "validation"
    COMMAND = "command"
    UI = "ui"
    SYSTEM = "system"
    LIFECYCLE = "lifecycle"


class CmdRunnerError(Exception):
    """Base exception for CMD Runner

    Provides structured error information including:
    - Error codes for programmatic handling
    - Context information for debugging
    - Severity levels for appropriate response
    - Recovery suggestions for user guidance
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        category: ErrorCategory = ErrorCategory.SYSTEM,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        context: Optional[Dict[str, Any]] = None,
        recovery_suggestions: Optional[List[str]] = None,
        original_exception: Optional[Exception] = None,
    ):
        """
        Args:
            message: Human-readable error message
            error_code: Unique error code for programmatic handling
            category: Error category for classification
            severity: Error severity level
            context: Additional context information
            recovery_suggestions: List of suggested recovery actions
            original_exception: Original exception if this is a wrapper
        """
        super().__init__(message)

        self.message = message
        self.category = category
        self.severity = severity
        self.context = context or {}
        self.recovery_suggestions = recovery_suggestions or []
        self.original_exception = original_exception
        self.timestamp = time.time()
        self.error_code = error_code or self._generate_error_code()

        if "component" not in self.context:
            self.context["component"] = self.__class__.__name__

    def _generate_error_code(self) -> str:
        class_name = self.__class__.__name__
        return f"{class_name.upper()}_{int(self.timestamp)}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization"""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "context": self.context,
            "recovery_suggestions": self.recovery_suggestions,
            "timestamp": self.timestamp,
            "exception_type": self.__class__.__name__,
            "original_exception": str(self.original_exception)
            if self.original_exception
            else None,
        }

    def get_user_message(self) -> str:
        """Get user-friendly error message with recovery suggestions"""
        user_msg = self._user_text()
        if self.recovery_suggestions:
            suggestions = "\n".join(
                f"• {suggestion}" for suggestion in self.recovery_suggestions
            )
            user_msg += f"\n\nSuggested actions:\n{suggestions}"
        return user_msg

    def _user_text(self) -> str:
        return self.message


# =============================================================================
# Settings-related Exceptions
# =============================================================================


class ConfigurationError(CmdRunnerError):
    """Settings file could not be created or read"""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message=message,
            category=kwargs.pop("category", ErrorCategory.CONFIGURATION),
            severity=kwargs.pop("severity", ErrorSeverity.HIGH),
            recovery_suggestions=kwargs.pop(
                "recovery_suggestions",
                [
                    "Check that the settings folder is writable",
                    "Check that the settings file is not locked by another program",
                ],
            ),
            **kwargs,
        )


class SettingsParseError(ConfigurationError):
    """Settings file is not valid JSON"""

    def __init__(self, message: str, line: int = 0, column: int = 0, **kwargs):
        context = kwargs.pop("context", {})
        context.update({"line": line, "column": column})
        self.line = line
        self.column = column

        super().__init__(
            message,
            severity=kwargs.pop("severity", ErrorSeverity.MEDIUM),
            context=context,
            recovery_suggestions=kwargs.pop(
                "recovery_suggestions",
                [
                    "Open Settings from the tray menu and fix the JSON syntax",
                    "Look for a missing comma or an unclosed bracket near the reported line",
                ],
            ),
            **kwargs,
        )


class ValidationError(CmdRunnerError):
    """Settings structure is wrong (e.g. `commands` is not a list)"""

    def __init__(self, message: str, violations: Optional[List[str]] = None, **kwargs):
        self.violations = list(violations or [])
        context = kwargs.pop("context", {})
        context["violations"] = self.violations

        super().__init__(
            message=message,
            category=ErrorCategory.VALIDATION,
            severity=kwargs.pop("severity", ErrorSeverity.LOW),
            context=context,
            recovery_suggestions=kwargs.pop(
                "recovery_suggestions",
                ['Make sure the settings file has a "commands" array'],
            ),
            **kwargs,
        )

    def _user_text(self) -> str:
        if not self.violations:
            return self.message
        return "\n".join([f"{self.message}:"] + self.violations)


# =============================================================================
# Runtime Exceptions
# =============================================================================


class CommandLaunchError(CmdRunnerError):
    """The platform shell could not be started"""

    def __init__(self, message: str, command: str = "", **kwargs):
        context = kwargs.pop("context", {})
        context["command"] = command

        super().__init__(
            message=message,
            category=ErrorCategory.COMMAND,
            severity=kwargs.pop("severity", ErrorSeverity.MEDIUM),
            context=context,
            **kwargs,
        )


class StartupError(CmdRunnerError):
    """Unrecoverable failure while starting the application"""

    def __init__(self, message: str, stage: str = "unknown", **kwargs):
        context = kwargs.pop("context", {})
        context["stage"] = stage
        self.stage = stage

        super().__init__(
            message=message,
            category=ErrorCategory.LIFECYCLE,
            severity=ErrorSeverity.CRITICAL,
            context=context,
            recovery_suggestions=kwargs.pop(
                "recovery_suggestions",
                ["Check app.log in the CMDRunner logs folder for details"],
            ),
            **kwargs,
        )
