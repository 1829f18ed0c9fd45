"""Unified logging - one interface, file output, optional console

Every record goes to `<app data>/logs/app.log`; console output is off
unless requested (`--console-log`). The minimum level comes from the
CMDRUNNER_LOG_LEVEL environment variable, or DEBUG when started with
`--debug`.

Usage:
    from cmdrunner.utils import logger

    logger.info("Application started")

    with logger.trace("reconcile") as trace:
        ...
        trace.checkpoint("menu_built")
"""

import json
import os
import sys
import threading
import time
import traceback
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union


APP_DIR_NAME = "CMDRunner"


def get_app_data_dir() -> Path:
    """Per-user application data directory (not created here)"""
    base = os.environ.get("APPDATA") or str(Path.home() / ".config")
    return Path(base) / APP_DIR_NAME


class LogLevel(Enum):
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50


class LogCategory(Enum):
    """What part of the app a record belongs to"""
    STARTUP = "startup"
    CONFIG = "config"
    MENU = "menu"
    COMMAND = "command"
    UI = "ui"
    ERROR = "error"
    PERFORMANCE = "performance"


_CONSOLE_COLORS = {
    LogLevel.DEBUG: '\033[36m',
    LogLevel.INFO: '\033[32m',
    LogLevel.WARNING: '\033[33m',
    LogLevel.ERROR: '\033[31m',
    LogLevel.CRITICAL: '\033[35m',
}
_RESET = '\033[0m'


def _parse_level(value: Union[str, LogLevel]) -> LogLevel:
    if isinstance(value, LogLevel):
        return value
    return LogLevel.__members__.get(str(value).upper(), LogLevel.INFO)


@dataclass
class TraceContext:
    """Timing of one traced operation"""
    trace_id: str
    operation: str
    component: str = ""
    start_time: float = field(default_factory=time.perf_counter)
    checkpoints: List[str] = field(default_factory=list)

    def checkpoint(self, name: str) -> None:
        self.checkpoints.append(name)

    def duration(self) -> float:
        return time.perf_counter() - self.start_time


class UnifiedLogger:
    """Process-wide logger (singleton)"""

    _instance = None
    _instance_lock = threading.Lock()

    def __new__(cls):
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
                cls._instance._setup()
        return cls._instance

    def _setup(self) -> None:
        default_level = "DEBUG" if "--debug" in sys.argv else "INFO"
        self._min_level = _parse_level(os.getenv("CMDRUNNER_LOG_LEVEL", default_level))
        self._console_output = False
        self._log_file = get_app_data_dir() / 'logs' / 'app.log'
        self._lock = threading.RLock()
        self._trace_counter = 0

    # ============ Settings ============

    def set_log_level(self, level: Union[str, LogLevel]) -> None:
        with self._lock:
            self._min_level = _parse_level(level)

    def get_log_level(self) -> LogLevel:
        return self._min_level

    def set_console_output(self, enabled: bool) -> None:
        with self._lock:
            self._console_output = enabled

    def set_log_file(self, path: Path) -> None:
        """Redirect file output (tests point this at a temp dir)"""
        with self._lock:
            self._log_file = Path(path)

    def get_log_file(self) -> Path:
        return self._log_file

    # ============ Output ============

    def _emit(self, level: LogLevel, category: LogCategory, message: str,
              context: Optional[Dict[str, Any]], component: Optional[str]) -> None:
        # Timings are always recorded
        if level.value < self._min_level.value and category is not LogCategory.PERFORMANCE:
            return

        now = time.localtime()
        source = f"[{component}] " if component else ""
        line = (f"{time.strftime('%Y-%m-%d %H:%M:%S', now)} {level.name:<8} "
                f"{category.value:<11} {source}{message}")
        if context:
            line += " " + json.dumps(context, ensure_ascii=False, separators=(',', ':'), default=str)

        with self._lock:
            if self._console_output:
                stream = sys.stderr if level.value >= LogLevel.ERROR.value else sys.stdout
                if stream is not None:
                    color = _CONSOLE_COLORS[level]
                    print(f"[{time.strftime('%H:%M:%S', now)}] {color}{level.name}{_RESET} "
                          f"{source}{message}", file=stream, flush=True)

            try:
                self._log_file.parent.mkdir(parents=True, exist_ok=True)
                with open(self._log_file, 'a', encoding='utf-8') as f:
                    f.write(line + '\n')
            except OSError as e:
                if sys.stderr is not None:
                    print(f"[LOG ERROR] Cannot write {self._log_file}: {e}", file=sys.stderr)

    def debug(self, message: str, category: LogCategory = LogCategory.STARTUP,
              context: Dict[str, Any] = None, component: str = None) -> None:
        self._emit(LogLevel.DEBUG, category, message, context, component)

    def info(self, message: str, category: LogCategory = LogCategory.STARTUP,
             context: Dict[str, Any] = None, component: str = None) -> None:
        self._emit(LogLevel.INFO, category, message, context, component)

    def warning(self, message: str, category: LogCategory = LogCategory.ERROR,
                context: Dict[str, Any] = None, component: str = None) -> None:
        self._emit(LogLevel.WARNING, category, message, context, component)

    def error(self, message: str, exception: Exception = None,
              category: LogCategory = LogCategory.ERROR,
              context: Dict[str, Any] = None, component: str = None) -> None:
        context = dict(context or {})
        if exception is not None:
            context.setdefault('exception', str(exception))
            context.setdefault('exception_type', type(exception).__name__)
        self._emit(LogLevel.ERROR, category, message, context, component)

    @contextmanager
    def trace(self, operation: str, component: str = ""):
        """Time a block; failures are logged and re-raised"""
        with self._lock:
            self._trace_counter += 1
            trace_ctx = TraceContext(f"trace_{self._trace_counter:04d}", operation, component)

        self.debug(f"Starting {operation}", LogCategory.PERFORMANCE,
                   {'trace_id': trace_ctx.trace_id}, component)
        try:
            yield trace_ctx
        except Exception as e:
            self.error(f"Operation {operation} failed", e, LogCategory.ERROR,
                       {'trace_id': trace_ctx.trace_id}, component)
            raise
        finally:
            self.info(f"Completed {operation} in {trace_ctx.duration():.3f}s",
                      LogCategory.PERFORMANCE,
                      {'trace_id': trace_ctx.trace_id, 'checkpoints': trace_ctx.checkpoints},
                      component)


logger = UnifiedLogger()


class AppLoggerAdapter:
    """Event/error oriented facade used across the application"""

    def __init__(self, logger_instance: UnifiedLogger):
        self._logger = logger_instance

    def debug(self, message: str, category: LogCategory = LogCategory.STARTUP,
              context: Dict[str, Any] = None, component: str = None) -> None:
        self._logger.debug(message, category, context, component)

    def info(self, message: str, category: LogCategory = LogCategory.STARTUP,
             context: Dict[str, Any] = None, component: str = None) -> None:
        self._logger.info(message, category, context, component)

    def warning(self, message: str, category: LogCategory = LogCategory.ERROR,
                context: Dict[str, Any] = None, component: str = None) -> None:
        self._logger.warning(message, category, context, component)

    def error(self, message: str, exception: Exception = None,
              category: LogCategory = LogCategory.ERROR,
              context: Dict[str, Any] = None, component: str = None) -> None:
        self._logger.error(message, exception, category, context, component)

    def log_event(self, event: str, details: Dict[str, Any] = None,
                  category: LogCategory = LogCategory.STARTUP) -> None:
        self._logger.info(event, category, details, category.value)

    def log_config_event(self, event: str, details: Dict[str, Any] = None) -> None:
        self._logger.info(f"Config: {event}", LogCategory.CONFIG, details, "config")

    def log_error(self, error: Union[Exception, str], context: str) -> None:
        """Log an error with its traceback under a component name"""
        if isinstance(error, str):
            self._logger.error(error, component=context)
            return

        tb = ''.join(traceback.format_exception(type(error), error, error.__traceback__))
        self._logger.error(f"Error in {context}", error, LogCategory.ERROR,
                           {'traceback': tb}, context)

    def log_startup(self) -> None:
        self._logger.info("CMD Runner starting up", LogCategory.STARTUP, component="startup")

    def log_shutdown(self) -> None:
        self._logger.info("CMD Runner shutting down", LogCategory.STARTUP, component="shutdown")


app_logger = AppLoggerAdapter(logger)


__all__ = [
    'logger',
    'app_logger',
    'get_app_data_dir',
    'LogLevel',
    'LogCategory',
    'TraceContext',
    'UnifiedLogger',
    'AppLoggerAdapter',
]
