#!/usr/bin/env python3
"""
CMD Runner - Application Entry Point

Unified entry point providing:
- CLI argument parsing and mode selection
- Logging setup (level, console output)
- Settings validation without starting the tray

Usage:
  python app.py                      # Start tray app (default)
  python app.py --settings my.json   # Use another settings file
  python app.py --validate           # Check the settings file and exit
"""

import argparse
import os
import signal
import sys
import time
from typing import List, Optional

# ============================================================================
# Application Startup
# ============================================================================

# Track application startup time
_STARTUP_START_TIME = time.time()

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

from cmdrunner.core.app_lifecycle import AppLifecycle  # noqa: E402
from cmdrunner.core.services.config import SettingsStore  # noqa: E402
from cmdrunner.utils import ConfigurationError, LogCategory, app_logger, logger  # noqa: E402

# Global reference for cleanup in signal handler
_lifecycle_instance: Optional[AppLifecycle] = None


def handle_shutdown(signum, frame):
    """Handle shutdown signals gracefully with proper cleanup"""
    print("\n[SHUTDOWN] Received shutdown signal, cleaning up...")

    # If the tray app is running, let it quit through the Qt event loop
    if _lifecycle_instance is not None:
        _lifecycle_instance.quit()
        return

    sys.exit(0)


def validate_settings(settings_path: Optional[str]) -> List[str]:
    """Load and normalize the settings file

    Returns:
        Problems found; empty when the file is usable as is
    """
    store = SettingsStore(settings_path)
    print(f"Settings file: {store.settings_path}")

    try:
        result = store.load_normalized()
    except ConfigurationError as e:
        return [e.message]

    for warning in result.warnings:
        print(f"  [WARN] {warning}")
    print(f"  {len(result.config.commands)} command(s), darkTheme={result.config.dark_theme}")
    return list(result.errors)


def run_gui(settings_path: Optional[str]) -> int:
    """Launch the tray application"""
    global _lifecycle_instance

    lifecycle = AppLifecycle(settings_path=settings_path)
    _lifecycle_instance = lifecycle

    startup_duration = time.time() - _STARTUP_START_TIME
    app_logger.info(
        f"Entry point ready in {startup_duration:.2f}s",
        category=LogCategory.STARTUP,
        context={'startup_duration_sec': round(startup_duration, 2)},
        component="main",
    )

    try:
        return lifecycle.run()
    finally:
        _lifecycle_instance = None


def main():
    """Main application entry point"""
    parser = argparse.ArgumentParser(description="CMD Runner - tray launcher for shell commands")
    parser.add_argument("--gui", action="store_true", help="Launch the tray app (default)")
    parser.add_argument("--settings", metavar="PATH", help="Settings file to use")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--console-log", action="store_true", help="Also log to the console")
    parser.add_argument("--validate", action="store_true", help="Validate the settings file and exit")

    args = parser.parse_args()

    if args.debug:
        logger.set_log_level("DEBUG")
    if args.console_log:
        logger.set_console_output(True)

    # Set up signal handlers
    signal.signal(signal.SIGINT, handle_shutdown)
    signal.signal(signal.SIGTERM, handle_shutdown)

    if args.validate:
        problems = validate_settings(args.settings)
        for problem in problems:
            print(f"  [FAIL] {problem}")
        if not problems:
            print("  [OK] Settings are valid")
        sys.exit(0 if not problems else 1)

    # Default: always launch the tray app (with or without --gui flag)
    sys.exit(run_gui(args.settings))


if __name__ == "__main__":
    main()
