"""pytest configuration and global fixtures"""
import json
import os
import sys
from pathlib import Path

import pytest

# Tray and menus must work without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from cmdrunner.utils import logger as unified_logger  # noqa: E402


# ============= Isolation Fixtures =============

@pytest.fixture(autouse=True)
def isolated_log_file(tmp_path):
    """Keep test logs out of the real app data directory"""
    previous = unified_logger.get_log_file()
    unified_logger.set_log_file(tmp_path / "logs" / "app.log")
    yield unified_logger.get_log_file()
    unified_logger.set_log_file(previous)


@pytest.fixture
def settings_path(tmp_path):
    """Settings file location inside a not-yet-existing directory"""
    return tmp_path / "CMDRunner" / "settings.json"


@pytest.fixture
def write_settings(settings_path):
    """Write a settings value (dict/list/str) and return the path"""

    def _write(content):
        settings_path.parent.mkdir(parents=True, exist_ok=True)
        text = content if isinstance(content, str) else json.dumps(content, indent=3)
        settings_path.write_text(text, encoding="utf-8")
        return settings_path

    return _write
