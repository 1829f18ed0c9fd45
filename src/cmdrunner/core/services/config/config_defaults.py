"""配置默认值定义 - 单一职责：提供默认配置和占位值"""

import json
import sys
from typing import Dict, Any

SETTINGS_FILENAME = "settings.json"
SETTINGS_INDENT = 3

PLACEHOLDER_LABEL = "Unnamed command"

if sys.platform == "win32":
    _URL_OPENER = "start"
    PLACEHOLDER_COMMAND = (
        "echo This menu entry has no command. "
        "Add a \"command\" field to it in settings.json. & pause"
    )
elif sys.platform == "darwin":
    _URL_OPENER = "open"
    PLACEHOLDER_COMMAND = (
        "echo 'This menu entry has no command. "
        "Add a \"command\" field to it in settings.json.' >&2"
    )
else:
    _URL_OPENER = "xdg-open"
    PLACEHOLDER_COMMAND = (
        "echo 'This menu entry has no command. "
        "Add a \"command\" field to it in settings.json.' >&2"
    )

DEFAULT_DARK_THEME = False


def get_default_config() -> Dict[str, Any]:
    """获取首次运行时写入的默认配置

    Returns:
        默认配置字典
    """
    return {
        "general": {
            "darkTheme": DEFAULT_DARK_THEME,
        },
        "commands": [
            {
                "label": "Example: Open Google",
                "command": f"{_URL_OPENER} https://google.com",
            }
        ],
    }


def get_default_payload() -> str:
    """默认配置的文件内容（3 空格缩进）"""
    return json.dumps(get_default_config(), indent=SETTINGS_INDENT)
