"""配置读取服务 - 单一职责：从磁盘读取并解析配置"""

import json
from pathlib import Path
from typing import Any

from ....utils import app_logger, ConfigurationError, SettingsParseError


class ConfigReader:
    """配置读取器 - 只负责读取配置

    Every call reads the file again; nothing is cached between reads.
    """

    def __init__(self, config_path: Path):
        """初始化配置读取器

        Args:
            config_path: 配置文件路径
        """
        self.config_path = config_path

    def load_raw(self) -> Any:
        """从文件加载并解析配置

        Returns:
            解析后的 JSON 值（通常是 dict，但不做结构检查）

        Raises:
            SettingsParseError: 文件内容不是合法 JSON
            ConfigurationError: 文件不存在或无法读取
        """
        try:
            text = self.config_path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise SettingsParseError(
                f"Settings file is not valid UTF-8: {e}",
                context={"config_path": str(self.config_path)},
                original_exception=e,
            ) from e
        except OSError as e:
            raise ConfigurationError(
                f"Cannot read settings file {self.config_path}: {e.strerror or e}",
                context={"config_path": str(self.config_path)},
                original_exception=e,
            ) from e

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise SettingsParseError(
                f"Settings file is not valid JSON: {e.msg} (line {e.lineno}, column {e.colno})",
                line=e.lineno,
                column=e.colno,
                context={"config_path": str(self.config_path)},
                original_exception=e,
            ) from e

        app_logger.log_config_event(
            "Settings loaded",
            {
                "config_path": str(self.config_path),
                "bytes": len(text),
            },
        )
        return data
