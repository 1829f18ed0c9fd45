"""配置写入服务 - 单一职责：首次运行时创建配置文件"""

from pathlib import Path

from ....utils import app_logger, ConfigurationError
from .config_defaults import get_default_payload


class ConfigWriter:
    """配置写入器 - 只负责创建默认配置

    The program never rewrites the settings file; the only write is the
    exclusive create on first run.
    """

    def __init__(self, config_path: Path):
        """初始化配置写入器

        Args:
            config_path: 配置文件路径
        """
        self.config_path = config_path

    def create_default(self) -> bool:
        """以独占方式创建默认配置文件

        Returns:
            True 表示新建了文件，False 表示文件已存在（未改动）

        Raises:
            ConfigurationError: 除“已存在”之外的任何创建失败
        """
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            app_logger.log_error(e, "config_writer_mkdir")
            raise ConfigurationError(
                f"Cannot create settings directory {self.config_path.parent}: {e.strerror or e}",
                context={"config_path": str(self.config_path)},
                original_exception=e,
            ) from e

        try:
            with open(self.config_path, "x", encoding="utf-8") as f:
                f.write(get_default_payload())
        except FileExistsError:
            app_logger.log_config_event(
                "Settings file found", {"config_path": str(self.config_path)}
            )
            return False
        except OSError as e:
            app_logger.log_error(e, "config_writer_create")
            raise ConfigurationError(
                f"Cannot create settings file {self.config_path}: {e.strerror or e}",
                context={"config_path": str(self.config_path)},
                original_exception=e,
            ) from e

        app_logger.log_config_event(
            "Default settings file created", {"config_path": str(self.config_path)}
        )
        return True
