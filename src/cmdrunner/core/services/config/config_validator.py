"""配置验证服务 - 单一职责：配置验证和默认值填充"""

from typing import Any, Dict, List, Optional

from ....utils import app_logger
from .config_defaults import (
    DEFAULT_DARK_THEME,
    PLACEHOLDER_COMMAND,
    PLACEHOLDER_LABEL,
)
from .config_model import CommandEntry, Configuration, NormalizationResult


class ConfigValidator:
    """配置验证器 - 只负责验证和规范化配置"""

    def validate_config(self, config: Any) -> Dict[str, List[str]]:
        """验证配置结构

        Only a missing or non-list `commands` (or a non-object root) is an
        issue; everything else is a warning that gets a default.

        Args:
            config: 解析后的原始 JSON 值

        Returns:
            {"issues": [...], "warnings": [...], "entries": [...]}
            `entries` repeats the warnings about missing label/command
            fields, which are also shown to the user
        """
        issues: List[str] = []
        warnings: List[str] = []
        entries: List[str] = []

        if not isinstance(config, dict):
            issues.append(
                f"Settings root must be a JSON object, found {_json_type(config)}."
            )
            return {"issues": issues, "warnings": warnings, "entries": entries}

        general = config.get("general")
        if general is not None and not isinstance(general, dict):
            warnings.append('"general" is not an object; using defaults.')
        elif isinstance(general, dict):
            dark_theme = general.get("darkTheme")
            if dark_theme is not None and not isinstance(dark_theme, bool):
                warnings.append('"general.darkTheme" is not true/false; using default.')

        if "commands" not in config:
            issues.append('Settings missing "commands" array.')
        elif not isinstance(config["commands"], list):
            issues.append(
                f'"commands" must be an array, found {_json_type(config["commands"])}.'
            )
        else:
            for index, entry in enumerate(config["commands"]):
                missing = self._missing_fields(index, entry)
                entries.extend(missing)
                warnings.extend(missing)
                warnings.extend(self._group_warnings(index, entry))

        return {"issues": issues, "warnings": warnings, "entries": entries}

    def normalize(self, config: Any) -> NormalizationResult:
        """验证并填充默认值

        Args:
            config: 解析后的原始 JSON 值

        Returns:
            NormalizationResult；有 issues 时 commands 为空
        """
        report = self.validate_config(config)
        issues = report["issues"]
        warnings = report["warnings"]

        dark_theme = DEFAULT_DARK_THEME
        commands: List[CommandEntry] = []

        if isinstance(config, dict):
            general = config.get("general")
            if isinstance(general, dict) and isinstance(general.get("darkTheme"), bool):
                dark_theme = general["darkTheme"]

            if not issues:
                commands = [self._normalize_entry(entry) for entry in config["commands"]]

        if warnings:
            app_logger.log_config_event(
                "Defaults substituted in settings", {"warnings": warnings}
            )
        if issues:
            app_logger.warning(
                "Settings validation failed",
                context={"issues": issues},
                component="config_validator",
            )

        return NormalizationResult(
            config=Configuration(dark_theme=dark_theme, commands=commands),
            errors=issues,
            warnings=warnings,
            entry_warnings=report["entries"],
        )

    def _normalize_entry(self, entry: Any) -> CommandEntry:
        if not isinstance(entry, dict):
            entry = {}

        return CommandEntry(
            label=_non_empty_string(entry.get("label")) or PLACEHOLDER_LABEL,
            command=_non_empty_string(entry.get("command")) or PLACEHOLDER_COMMAND,
            group=_non_empty_string(entry.get("group")),
        )

    def _missing_fields(self, index: int, entry: Any) -> List[str]:
        if not isinstance(entry, dict):
            return [f"entry at index {index} is not an object; using placeholders."]

        missing = [
            name for name in ("label", "command")
            if _non_empty_string(entry.get(name)) is None
        ]
        if len(missing) == 2:
            return [f"command and label fields missing for entry at index {index}"]
        if missing:
            return [f"{missing[0]} field missing for entry at index {index}"]
        return []

    def _group_warnings(self, index: int, entry: Any) -> List[str]:
        if isinstance(entry, dict) and "group" in entry and _non_empty_string(entry.get("group")) is None:
            return [f"group of entry at index {index} is not a name; placing it at the root"]
        return []


def _non_empty_string(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value
    return None


def _json_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"
