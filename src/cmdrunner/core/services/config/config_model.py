"""Typed view of the settings file after normalization"""

from dataclasses import dataclass, field
from typing import List, Optional

from .config_defaults import DEFAULT_DARK_THEME


@dataclass(frozen=True)
class CommandEntry:
    """One launcher entry; every field already defaulted"""

    label: str
    command: str
    group: Optional[str] = None


@dataclass
class Configuration:
    dark_theme: bool = DEFAULT_DARK_THEME
    commands: List[CommandEntry] = field(default_factory=list)


@dataclass
class NormalizationResult:
    """Normalized configuration plus what was wrong with the raw input

    Attributes:
        config: always usable; `commands` is empty when `errors` is non-empty
        errors: hard validation violations, surfaced to the user
        warnings: defaults that were substituted, logged
        entry_warnings: missing label/command messages, also shown to the user
    """

    config: Configuration
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    entry_warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors
