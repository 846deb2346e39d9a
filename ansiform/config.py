"""Layout configuration and process-wide defaults.

Configurations are immutable. Every entry point takes an optional base
configuration plus keyword overrides and merges them into a new value; the
defaults used when no base is given are loaded once from the environment
(the terminal via Blessed, and an optional user defaults file).
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import blessed
import platformdirs

from .constants import LayoutConstants

logger = logging.getLogger(__name__)

TrimSetting = Union[bool, int]


class ConfigurationError(ValueError):
    """Raised for a layout configuration that cannot produce output."""


def _option_is_valid(name: str, value: Any, default: Any) -> bool:
    """Check a raw option value against the type of the field's default."""
    if name in ("trim_start", "trim_end"):
        return isinstance(value, (bool, int))
    if isinstance(default, bool):
        return isinstance(value, bool)
    if isinstance(default, int):
        return isinstance(value, int) and not isinstance(value, bool)
    return isinstance(value, type(default))


class _MergeMixin:
    """Shared merge/validation helpers for the frozen config dataclasses."""

    @classmethod
    def option_names(cls) -> frozenset:
        return frozenset(f.name for f in fields(cls))

    def merged(self, **overrides: Any):
        """Return a copy with ``overrides`` applied.

        Raises:
            ConfigurationError: If an override names an unknown option
        """
        unknown = set(overrides) - self.option_names()
        if unknown:
            raise ConfigurationError(
                f"Unknown {type(self).__name__} option(s): {', '.join(sorted(unknown))}"
            )
        if not overrides:
            return self
        return replace(self, **overrides)

    @classmethod
    def valid_options(cls, values: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        """Filter raw option values (e.g. from JSON) down to the usable ones.

        Unknown names and values of the wrong type are logged and skipped.
        """
        if not values:
            return {}
        defaults = cls()
        valid: Dict[str, Any] = {}
        for name, value in values.items():
            if name not in cls.option_names():
                logger.warning(f"Ignoring unknown {cls.__name__} option {name!r}")
                continue
            if not _option_is_valid(name, value, getattr(defaults, name)):
                logger.warning(f"Ignoring invalid value {value!r} for {cls.__name__}.{name}")
                continue
            valid[name] = value
        return valid


def _check_width(owner: str, width: Any) -> None:
    if isinstance(width, bool) or not isinstance(width, int) or width <= 0:
        raise ConfigurationError(f"{owner} width must be a positive integer, got {width!r}")


@dataclass(frozen=True)
class LayoutConfig(_MergeMixin):
    """Options for laying out one block of text.

    Attributes:
        styling: Emit SGR directives; False strips all styling from the output
        width: Total output width in columns, padding included
        first_line_indent: Inserted before the first line
        hanging_indent: Inserted before every line after the first
        padding_left: Inserted at the start of every line, before the indent
        padding_right: Appended to every line
        filler: Repeated after the text to pad each line to full width
        hard_break: Appended where an overlong word is split
        trim_start: True trims all leading spaces, an int at most that many
        trim_end: True trims all trailing spaces, an int at most that many
        justify: Stretch every line that does not end a paragraph
        justify_limit: Widest gap, in spaces, justification may produce;
            0 means no limit
    """
    styling: bool = False
    width: int = LayoutConstants.FALLBACK_WIDTH
    first_line_indent: str = ""
    hanging_indent: str = ""
    padding_left: str = ""
    padding_right: str = ""
    filler: str = ""
    hard_break: str = LayoutConstants.DEFAULT_HARD_BREAK
    trim_start: TrimSetting = False
    trim_end: TrimSetting = True
    justify: bool = False
    justify_limit: int = LayoutConstants.DEFAULT_JUSTIFY_LIMIT

    def __post_init__(self):
        _check_width("Layout", self.width)

    @classmethod
    def from_environment(
        cls,
        terminal: Optional[blessed.Terminal] = None,
        user_defaults: Optional[Mapping[str, Any]] = None,
    ) -> "LayoutConfig":
        """Build defaults for the attached terminal.

        Styling is enabled only when output goes to a terminal that supports
        it. ``user_defaults`` (the ``layout`` section of the defaults file)
        is applied on top.
        """
        term = terminal or blessed.Terminal()
        width = term.width or LayoutConstants.FALLBACK_WIDTH
        styling = bool(term.does_styling and term.is_a_tty)
        config = cls(styling=styling, width=width)
        return config.merged(**cls.valid_options(user_defaults))


@dataclass(frozen=True)
class ColumnConfig(_MergeMixin):
    """Shared options for a multi-column layout.

    Attributes:
        width: Total width allotted to all columns and the padding between them
        padding_middle: Inserted between adjacent columns
    """
    width: int = LayoutConstants.FALLBACK_WIDTH
    padding_middle: str = LayoutConstants.DEFAULT_MIDDLE_PADDING

    def __post_init__(self):
        _check_width("Column", self.width)

    @classmethod
    def from_environment(
        cls,
        terminal: Optional[blessed.Terminal] = None,
        user_defaults: Optional[Mapping[str, Any]] = None,
    ) -> "ColumnConfig":
        term = terminal or blessed.Terminal()
        config = cls(width=term.width or LayoutConstants.FALLBACK_WIDTH)
        return config.merged(**cls.valid_options(user_defaults))


def user_defaults_path() -> Path:
    """Location of the optional user defaults file."""
    config_dir = Path(platformdirs.user_config_dir(LayoutConstants.APP_NAME))
    return config_dir / LayoutConstants.DEFAULTS_FILENAME


def load_user_defaults(path: Optional[Path] = None) -> Dict[str, Dict[str, Any]]:
    """Load the user defaults file.

    The file is a JSON object with optional ``layout`` and ``columns``
    sections, each mapping option names to values.

    Args:
        path: File to read; defaults to ``user_defaults_path()``

    Returns:
        The parsed sections. Empty dict if the file is missing or unusable.
    """
    path = path or user_defaults_path()
    if not path.exists():
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
        logger.warning(f"Could not load layout defaults from {path}: {e}")
        return {}

    if not isinstance(data, dict):
        logger.warning(f"Layout defaults file {path} is not a JSON object, ignoring")
        return {}

    sections: Dict[str, Dict[str, Any]] = {}
    for key in ("layout", "columns"):
        section = data.get(key)
        if section is None:
            continue
        if not isinstance(section, dict):
            logger.warning(f"Section {key!r} of {path} is not an object, ignoring")
            continue
        sections[key] = section
    return sections


class _Defaults:
    """Holder for the process-wide default configurations.

    Both values load lazily on first use. They are replaced, never mutated.
    """

    def __init__(self):
        self.layout: Optional[LayoutConfig] = None
        self.columns: Optional[ColumnConfig] = None

    def load(self) -> None:
        terminal = blessed.Terminal()
        user = load_user_defaults()
        if self.layout is None:
            self.layout = LayoutConfig.from_environment(terminal, user.get("layout"))
            logger.debug(f"Loaded default layout configuration: {self.layout}")
        if self.columns is None:
            self.columns = ColumnConfig.from_environment(terminal, user.get("columns"))
            logger.debug(f"Loaded default column configuration: {self.columns}")


_defaults = _Defaults()


def get_default_config() -> LayoutConfig:
    """Return the default layout configuration, loading it if needed."""
    if _defaults.layout is None:
        _defaults.load()
    return _defaults.layout


def get_default_column_config() -> ColumnConfig:
    """Return the default column configuration, loading it if needed."""
    if _defaults.columns is None:
        _defaults.load()
    return _defaults.columns


def set_default_config(**values: Any) -> LayoutConfig:
    """Replace the default layout configuration with a merged copy.

    Intended to be called once at start-up.
    """
    _defaults.layout = get_default_config().merged(**values)
    return _defaults.layout


def set_default_column_config(**values: Any) -> ColumnConfig:
    """Replace the default column configuration with a merged copy."""
    _defaults.columns = get_default_column_config().merged(**values)
    return _defaults.columns


def reset_defaults(
    layout: Optional[LayoutConfig] = None,
    columns: Optional[ColumnConfig] = None,
) -> None:
    """Install the given defaults, or forget them so the next use reloads."""
    _defaults.layout = layout
    _defaults.columns = columns


def resolve_config(config: Optional[LayoutConfig], overrides: Mapping[str, Any]) -> LayoutConfig:
    """Merge per-call ``overrides`` over ``config`` (or the defaults)."""
    base = config if config is not None else get_default_config()
    return base.merged(**overrides)
