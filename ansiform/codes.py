"""Registry of the SGR style codes understood by the style algebra.

Codes are grouped by the terminal attribute they control. Within a group the
codes are mutually exclusive, and exactly one name per group (``default``)
turns the attribute back off.
"""

from dataclasses import dataclass
from typing import Dict, Optional

from .constants import LayoutConstants


@dataclass(frozen=True)
class CodeId:
    """Identity of a style code inside the registry.

    Attributes:
        group: Name of the mutually-exclusive group the code belongs to
        name: Name of the code within its group
    """
    group: str
    name: str

    @property
    def full_name(self) -> str:
        """Dotted ``group.name`` form, e.g. ``weight.bold``."""
        return f"{self.group}.{self.name}"

    @property
    def is_default(self) -> bool:
        """True when the code switches its group back off."""
        return self.name == LayoutConstants.DEFAULT_CODE_NAME


def _color_group(base: int, default: int, intense_base: int) -> Dict[str, int]:
    names = ["black", "red", "green", "yellow", "blue", "magenta", "cyan", "white"]
    group = {name: base + offset for offset, name in enumerate(names)}
    group["default"] = default
    for offset, name in enumerate(names):
        group[f"intense-{name}"] = intense_base + offset
    return group


STYLE_CODES: Dict[str, Dict[str, int]] = {
    "foreground": _color_group(30, 39, 90),
    # 48 is registered as the background "off" code; 49 is not registered
    "background": _color_group(40, 48, 100),
    "blink": {
        "slow": 5,
        "fast": 6,
        "default": 25,  # none
    },
    "display": {
        "conceal": 8,
        "default": 28,  # reveal
    },
    "emphasis": {
        "italic": 3,
        "fraktur": 20,
        "default": 23,  # normal
    },
    "font": {
        "default": 10,
        **{str(n): 10 + n for n in range(1, 10)},
    },
    "frame": {
        "framed": 51,
        "encircled": 52,
        "overlined": 53,
        "default": 54,  # none
        "not-overlined": 55,
    },
    "image": {
        "negative": 7,
        "default": 27,  # positive
    },
    "strikeout": {
        "strikeout": 9,
        "default": 29,  # none
    },
    "underline": {
        "single": 4,
        "default": 24,  # none
    },
    "weight": {
        "bold": 1,
        "faint": 2,
        "default": 22,  # normal
    },
}


def _build_index(table: Dict[str, Dict[str, int]]) -> Dict[int, CodeId]:
    index: Dict[int, CodeId] = {}
    for group, names in table.items():
        for name, code in names.items():
            if code in index:
                raise ValueError(
                    f"Style code {code} is registered twice "
                    f"({index[code].full_name} and {group}.{name})"
                )
            index[code] = CodeId(group=group, name=name)
    return index


_CODE_INDEX: Dict[int, CodeId] = _build_index(STYLE_CODES)


def get_code_id(code: int) -> Optional[CodeId]:
    """Look up the group and name of a style code.

    Args:
        code: Numeric SGR parameter

    Returns:
        CodeId if the code is registered, None otherwise
    """
    return _CODE_INDEX.get(code)


def get_code(full_name: str) -> Optional[int]:
    """Look up a code by its dotted name, e.g. ``foreground.red``."""
    group, _, name = full_name.partition(".")
    return STYLE_CODES.get(group, {}).get(name)
