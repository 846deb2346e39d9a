"""Style algebra over SGR codes.

A sequence of codes applied over time collapses to the minimal set of codes
that reproduces the same terminal state: later codes win inside their group
and a reset (``0``) forgets everything before it.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, Iterable, List

from .codes import get_code_id
from .constants import LayoutConstants

logger = logging.getLogger(__name__)

RESET = LayoutConstants.RESET_CODE

# One "set graphic rendition" directive, e.g. "\x1b[1;31m"
_INTRODUCER = "[" + "".join(LayoutConstants.ESCAPE_CHARS) + "]"
SGR_TEMPLATE = _INTRODUCER + r"\[\d+(?:;\d+)*;?m"
SGR_RE = re.compile(_INTRODUCER + r"\[(\d+(?:;\d+)*;?)m")


def clean(codes: Iterable[int]) -> List[int]:
    """Reduce a sequence of codes to the codes that are still in effect.

    Unknown codes are dropped. A group's default (off) code is not kept when
    a reset was seen and nothing switched that group on since, so
    ``[0, 22]`` collapses to ``[0]``.

    Returns:
        The surviving codes in first-insertion order of their group, led by
        ``0`` if a reset was seen. Never empty: ``[0]`` when nothing is left.
    """
    groups: Dict[str, int] = {}
    saw_reset = False

    for code in codes:
        if code == RESET:
            groups = {}
            saw_reset = True
            continue

        code_id = get_code_id(code)
        if code_id is None:
            logger.debug(f"Dropping unknown style code {code}")
            continue
        if saw_reset and code_id.is_default and code_id.group not in groups:
            continue
        groups[code_id.group] = code

    result = list(groups.values())
    if saw_reset:
        result.insert(0, RESET)
    return result or [RESET]


def adjust(previous: Iterable[int], adjustment: Iterable[int]) -> List[int]:
    """Apply ``adjustment`` on top of the ``previous`` active codes."""
    return clean([*previous, *adjustment])


def clear_defaults(codes: Iterable[int]) -> List[int]:
    """Remove default (off) codes, and codes the registry does not know."""
    kept = []
    for code in codes:
        code_id = get_code_id(code)
        if code_id is not None and not code_id.is_default:
            kept.append(code)
    return kept


def encode(codes: Iterable[int]) -> str:
    """Render codes as a single SGR escape directive."""
    params = ";".join(str(code) for code in codes)
    return f"{LayoutConstants.ESCAPE_CHARS[0]}[{params}m"


def parse_params(params: str) -> List[int]:
    """Parse the ``;``-separated parameter list of a matched directive."""
    return [int(part) for part in params.split(";") if part]
