"""Lay out several blocks of text side by side.

Each column is wrapped on its own with its own configuration, then the
columns are padded to the same number of lines and joined row by row.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from .config import (
    ColumnConfig,
    LayoutConfig,
    get_default_column_config,
    get_default_config,
)
from .constants import LayoutConstants
from .layout import wrap_to_lines
from .width import display_width


@dataclass(frozen=True)
class Column:
    """One column: its content plus LayoutConfig overrides for it alone.

    A ``width`` in ``options`` fixes the column's width; columns without
    one share whatever width is left.
    """
    content: Any = ""
    options: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def of(cls, spec: "ColumnSpec") -> "Column":
        """Normalize a column spec: text, None, a mapping, or a Column."""
        if isinstance(spec, Column):
            return spec
        if spec is None:
            return cls()
        if isinstance(spec, Mapping):
            options = dict(spec)
            content = options.pop("content", "")
            return cls(content, options)
        return cls(spec)

    @property
    def text(self) -> str:
        return "" if self.content is None else str(self.content)


ColumnSpec = Union[Column, Mapping[str, Any], str, int, float, None]


def _split_options(options: Mapping[str, Any]) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """Separate ColumnConfig options from shared LayoutConfig options."""
    names = ColumnConfig.option_names()
    column_options = {k: v for k, v in options.items() if k in names}
    layout_options = {k: v for k, v in options.items() if k not in names}
    return column_options, layout_options


def _column_widths(columns: Sequence[Column], config: ColumnConfig) -> List[Optional[int]]:
    """Give every column without an explicit width its share of the rest.

    The leftover columns after an even split go one each to the first
    columns that share.
    """
    middle_width = display_width(config.padding_middle)
    unclaimed = config.width - middle_width * (len(columns) - 1)
    sharing = []
    for index, column in enumerate(columns):
        if "width" in column.options:
            unclaimed -= column.options["width"]
        else:
            sharing.append(index)

    widths: List[Optional[int]] = [None] * len(columns)
    if sharing:
        share, remainder = divmod(unclaimed, len(sharing))
        for n, index in enumerate(sharing):
            widths[index] = share + (1 if n < remainder else 0)
    return widths


def _blank_line(config: LayoutConfig) -> str:
    """An empty line with the column's padding, filler and styling."""
    marker = LayoutConstants.ZERO_WIDTH_SPACE
    return wrap_to_lines(marker, config)[0].replace(marker, "", 1)


def lines(
    columns: Sequence[ColumnSpec],
    config: Optional[ColumnConfig] = None,
    **options: Any,
) -> List[str]:
    """Lay out columns side by side.

    Args:
        columns: One spec per column
        config: Shared column configuration; the process defaults when omitted
        **options: ``width`` / ``padding_middle`` for the ColumnConfig; any
            other option is a LayoutConfig override shared by all columns

    Returns:
        One string per row, every row the same width.
    """
    column_options, layout_options = _split_options(options)
    column_config = (config or get_default_column_config()).merged(**column_options)
    shared = (
        get_default_config()
        .merged(filler=LayoutConstants.COLUMN_FILLER)
        .merged(**layout_options)
    )

    specs = [Column.of(column) for column in columns]
    widths = _column_widths(specs, column_config)
    configs = []
    for spec, width in zip(specs, widths):
        column_cfg = shared.merged(**spec.options)
        if width is not None:
            column_cfg = column_cfg.merged(width=width)
        configs.append(column_cfg)

    column_lines = [wrap_to_lines(spec.text, cfg) for spec, cfg in zip(specs, configs)]
    total_lines = max((len(rows) for rows in column_lines), default=0)
    for rows, cfg in zip(column_lines, configs):
        if len(rows) < total_lines:
            blank = _blank_line(cfg)
            rows.extend([blank] * (total_lines - len(rows)))

    return [column_config.padding_middle.join(row) for row in zip(*column_lines)]


def wrap(
    columns: Sequence[ColumnSpec],
    config: Optional[ColumnConfig] = None,
    **options: Any,
) -> str:
    """Lay out columns and join the rows with newlines.

    The total width is reduced by one column before laying out.
    """
    column_options, layout_options = _split_options(options)
    column_config = (config or get_default_column_config()).merged(**column_options)
    column_config = column_config.merged(width=column_config.width - 1)
    return "\n".join(lines(columns, column_config, **layout_options))
