"""ansiform - Wrap, justify and lay out ANSI-styled text for the terminal."""

from . import ansi, codes, columns
from .config import (
    ColumnConfig,
    ConfigurationError,
    LayoutConfig,
    get_default_column_config,
    get_default_config,
    reset_defaults,
    set_default_column_config,
    set_default_config,
)
from .columns import Column
from .layout import (
    justify,
    split_words,
    transform,
    trim,
    wrap_to_lines,
    wrap_to_string,
)
from .separate import SeparatedText, StyleChange, split_styles, strip_styles
from .width import display_width

__all__ = [
    'ansi',
    'codes',
    'columns',
    'Column',
    'ColumnConfig',
    'ConfigurationError',
    'LayoutConfig',
    'SeparatedText',
    'StyleChange',
    'display_width',
    'get_default_column_config',
    'get_default_config',
    'justify',
    'reset_defaults',
    'set_default_column_config',
    'set_default_config',
    'split_styles',
    'split_words',
    'strip_styles',
    'transform',
    'trim',
    'wrap_to_lines',
    'wrap_to_string',
]
