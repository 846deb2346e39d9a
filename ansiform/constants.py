"""Constants and default values for the ansiform layout engine."""

class LayoutConstants:
    """Central configuration constants for text layout."""

    # Escape introducers; the first one is used when encoding
    ESCAPE_CHARS = ("\u001b", "\u009b")
    RESET_CODE = 0
    DEFAULT_CODE_NAME = "default"

    # Soft break locations; the character stays attached to the word before it
    BREAK_CHARS = (
        " ",
        "-",
        "\n",
        "\u2007",  # figure space
        "\u2060",  # word joiner
    )

    # Marker laid out to produce blank padding lines for short columns
    ZERO_WIDTH_SPACE = "\u200b"

    # Characters whose display width differs from what wcwidth reports
    CHARACTER_WIDTHS = {
        ZERO_WIDTH_SPACE: 0,
    }

    # Literal replacements applied by transform()
    DEFAULT_TRANSFORMS = {
        "\r\n": "\n",
        "\t": "  ",
    }

    # Layout defaults
    FALLBACK_WIDTH = 80  # Used when the terminal does not report a width
    DEFAULT_HARD_BREAK = "-"
    DEFAULT_JUSTIFY_LIMIT = 0  # Widest gap justification may produce; 0 is no limit
    DEFAULT_MIDDLE_PADDING = "   "
    COLUMN_FILLER = " "  # Columns are always padded out to their width

    # A hard break is placed on the current line only if more than this many
    # columns remain; otherwise the word starts on a fresh line
    HARD_BREAK_MIN_ROOM = 3

    # User defaults file
    APP_NAME = "ansiform"
    DEFAULTS_FILENAME = "defaults.json"
