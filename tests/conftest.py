import pytest

from ansiform.config import ColumnConfig, LayoutConfig, reset_defaults


@pytest.fixture(autouse=True)
def plain_defaults():
    """Keep tests away from the real terminal and the user's defaults file."""
    reset_defaults(LayoutConfig(), ColumnConfig())
    yield
    reset_defaults(LayoutConfig(), ColumnConfig())
