import pytest

from bookshelf.config.settings import Settings
from bookshelf.core.logging.builder import setup_logging


@pytest.fixture
def restore_logging():
    """Tests that reconfigure logging put the suite-wide configuration back afterwards."""
    yield
    setup_logging(Settings())
