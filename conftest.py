import pytest
import structlog


@pytest.fixture(autouse=True)
def reset_structlog():
    """Drop any logging configuration a CLI run bound to its captured streams."""
    yield
    structlog.reset_defaults()
