import pytest
import structlog


@pytest.fixture(autouse=True)
def reset_structlog():
    """CLI tests configure structlog globally; undo that between tests."""
    yield
    structlog.reset_defaults()
