import pytest
from plummer import config


@pytest.fixture(autouse=True)
def reset_config():
    """Every test starts and ends with default package settings."""
    config.reset()
    yield
    config.reset()
