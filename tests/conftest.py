import os
from datetime import date

import pytest

os.environ.setdefault("ENVIRONMENT", "test")

from capacity_compass.models import CapacityConfig  # noqa: E402
from tests.factories import TODAY  # noqa: E402


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def week_config() -> CapacityConfig:
    return CapacityConfig(hours_per_day=8, window_days=7)


@pytest.fixture
def client():
    """HTTP test client for the FastAPI application"""
    from fastapi.testclient import TestClient

    from capacity_compass.main import app

    with TestClient(app) as test_client:
        yield test_client
