"""
Pytest configuration for test suite

Markers:
- unit: Fast unit tests (no external dependencies)
- integration: Integration tests (requires a reachable OBS endpoint)
"""

import pytest

OBS_ENV_KEYS = [
    f"{prefix}OBS_{field}"
    for prefix in ("", "RULER_")
    for field in ("ACCESS_KEY", "SECRET_KEY", "ENDPOINT", "BUCKET", "REGION")
]


def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line("markers", "unit: Fast unit tests (no dependencies)")
    config.addinivalue_line(
        "markers", "integration: Integration tests (requires OBS endpoint)"
    )


@pytest.fixture(autouse=True)
def clean_obs_env(request, monkeypatch):
    """Keep OBS variables from the host environment out of unit tests"""
    if request.node.get_closest_marker("integration"):
        return
    for key in OBS_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
