"""
Pytest configuration for envbinder tests.

Provides fixtures for isolating the process environment.
"""

import pytest

SCENARIO_VARS = [
    "APP_NAME",
    "PORT",
    "DEBUG",
    "ALLOWED_HOSTS",
    "OPTIONAL",
    "DEFAULT_VAL",
]


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "process_env: test reads the real os.environ instead of a mapping"
    )


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Unset the variables used by the end-to-end scenario."""
    for key in SCENARIO_VARS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch
