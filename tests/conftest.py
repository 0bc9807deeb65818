"""
Root Pytest Fixtures.

Shared fixtures available to all tests. Every test runs with a clean
environment: no RPaaS/Tsuru targets and no user settings file, so results
never depend on the machine running them.
"""

import logging
from collections.abc import Generator

import pytest

from rpaasv2.core.config import get_app_config, get_settings

TARGET_ENV_VARS = (
    "RPAAS_URL",
    "RPAAS_USER",
    "RPAAS_PASSWORD",
    "TSURU_TARGET",
    "TSURU_TOKEN",
)


@pytest.fixture(autouse=True)
def clean_environment(tmp_path, monkeypatch) -> Generator[None, None, None]:
    """Drop target variables, point the settings file at an empty location."""
    for name in TARGET_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("RPAASV2_CONFIG", str(tmp_path / "missing-config.yaml"))

    get_settings.cache_clear()
    get_app_config.cache_clear()
    yield
    get_settings.cache_clear()
    get_app_config.cache_clear()


@pytest.fixture(autouse=True)
def reset_root_logger() -> Generator[None, None, None]:
    """Remove handlers installed by setup_logging (they hold captured streams)."""
    yield
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
