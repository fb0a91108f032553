"""Shared test fixtures."""

from __future__ import annotations

import logging
import os

import pytest
from fastapi.testclient import TestClient

from csp_builder.core.catalog import get_catalog, reset_catalog_cache
from csp_builder.core.policy import create_policy


@pytest.fixture(autouse=True)
def _mock_settings(monkeypatch):
    """Provide default settings and a fresh catalog for all tests."""
    for key in list(os.environ):
        if key.startswith("CSP_BUILDER_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("CSP_BUILDER_LOG_JSON", "false")
    monkeypatch.setenv("CSP_BUILDER_LOG_LEVEL", "debug")

    # Reset cached settings and catalog
    import csp_builder.config.loader as loader
    loader._settings = None
    reset_catalog_cache()

    # setup_logging() replaces root handlers; put them back afterwards
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
    loader._settings = None
    reset_catalog_cache()


@pytest.fixture
def catalog():
    return get_catalog()


@pytest.fixture
def policy():
    """An empty policy over the bundled catalog."""
    return create_policy()


@pytest.fixture
def client():
    """Create a FastAPI test client."""
    from csp_builder.main import app
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c
