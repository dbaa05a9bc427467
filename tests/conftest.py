"""Shared pytest fixtures: applications built from explicit settings."""

from collections.abc import Callable, Iterator
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from foundation.core.config import Settings
from foundation.main import create_app


@pytest.fixture
def make_settings() -> Callable[..., Settings]:
    """Build settings isolated from the process environment and .env."""

    def factory(**overrides: Any) -> Settings:
        values: dict[str, Any] = {
            "node_env": "test",
            "database_url": "",
            "rate_limit_window_ms": 60_000,
            "rate_limit_max_requests": 1000,
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return factory


@pytest.fixture
def app(make_settings: Callable[..., Settings]) -> FastAPI:
    return create_app(make_settings())


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
