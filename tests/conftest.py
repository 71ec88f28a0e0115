from __future__ import annotations

import hashlib
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from catalog_api.app.core.config import Settings
from catalog_api.app.core.db import init_db
from catalog_api.app.core.metrics import MetricsRegistry
from catalog_api.app.main import create_app
from catalog_api.app.repositories import ProductRepository, UserRepository
from catalog_api.app.services.product_service import ProductService
from catalog_api.app.services.user_service import UserService


class SpyCounter:
    """Counter sink that records every increment."""

    def __init__(self) -> None:
        self.names: list[str] = []

    def increment(self, name: str) -> None:
        self.names.append(name)

    def count(self, name: str) -> int:
        return self.names.count(name)


class FailingCounter:
    def increment(self, name: str) -> None:
        raise RuntimeError("metrics backend down")


def password_matches(plain: str, stored: str) -> bool:
    """Recompute a stored PBKDF2 hash for ``plain`` and compare."""
    algorithm, iterations, salt_hex, hash_hex = stored.split("$", 3)
    dk = hashlib.pbkdf2_hmac("sha256", plain.encode("utf-8"), bytes.fromhex(salt_hex), int(iterations))
    return algorithm == "pbkdf2_sha256" and dk.hex() == hash_hex


class SpyRepository:
    """Repository stand-in that records and rejects every call."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def __getattr__(self, name: str):
        def record(*args, **kwargs):
            self.calls.append(name)
            raise AssertionError(f"unexpected store call: {name}")

        return record


@pytest.fixture()
def database_path(tmp_path: Path) -> str:
    path = str(tmp_path / "catalog.sqlite3")
    init_db(path)
    return path


@pytest.fixture()
def counters() -> SpyCounter:
    return SpyCounter()


@pytest.fixture()
def user_repository(database_path: str) -> UserRepository:
    return UserRepository(database_path)


@pytest.fixture()
def product_repository(database_path: str) -> ProductRepository:
    return ProductRepository(database_path)


@pytest.fixture()
def user_service(user_repository: UserRepository, counters: SpyCounter) -> UserService:
    return UserService(user_repository, counters)


@pytest.fixture()
def product_service(product_repository: ProductRepository, counters: SpyCounter) -> ProductService:
    return ProductService(product_repository, counters)


@pytest.fixture()
def metrics() -> MetricsRegistry:
    return MetricsRegistry()


@pytest.fixture()
def app(tmp_path: Path, metrics: MetricsRegistry):
    app_settings = Settings(database_url=str(tmp_path / "api.sqlite3"))
    return create_app(app_settings, metrics=metrics)


@pytest.fixture()
def client(app):
    with TestClient(app) as test_client:
        yield test_client
