"""Shared pytest fixtures for the API tests."""

from __future__ import annotations

import sys
from pathlib import Path

import mongomock
import pytest
from fastapi.testclient import TestClient

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

import database  # noqa: E402
import main  # noqa: E402
from config import Config  # noqa: E402


class _TestConfig(Config):
    DATABASE_URL = "mongodb://localhost:27017"
    USERS_DATABASE_NAME = "test-users"
    PRODUCTS_DATABASE_NAME = "test-catalog"
    JWT_SECRET = "test-secret"
    EXPIRES_IN = "1h"
    BCRYPT_ROUNDS = 4


@pytest.fixture()
def cfg() -> Config:
    return _TestConfig()


@pytest.fixture()
def mongo_client(monkeypatch) -> mongomock.MongoClient:
    """In-memory MongoDB shared by the app and the test."""

    client = mongomock.MongoClient()
    monkeypatch.setattr(database, "MongoClient", lambda *args, **kwargs: client)
    return client


@pytest.fixture()
def products(mongo_client, cfg):
    return mongo_client[cfg.PRODUCTS_DATABASE_NAME][database.PRODUCTS_COLLECTION]


@pytest.fixture()
def users(mongo_client, cfg):
    return mongo_client[cfg.USERS_DATABASE_NAME][database.USERS_COLLECTION]


@pytest.fixture()
def client(monkeypatch, cfg, mongo_client) -> TestClient:
    """Return a test client with the app lifespan running."""

    monkeypatch.setattr(main, "cfg", cfg)
    with TestClient(main.app) as test_client:
        yield test_client
