"""Shared fixtures for mongo-datasource tests."""

from __future__ import annotations

import pytest

from mongo_datasource import CompilerOptions, FilterCompiler, MongoConnectionManager
from mongo_datasource.operators_mongo import build_default_table

pytest_plugins = ["pytest_asyncio"]


@pytest.fixture
def table():
    """Default operator table."""
    return build_default_table()


@pytest.fixture
def compiler():
    """Lenient compiler with default options."""
    return FilterCompiler()


@pytest.fixture
def strict_compiler():
    """Compiler that raises on unknown operators and malformed clauses."""
    return FilterCompiler(CompilerOptions(strict=True))


@pytest.fixture
def mock_connection():
    """Create a MongoDB connection backed by mongomock."""
    try:
        from mongomock_motor import AsyncMongoMockClient
    except ImportError:
        pytest.skip("mongomock-motor not installed")

    connection = MongoConnectionManager.__new__(MongoConnectionManager)
    connection._client = AsyncMongoMockClient(default_database_name="test_db")
    connection._url = "mongodb://mock:27017"

    async def _mock_connect():
        return connection._client

    connection.connect = _mock_connect
    return connection
