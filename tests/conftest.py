"""
Pytest configuration for DataMirror.

Provides fixtures for:
- Settings isolation (environment overrides + cache reset)
- Database connection management for integration tests
"""

from __future__ import annotations

import os
from typing import Callable, Generator

import psycopg
import pytest

from datamirror.config import Settings, get_settings


@pytest.fixture
def override_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[Callable[..., Settings], None, None]:
    """
    Set environment variables and return freshly parsed settings.

    The settings cache is cleared before and after the test so overrides never
    leak into other tests.
    """

    def _override(**env: str) -> Settings:
        for key, value in env.items():
            monkeypatch.setenv(key, value)
        get_settings.cache_clear()
        return get_settings()

    get_settings.cache_clear()
    yield _override
    get_settings.cache_clear()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """
    Settings fixture with test-specific overrides.

    Can be overridden via environment variables in CI or local testing.
    """
    return Settings(
        db_host=os.getenv("DB_HOST", "localhost"),
        db_port=int(os.getenv("DB_PORT", "5432")),
        db_user=os.getenv("DB_USER", "postgres"),
        db_password=os.getenv("DB_PASSWORD", "postgres"),
        db_name=os.getenv("DB_NAME", "datamirror"),
        log_level="DEBUG",
    )


@pytest.fixture(scope="session")
def test_dsn(test_settings: Settings) -> str:
    """
    Database connection string for tests.
    """
    return test_settings.dsn


@pytest.fixture(scope="session")
def db_connection_available(test_dsn: str) -> bool:
    """
    Check if database is reachable.

    Used to conditionally skip integration tests when DB is not available.
    """
    try:
        with psycopg.connect(test_dsn, connect_timeout=5) as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1;")
                cur.fetchone()
        return True
    except Exception:
        return False


@pytest.fixture(scope="session")
def db_connection(
    test_dsn: str, db_connection_available: bool
) -> Generator[psycopg.Connection, None, None]:
    """
    Provide a session-scoped database connection for integration tests.

    Skips tests if database is not available.
    """
    if not db_connection_available:
        pytest.skip("Database not available for integration tests")

    conn = psycopg.connect(test_dsn)
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="function")
def orders_table(db_connection: psycopg.Connection) -> Generator[str, None, None]:
    """
    Create a temporary ``orders`` table matching ``tests.records.Order``.
    """
    with db_connection.cursor() as cur:
        cur.execute(
            """
            CREATE TEMPORARY TABLE orders (
                order_pkid INTEGER PRIMARY KEY,
                customer_id INTEGER,
                amount DOUBLE PRECISION,
                created TEXT,
                note TEXT
            ) ON COMMIT PRESERVE ROWS;
            """
        )
    db_connection.commit()
    yield "orders"
    with db_connection.cursor() as cur:
        cur.execute("DROP TABLE IF EXISTS orders;")
    db_connection.commit()
