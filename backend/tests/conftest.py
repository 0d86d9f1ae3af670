import os
import sys

# Add the parent directory (backend) to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest
import sqlite3
import tempfile
from fastapi.testclient import TestClient

from core.db_connector import ConnectionProvider
from core.metadata_cache import MetadataCache
from core.schema_crawler import SchemaCrawler
from deps import get_cache, get_connection_provider, get_crawler
from main import app

SHOP_DDL = [
    """
    CREATE TABLE customers (
        id          INTEGER PRIMARY KEY,
        name        VARCHAR(100) NOT NULL,
        email       VARCHAR(255) UNIQUE,
        created_at  TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )""",
    """
    CREATE TABLE orders (
        id          BIGINT PRIMARY KEY,
        customer_id INTEGER,
        total       DECIMAL(10, 2),
        CONSTRAINT fk_orders_customer FOREIGN KEY (customer_id) REFERENCES customers (id)
    )""",
    """
    CREATE TABLE order_item (
        id          BIGINT PRIMARY KEY,
        order_id    BIGINT NOT NULL,
        qty         INT,
        CONSTRAINT fk_order_item_order FOREIGN KEY (order_id) REFERENCES orders (id)
    )""",
    "CREATE INDEX idx_orders_customer_total ON orders (customer_id, total)",
    "CREATE UNIQUE INDEX ux_customers_name_email ON customers (name, email)",
]


@pytest.fixture
def temp_sqlite_db():
    fd, path = tempfile.mkstemp(suffix=".db")
    try:
        conn = sqlite3.connect(path)
        cur = conn.cursor()
        for stmt in SHOP_DDL:
            cur.execute(stmt)
        conn.commit()
        conn.close()
        yield path
    finally:
        os.close(fd)
        os.remove(path)


@pytest.fixture
def provider(temp_sqlite_db):
    p = ConnectionProvider(f"sqlite:///{temp_sqlite_db}")
    yield p
    p.dispose()


@pytest.fixture
def crawler(provider):
    return SchemaCrawler(provider)


@pytest.fixture
def cache():
    return MetadataCache()


@pytest.fixture
def client(provider, crawler, cache):
    app.dependency_overrides[get_connection_provider] = lambda: provider
    app.dependency_overrides[get_crawler] = lambda: crawler
    app.dependency_overrides[get_cache] = lambda: cache
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
