#!/usr/bin/env python3
"""
Create a local SQLite schema for Schema Crawler development.
Usage (from the repository root):
    python scripts/seed_demo_db.py
Creates: scripts/demo.db (the default DB_FILE_PATH)
"""
import sqlite3
import random
from datetime import date, datetime, timedelta
from pathlib import Path

DB_PATH = Path(__file__).parent / "demo.db"

DDL = [
    """
    CREATE TABLE IF NOT EXISTS customers (
        id          INTEGER PRIMARY KEY,
        full_name   VARCHAR(120) NOT NULL,
        email       VARCHAR(255) UNIQUE NOT NULL,
        is_active   BOOLEAN DEFAULT 1,
        created_at  TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )""",
    """
    CREATE TABLE IF NOT EXISTS products (
        id          INTEGER PRIMARY KEY,
        sku         CHAR(12) NOT NULL,
        name        VARCHAR(200) NOT NULL,
        price       DECIMAL(10, 2) NOT NULL,
        attributes  JSON,
        thumbnail   BLOB
    )""",
    """
    CREATE TABLE IF NOT EXISTS orders (
        id              BIGINT PRIMARY KEY,
        customer_id     INTEGER NOT NULL,
        order_date      DATE,
        status          VARCHAR(20),
        CONSTRAINT fk_orders_customer FOREIGN KEY (customer_id) REFERENCES customers (id)
    )""",
    """
    CREATE TABLE IF NOT EXISTS order_item (
        id          BIGINT PRIMARY KEY,
        order_id    BIGINT NOT NULL,
        product_id  INTEGER NOT NULL,
        qty         INT NOT NULL,
        unit_price  DECIMAL(10, 2),
        CONSTRAINT fk_order_item_order FOREIGN KEY (order_id) REFERENCES orders (id),
        CONSTRAINT fk_order_item_product FOREIGN KEY (product_id) REFERENCES products (id)
    )""",
    """
    CREATE TABLE IF NOT EXISTS product_tag (
        product_id  INTEGER NOT NULL,
        tag         VARCHAR(40) NOT NULL,
        PRIMARY KEY (product_id, tag),
        CONSTRAINT fk_product_tag_product FOREIGN KEY (product_id) REFERENCES products (id)
    )""",
    "CREATE UNIQUE INDEX IF NOT EXISTS ux_products_sku ON products (sku)",
    "CREATE INDEX IF NOT EXISTS idx_orders_customer_date ON orders (customer_id, order_date)",
    "CREATE INDEX IF NOT EXISTS idx_order_item_product ON order_item (product_id)",
]

STATUSES = ['PENDING', 'SHIPPED', 'DELIVERED', 'CANCELLED']
TAGS = ['new', 'sale', 'eco', 'gift']


def seed():
    conn = sqlite3.connect(DB_PATH)
    cur  = conn.cursor()

    for stmt in DDL:
        cur.execute(stmt)

    for i in range(1, 21):
        cur.execute("INSERT OR IGNORE INTO customers(id, full_name, email, created_at) VALUES (?,?,?,?)",
                    (i, f"Customer {i}", f"user{i}@example.com",
                     datetime.now() - timedelta(days=random.randint(10, 730))))

    for i in range(1, 11):
        cur.execute("INSERT OR IGNORE INTO products(id, sku, name, price, attributes) VALUES (?,?,?,?,?)",
                    (i, f"SKU-{i:08d}", f"Product {i}", round(random.uniform(5, 500), 2), '{"color":"blue"}'))
        cur.execute("INSERT OR IGNORE INTO product_tag(product_id, tag) VALUES (?,?)", (i, random.choice(TAGS)))

    item_id = 1
    for order_id in range(1, 51):
        cur.execute("INSERT OR IGNORE INTO orders(id, customer_id, order_date, status) VALUES (?,?,?,?)",
                    (order_id, random.randint(1, 20),
                     (date.today() - timedelta(days=random.randint(0, 365))).isoformat(),
                     random.choice(STATUSES)))
        for _ in range(random.randint(1, 3)):
            cur.execute("INSERT OR IGNORE INTO order_item(id, order_id, product_id, qty, unit_price) "
                        "VALUES (?,?,?,?,?)",
                        (item_id, order_id, random.randint(1, 10), random.randint(1, 5),
                         round(random.uniform(5, 500), 2)))
            item_id += 1

    conn.commit()
    conn.close()
    print(f"Demo database seeded: {DB_PATH}")
    print("   Tables: customers, products, orders, order_item, product_tag")


if __name__ == "__main__":
    seed()
