"""Shared fixtures for ddl_reorder tests."""

import pytest


# =============================================================================
# DDL samples
# =============================================================================

SHOP_DDL = """\
-- shop schema
SET NAMES utf8mb4;
CREATE TABLE `order_items` (
    id INT PRIMARY KEY,
    order_id INT,
    product_id INT,
    FOREIGN KEY (order_id) REFERENCES `orders`(id),
    FOREIGN KEY (product_id) REFERENCES products(id)
);

CREATE TABLE orders (
    id INT PRIMARY KEY,
    customer_id INT,
    FOREIGN KEY (customer_id) REFERENCES customers(id)
);

CREATE TABLE products (
    id INT PRIMARY KEY,
    name VARCHAR(100)
);

CREATE TABLE customers (
    id INT PRIMARY KEY,
    name VARCHAR(100)
);
"""

CYCLIC_DDL = """\
CREATE TABLE a (
    id INT PRIMARY KEY,
    b_id INT,
    FOREIGN KEY (b_id) REFERENCES b(id)
);
CREATE TABLE b (
    id INT PRIMARY KEY,
    a_id INT,
    FOREIGN KEY (a_id) REFERENCES a(id)
);
"""


@pytest.fixture
def shop_ddl() -> str:
    """Tables declared children-first, with a two-line preamble."""
    return SHOP_DDL


@pytest.fixture
def cyclic_ddl() -> str:
    """Two tables referencing each other."""
    return CYCLIC_DDL


@pytest.fixture
def write_sql(tmp_path):
    """Write DDL text to a file under tmp_path and return its path."""
    def _write(text: str, name: str = "input.sql"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write
