import pytest
from unittest.mock import MagicMock, patch
from sqlalchemy.exc import OperationalError

from core.schema_crawler import IndexRow, SchemaCrawler, group_index_rows


def _unreachable_provider():
    provider = MagicMock()
    provider.acquire_connection.side_effect = OperationalError("SELECT 1", {}, Exception("connection refused"))
    return provider


def test_list_tables(crawler):
    assert set(crawler.list_tables()) == {"customers", "orders", "order_item"}


def test_list_tables_skips_system_schema(provider):
    crawler = SchemaCrawler(provider, schema="INFORMATION_SCHEMA")
    assert crawler.list_tables() == []


def test_list_tables_returns_empty_when_unreachable():
    crawler = SchemaCrawler(_unreachable_provider())
    assert crawler.list_tables() == []


def test_get_columns_order_and_types(crawler):
    columns = crawler.get_columns("customers")
    assert [c.name for c in columns] == ["id", "name", "email", "created_at"]
    assert [c.data_type for c in columns] == ["INTEGER", "VARCHAR", "VARCHAR", "TIMESTAMP"]
    assert columns[1].column_size == 100
    assert columns[1].is_nullable is False
    assert columns[2].is_nullable is True
    assert columns[3].column_default == "CURRENT_TIMESTAMP"


def test_get_columns_key_flags(crawler):
    columns = {c.name: c for c in crawler.get_columns("order_item")}
    assert columns["id"].is_primary_key
    assert not columns["id"].is_foreign_key
    assert columns["order_id"].is_foreign_key
    assert columns["order_id"].foreign_key_table == "orders"
    assert columns["order_id"].foreign_key_column == "id"
    assert not columns["qty"].is_primary_key
    assert not columns["qty"].is_foreign_key
    assert columns["qty"].foreign_key_table is None


def test_auto_increment_resolution(crawler):
    customers = {c.name: c for c in crawler.get_columns("customers")}
    items = {c.name: c for c in crawler.get_columns("order_item")}
    assert customers["id"].is_auto_increment is True
    assert customers["name"].is_auto_increment is False
    assert items["id"].is_auto_increment is False


def test_primary_keys(crawler):
    assert crawler.get_primary_keys("orders") == ["id"]


def test_foreign_key_constraints_and_map(crawler):
    assert crawler.get_foreign_key_constraints("orders") == ["fk_orders_customer"]
    assert crawler.get_foreign_key_map("orders") == {"customer_id": ("customers", "id")}
    assert crawler.get_foreign_key_constraints("customers") == []
    assert crawler.get_foreign_key_map("customers") == {}


def test_indexes(crawler):
    orders_idx = crawler.get_indexes("orders")
    assert len(orders_idx) == 1
    assert orders_idx[0].index_name == "idx_orders_customer_total"
    assert orders_idx[0].columns == ["customer_id", "total"]
    assert orders_idx[0].is_unique is False
    assert orders_idx[0].is_primary is False

    customers_idx = {i.index_name: i for i in crawler.get_indexes("customers")}
    assert customers_idx["ux_customers_name_email"].columns == ["name", "email"]
    assert customers_idx["ux_customers_name_email"].is_unique is True


def test_table_metadata(crawler):
    table = crawler.get_table_metadata("order_item")
    assert table.table_name == "order_item"
    assert len(table.columns) == 3
    assert table.primary_keys == ["id"]
    assert table.foreign_keys == ["fk_order_item_order"]
    assert table.indexes == []
    assert table.unavailable_facets == {}
    assert table.is_complete
    column_names = {c.name for c in table.columns}
    assert set(table.primary_keys) <= column_names


def test_all_tables_in_listing_order(crawler):
    tables = crawler.get_all_tables()
    assert [t.table_name for t in tables] == crawler.list_tables()
    for t in tables:
        assert t.columns


def test_one_failing_facet_leaves_the_rest(crawler):
    with patch.object(crawler, "_load_indexes", side_effect=RuntimeError("index listing broke")):
        table = crawler.get_table_metadata("orders")
    assert table.indexes == []
    assert list(table.unavailable_facets) == ["indexes"]
    assert "index listing broke" in table.unavailable_facets["indexes"]
    assert len(table.columns) == 3
    assert table.primary_keys == ["id"]


def test_failed_primary_key_lookup_fails_columns(crawler):
    # Only the lookup made while building the columns fails.
    with patch.object(crawler, "_load_primary_keys", side_effect=[RuntimeError("pk lookup broke"), ["id"]]):
        table = crawler.get_table_metadata("order_item")
    assert table.primary_keys == ["id"]
    assert table.columns == []
    assert list(table.unavailable_facets) == ["columns"]
    assert "primary key lookup failed" in table.unavailable_facets["columns"]
    assert "pk lookup broke" in table.unavailable_facets["columns"]


def test_failed_foreign_key_lookup_fails_columns(crawler):
    with patch.object(crawler, "_load_foreign_key_map", side_effect=RuntimeError("fk lookup broke")):
        result = crawler.fetch_columns("order_item")
        table = crawler.get_table_metadata("order_item")
    assert not result.ok
    assert result.data == []
    assert "KeyLookupError" in result.error
    assert "foreign key lookup failed" in result.error
    assert table.foreign_keys == ["fk_order_item_order"]
    assert list(table.unavailable_facets) == ["columns"]
    assert crawler.get_columns("order_item")[1].is_foreign_key


def test_unreachable_catalog_yields_empty_metadata():
    crawler = SchemaCrawler(_unreachable_provider())
    table = crawler.get_table_metadata("orders")
    assert table.table_name == "orders"
    assert table.columns == []
    assert table.primary_keys == []
    assert table.foreign_keys == []
    assert table.indexes == []
    assert set(table.unavailable_facets) == {"columns", "primary_keys", "foreign_keys", "indexes"}


def test_fetch_reports_unavailable():
    crawler = SchemaCrawler(_unreachable_provider())
    result = crawler.fetch_primary_keys("orders")
    assert not result.ok
    assert result.data == []
    assert "OperationalError" in result.error


def test_unknown_table_is_empty_not_raised(crawler):
    table = crawler.get_table_metadata("no_such_table")
    assert table.table_name == "no_such_table"
    assert table.columns == []


def test_information_schema_foreign_key_mode():
    conn = MagicMock()
    conn.execute.return_value = [
        ("fk_line_order", "order_id", "orders", "id"),
        ("fk_line_product", "product_id", "products", "id"),
        ("fk_line_product", "product_variant", "products", "variant"),
    ]
    provider = MagicMock()
    provider.dialect_name = "mysql"
    provider.acquire_connection.return_value.__enter__.return_value = conn
    crawler = SchemaCrawler(provider, fk_query_mode="information_schema")

    assert crawler.get_foreign_key_constraints("order_line") == ["fk_line_order", "fk_line_product"]
    assert crawler.get_foreign_key_map("order_line") == {
        "order_id": ("orders", "id"),
        "product_id": ("products", "id"),
        "product_variant": ("products", "variant"),
    }
    params = conn.execute.call_args[0][1]
    assert params == {"table_name": "order_line", "schema": None}


def test_unknown_foreign_key_mode_rejected(provider):
    with pytest.raises(ValueError):
        SchemaCrawler(provider, fk_query_mode="guess")


def test_information_schema_mode_rejected_outside_mysql(provider):
    assert provider.dialect_name == "sqlite"
    with pytest.raises(ValueError, match="requires MySQL"):
        SchemaCrawler(provider, fk_query_mode="information_schema")


def test_group_index_rows_collapses_by_name():
    rows = [
        IndexRow("idx_name", "col_a", False),
        IndexRow("idx_name", "col_b", False),
        IndexRow("PRIMARY", "id", False),
    ]
    indexes = group_index_rows(rows)
    assert len(indexes) == 1
    assert indexes[0].index_name == "idx_name"
    assert indexes[0].columns == ["col_a", "col_b"]
    assert indexes[0].is_unique is True


def test_group_index_rows_drops_unnamed_and_columnless():
    rows = [
        IndexRow(None, "col_a", True),
        IndexRow("idx_expr", None, True),
        IndexRow("idx_b", "col_b", True),
        IndexRow("pk_custom", "id", False),
    ]
    indexes = group_index_rows(rows, primary_index_name="pk_custom")
    assert [i.index_name for i in indexes] == ["idx_b"]
    assert indexes[0].is_unique is False
