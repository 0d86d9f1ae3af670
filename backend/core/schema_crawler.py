"""
Schema crawler — catalog introspection normalized into TableMetadata.

Each accessor acquires its own connection, runs one reflection query and
releases the connection. Catalog faults never escape: they are logged and the
affected facet degrades to an empty result. The fetch_* variants keep the
failure visible as a FacetResult; get_table_metadata records failed facets in
TableMetadata.unavailable_facets.
"""
import logging
from typing import Callable, Iterable, NamedTuple, Optional, Sequence

from sqlalchemy import inspect, text
from sqlalchemy.engine import Connection

from core.db_connector import ConnectionProvider
from models.table import ColumnMetadata, FacetResult, IndexMetadata, TableMetadata

logger = logging.getLogger(__name__)

DEFAULT_SYSTEM_SCHEMA_MARKERS = ("information_schema", "pg_catalog", "performance_schema", "mysql", "sys")

_KEY_COLUMN_USAGE_SQL = text(
    "SELECT CONSTRAINT_NAME, COLUMN_NAME, REFERENCED_TABLE_NAME, REFERENCED_COLUMN_NAME "
    "FROM information_schema.KEY_COLUMN_USAGE "
    "WHERE TABLE_NAME = :table_name "
    "AND REFERENCED_TABLE_NAME IS NOT NULL "
    "AND TABLE_SCHEMA = COALESCE(:schema, DATABASE()) "
    "ORDER BY CONSTRAINT_NAME, ORDINAL_POSITION"
)


class KeyLookupError(RuntimeError):
    """A key lookup needed to flag columns failed."""


class ForeignKeyRow(NamedTuple):
    constraint_name: Optional[str]
    column_name: Optional[str]
    referenced_table: str
    referenced_column: str


class IndexRow(NamedTuple):
    index_name: Optional[str]
    column_name: Optional[str]
    non_unique: bool


# ── Pure helpers ──────────────────────────────────────────────────────────────

def group_index_rows(rows: Iterable[IndexRow], primary_index_name: str = "PRIMARY") -> list[IndexMetadata]:
    """
    Collapse per-column index rows into one IndexMetadata per index name.
    Rows of the primary index (by reserved name) and unnamed rows are dropped;
    member columns keep catalog key order; indexes without columns are dropped.
    """
    grouped: dict[str, IndexMetadata] = {}
    for row in rows:
        if row.index_name is None or row.index_name == primary_index_name:
            continue
        idx = grouped.get(row.index_name)
        if idx is None:
            idx = IndexMetadata(index_name=row.index_name, is_unique=not row.non_unique, is_primary=False)
            grouped[row.index_name] = idx
        if row.column_name is not None:
            idx.columns.append(row.column_name)
    return [idx for idx in grouped.values() if idx.columns]


def _declared_type(col_type, dialect) -> str:
    try:
        data_type = col_type.compile(dialect=dialect).upper()
    except Exception:
        data_type = type(col_type).__name__.upper()
    # Simplify long type strings
    if "(" in data_type:
        data_type = data_type.split("(")[0].strip()
    return data_type


def _declared_size(col_type) -> Optional[int]:
    for attr in ("length", "precision"):
        value = getattr(col_type, attr, None)
        if isinstance(value, int):
            return value
    return None


def _default_text(default) -> Optional[str]:
    return None if default is None else str(default)


class SchemaCrawler:
    """Read-only catalog crawler. Every public accessor is best-effort."""

    def __init__(
        self,
        provider: ConnectionProvider,
        schema: Optional[str] = None,
        primary_index_name: str = "PRIMARY",
        system_schema_markers: Sequence[str] = DEFAULT_SYSTEM_SCHEMA_MARKERS,
        fk_query_mode: str = "inspector",
    ):
        if fk_query_mode not in ("inspector", "information_schema"):
            raise ValueError(f"Unknown foreign key query mode: {fk_query_mode}")
        # KEY_COLUMN_USAGE.REFERENCED_TABLE_NAME and DATABASE() exist only on MySQL
        if fk_query_mode == "information_schema" and provider.dialect_name != "mysql":
            raise ValueError(
                f"Foreign key query mode information_schema requires MySQL, not {provider.dialect_name}"
            )
        self.provider = provider
        self.schema = schema
        self.primary_index_name = primary_index_name
        self.system_schema_markers = tuple(m.lower() for m in system_schema_markers)
        self.fk_query_mode = fk_query_mode

    @classmethod
    def from_settings(cls, provider: ConnectionProvider, settings) -> "SchemaCrawler":
        return cls(
            provider,
            schema=settings.DB_SCHEMA,
            primary_index_name=settings.PRIMARY_INDEX_NAME,
            system_schema_markers=settings.system_schema_marker_list,
            fk_query_mode=settings.FK_QUERY_MODE,
        )

    def is_system_schema(self, schema_name: Optional[str]) -> bool:
        if not schema_name:
            return False
        lowered = schema_name.lower()
        if "information_schema" in lowered:
            return True
        return lowered in self.system_schema_markers

    # ── Table listing ─────────────────────────────────────────────────────────

    def list_tables(self) -> list[str]:
        """User tables of the configured (or default) schema; [] on any fault."""
        try:
            with self.provider.acquire_connection() as conn:
                insp = inspect(conn)
                schema_name = self.schema or insp.default_schema_name
                if self.is_system_schema(schema_name):
                    logger.warning("Schema %s is a system schema; no user tables listed", schema_name)
                    return []
                tables = insp.get_table_names(schema=self.schema)
            logger.info("Discovered %d tables in schema %s", len(tables), schema_name)
            return tables
        except Exception:
            logger.exception("Error retrieving tables")
            return []

    # ── Facet loaders (raise on catalog faults) ───────────────────────────────

    def _load_primary_keys(self, table_name: str) -> list[str]:
        with self.provider.acquire_connection() as conn:
            pk = inspect(conn).get_pk_constraint(table_name, schema=self.schema) or {}
        return list(pk.get("constrained_columns") or [])

    def _load_foreign_key_rows(self, table_name: str) -> list[ForeignKeyRow]:
        with self.provider.acquire_connection() as conn:
            if self.fk_query_mode == "information_schema":
                return self._query_key_column_usage(conn, table_name)
            rows = []
            for fk in inspect(conn).get_foreign_keys(table_name, schema=self.schema):
                for lc, rc in zip(fk["constrained_columns"], fk["referred_columns"]):
                    rows.append(ForeignKeyRow(fk.get("name"), lc, fk["referred_table"], rc))
            return rows

    def _query_key_column_usage(self, conn: Connection, table_name: str) -> list[ForeignKeyRow]:
        result = conn.execute(_KEY_COLUMN_USAGE_SQL, {"table_name": table_name, "schema": self.schema})
        return [ForeignKeyRow(r[0], r[1], r[2], r[3]) for r in result]

    def _load_foreign_key_constraints(self, table_name: str) -> list[str]:
        names: list[str] = []
        for row in self._load_foreign_key_rows(table_name):
            if row.constraint_name is not None and row.constraint_name not in names:
                names.append(row.constraint_name)
        return names

    def _load_foreign_key_map(self, table_name: str) -> dict[str, tuple[str, str]]:
        return {
            row.column_name: (row.referenced_table, row.referenced_column)
            for row in self._load_foreign_key_rows(table_name)
            if row.column_name is not None
        }

    def _load_indexes(self, table_name: str) -> list[IndexMetadata]:
        with self.provider.acquire_connection() as conn:
            raw_indexes = inspect(conn).get_indexes(table_name, schema=self.schema)
        rows: list[IndexRow] = []
        for idx in raw_indexes:
            column_names = idx.get("column_names") or [None]
            for col in column_names:
                rows.append(IndexRow(idx.get("name"), col, not idx.get("unique", False)))
        return group_index_rows(rows, self.primary_index_name)

    def _load_columns(self, table_name: str) -> list[ColumnMetadata]:
        # Key lookups are separate catalog round trips.
        pk_result = self.fetch_primary_keys(table_name)
        if not pk_result.ok:
            raise KeyLookupError(f"primary key lookup failed: {pk_result.error}")
        fk_result = self.fetch_foreign_key_map(table_name)
        if not fk_result.ok:
            raise KeyLookupError(f"foreign key lookup failed: {fk_result.error}")
        pk_cols = set(pk_result.data)
        fk_map = fk_result.data

        with self.provider.acquire_connection() as conn:
            insp = inspect(conn)
            raw_cols = insp.get_columns(table_name, schema=self.schema)
            columns = []
            for col in raw_cols:
                ref = fk_map.get(col["name"])
                columns.append(ColumnMetadata(
                    name=col["name"],
                    data_type=_declared_type(col["type"], conn.dialect),
                    column_size=_declared_size(col["type"]),
                    is_nullable=col.get("nullable", True),
                    column_default=_default_text(col.get("default")),
                    remarks=col.get("comment"),
                    is_primary_key=col["name"] in pk_cols,
                    is_foreign_key=ref is not None,
                    foreign_key_table=ref[0] if ref else None,
                    foreign_key_column=ref[1] if ref else None,
                ))

            # Second pass: identity / auto-increment, matched by name
            auto_cols = {
                c["name"] for c in insp.get_columns(table_name, schema=self.schema)
                if self._is_auto_generated(c, pk_cols, conn.dialect.name)
            }
        for column in columns:
            column.is_auto_increment = column.name in auto_cols
        return columns

    @staticmethod
    def _is_auto_generated(col: dict, pk_cols: set[str], dialect_name: str) -> bool:
        if col.get("autoincrement") is True or col.get("identity"):
            return True
        # SQLite: a lone INTEGER PRIMARY KEY aliases the rowid
        if dialect_name == "sqlite" and pk_cols == {col["name"]}:
            return _declared_type(col["type"], None) == "INTEGER"
        return False

    # ── Facet fetches (never raise) ───────────────────────────────────────────

    def _fetch(self, facet: str, table_name: str, loader: Callable, empty) -> FacetResult:
        try:
            return FacetResult.success(loader(table_name))
        except Exception as e:
            logger.warning("Error retrieving %s for table %s: %s", facet, table_name, e)
            return FacetResult.unavailable(empty, e)

    def fetch_columns(self, table_name: str) -> FacetResult:
        return self._fetch("columns", table_name, self._load_columns, [])

    def fetch_primary_keys(self, table_name: str) -> FacetResult:
        return self._fetch("primary_keys", table_name, self._load_primary_keys, [])

    def fetch_foreign_key_constraints(self, table_name: str) -> FacetResult:
        return self._fetch("foreign_keys", table_name, self._load_foreign_key_constraints, [])

    def fetch_foreign_key_map(self, table_name: str) -> FacetResult:
        return self._fetch("foreign_key_map", table_name, self._load_foreign_key_map, {})

    def fetch_indexes(self, table_name: str) -> FacetResult:
        return self._fetch("indexes", table_name, self._load_indexes, [])

    # ── Public accessors ──────────────────────────────────────────────────────

    def get_columns(self, table_name: str) -> list[ColumnMetadata]:
        return self.fetch_columns(table_name).data

    def get_primary_keys(self, table_name: str) -> list[str]:
        return self.fetch_primary_keys(table_name).data

    def get_foreign_key_constraints(self, table_name: str) -> list[str]:
        return self.fetch_foreign_key_constraints(table_name).data

    def get_foreign_key_map(self, table_name: str) -> dict[str, tuple[str, str]]:
        return self.fetch_foreign_key_map(table_name).data

    def get_indexes(self, table_name: str) -> list[IndexMetadata]:
        return self.fetch_indexes(table_name).data

    def get_table_metadata(self, table_name: str) -> TableMetadata:
        """Compose all four facets; a failed facet is left empty and recorded."""
        facets = {
            "columns": self.fetch_columns(table_name),
            "primary_keys": self.fetch_primary_keys(table_name),
            "foreign_keys": self.fetch_foreign_key_constraints(table_name),
            "indexes": self.fetch_indexes(table_name),
        }
        return TableMetadata(
            table_name=table_name,
            columns=facets["columns"].data,
            primary_keys=facets["primary_keys"].data,
            foreign_keys=facets["foreign_keys"].data,
            indexes=facets["indexes"].data,
            unavailable_facets={name: r.error for name, r in facets.items() if not r.ok},
        )

    def get_all_tables(self) -> list[TableMetadata]:
        return [self.get_table_metadata(name) for name in self.list_tables()]
