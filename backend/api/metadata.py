"""GET /api/metadata/* — crawled schema metadata per table."""
import logging
from fastapi import APIRouter, Depends, HTTPException

from core.metadata_cache import MetadataCache
from core.schema_crawler import SchemaCrawler
from deps import get_cache, get_crawler

router = APIRouter()
logger = logging.getLogger(__name__)


def require_table(crawler: SchemaCrawler, table_name: str) -> None:
    if table_name not in crawler.list_tables():
        raise HTTPException(404, detail=f"Table '{table_name}' not found")


@router.get("/metadata/tables")
def get_tables(crawler: SchemaCrawler = Depends(get_crawler)):
    tables = crawler.list_tables()
    return {"success": True, "data": tables, "count": len(tables)}


@router.get("/metadata/table/{table_name}")
def get_table_metadata(
    table_name: str,
    crawler: SchemaCrawler = Depends(get_crawler),
    cache: MetadataCache = Depends(get_cache),
):
    require_table(crawler, table_name)
    table = crawler.get_table_metadata(table_name)
    if table.unavailable_facets:
        logger.warning("Partial metadata for %s: %s", table_name, ", ".join(table.unavailable_facets))
    cache.save_table(table)
    return {"success": True, "data": table}


@router.get("/metadata/columns/{table_name}")
def get_columns(table_name: str, crawler: SchemaCrawler = Depends(get_crawler)):
    columns = crawler.get_columns(table_name)
    return {"success": True, "data": columns, "count": len(columns)}


@router.get("/metadata/primary-keys/{table_name}")
def get_primary_keys(table_name: str, crawler: SchemaCrawler = Depends(get_crawler)):
    primary_keys = crawler.get_primary_keys(table_name)
    return {"success": True, "data": primary_keys, "count": len(primary_keys)}


@router.get("/metadata/foreign-keys/{table_name}")
def get_foreign_keys(table_name: str, crawler: SchemaCrawler = Depends(get_crawler)):
    foreign_keys = crawler.get_foreign_key_constraints(table_name)
    return {"success": True, "data": foreign_keys, "count": len(foreign_keys)}


@router.get("/metadata/indexes/{table_name}")
def get_indexes(table_name: str, crawler: SchemaCrawler = Depends(get_crawler)):
    indexes = crawler.get_indexes(table_name)
    return {"success": True, "data": indexes, "count": len(indexes)}


@router.get("/metadata/all")
def get_all_metadata(
    crawler: SchemaCrawler = Depends(get_crawler),
    cache: MetadataCache = Depends(get_cache),
):
    tables = crawler.get_all_tables()
    for t in tables:
        cache.save_table(t)
    return {"success": True, "data": tables, "count": len(tables)}
