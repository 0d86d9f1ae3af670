"""GET/DELETE /api/cache — read back and invalidate cached crawl/generation results."""
from fastapi import APIRouter, Depends, HTTPException

from core.metadata_cache import MetadataCache
from deps import get_cache

router = APIRouter()


@router.get("/cache/stats")
def cache_stats(cache: MetadataCache = Depends(get_cache)):
    return {"success": True, "data": cache.stats()}


@router.get("/cache/tables/{table_name}")
def cached_table(table_name: str, cache: MetadataCache = Depends(get_cache)):
    table = cache.get_table(table_name)
    if table is None:
        raise HTTPException(404, detail=f"No cached metadata for '{table_name}'.")
    return {"success": True, "data": table}


@router.get("/cache/models/{class_name}")
def cached_model(class_name: str, cache: MetadataCache = Depends(get_cache)):
    model = cache.get_model(class_name)
    if model is None:
        raise HTTPException(404, detail=f"No cached model '{class_name}'.")
    return {"success": True, "data": model}


@router.delete("/cache/tables/{table_name}")
def evict_table(table_name: str, cache: MetadataCache = Depends(get_cache)):
    if not cache.delete_table(table_name):
        raise HTTPException(404, detail=f"No cached metadata for '{table_name}'.")
    return {"success": True, "message": f"Metadata for '{table_name}' evicted."}


@router.delete("/cache/models/{class_name}")
def evict_model(class_name: str, cache: MetadataCache = Depends(get_cache)):
    if not cache.delete_model(class_name):
        raise HTTPException(404, detail=f"No cached model '{class_name}'.")
    return {"success": True, "message": f"Model '{class_name}' evicted."}


@router.delete("/cache")
def clear_cache(cache: MetadataCache = Depends(get_cache)):
    cache.clear()
    return {"success": True, "message": "Cache cleared."}
