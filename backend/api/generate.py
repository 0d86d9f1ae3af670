"""GET /api/models/* — generated model classes, recomputed from the live catalog."""
import logging
import time
from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from api.metadata import require_table
from core.metadata_cache import MetadataCache
from core.model_generator import ModelGenerator
from core.schema_crawler import SchemaCrawler
from deps import get_cache, get_crawler, get_generator
from models.generated import GeneratedModel

router = APIRouter()
logger = logging.getLogger(__name__)


def _generate_one(table_name: str, crawler: SchemaCrawler, generator: ModelGenerator,
                  cache: MetadataCache) -> GeneratedModel:
    require_table(crawler, table_name)
    table = crawler.get_table_metadata(table_name)
    model = generator.generate_model(table)
    cache.save_table(table)
    cache.save_model(model)
    return model


def _generate_all(crawler: SchemaCrawler, generator: ModelGenerator, cache: MetadataCache) -> list[GeneratedModel]:
    t0 = time.time()
    tables = crawler.get_all_tables()
    models = generator.generate_models(tables)
    for table, model in zip(tables, models):
        cache.save_table(table)
        cache.save_model(model)
    logger.info("Generated %d models in %.2fs", len(models), time.time() - t0)
    return models


@router.get("/models")
def generate_all_models(
    crawler: SchemaCrawler = Depends(get_crawler),
    generator: ModelGenerator = Depends(get_generator),
    cache: MetadataCache = Depends(get_cache),
):
    models = _generate_all(crawler, generator, cache)
    return {"success": True, "data": models, "count": len(models)}


@router.get("/models/all/code")
def get_all_model_code(
    crawler: SchemaCrawler = Depends(get_crawler),
    generator: ModelGenerator = Depends(get_generator),
    cache: MetadataCache = Depends(get_cache),
):
    codes = {m.class_name: m.code for m in _generate_all(crawler, generator, cache)}
    return {"success": True, "data": codes, "count": len(codes)}


@router.get("/models/{table_name}")
def generate_model(
    table_name: str,
    crawler: SchemaCrawler = Depends(get_crawler),
    generator: ModelGenerator = Depends(get_generator),
    cache: MetadataCache = Depends(get_cache),
):
    model = _generate_one(table_name, crawler, generator, cache)
    return {"success": True, "data": model}


@router.get("/models/{table_name}/code")
def get_model_code(
    table_name: str,
    raw: bool = False,
    crawler: SchemaCrawler = Depends(get_crawler),
    generator: ModelGenerator = Depends(get_generator),
    cache: MetadataCache = Depends(get_cache),
):
    model = _generate_one(table_name, crawler, generator, cache)
    if raw:
        return PlainTextResponse(content=model.code, media_type="text/x-java-source")
    return {"success": True, "className": model.class_name, "tableName": table_name, "code": model.code}


@router.get("/models/{table_name}/relationships")
def get_model_relationships(
    table_name: str,
    crawler: SchemaCrawler = Depends(get_crawler),
    generator: ModelGenerator = Depends(get_generator),
    cache: MetadataCache = Depends(get_cache),
):
    model = _generate_one(table_name, crawler, generator, cache)
    return {
        "success": True,
        "tableName": table_name,
        "relationships": model.relationships,
        "count": len(model.relationships),
    }


@router.get("/models/{table_name}/fields")
def get_model_fields(
    table_name: str,
    crawler: SchemaCrawler = Depends(get_crawler),
    generator: ModelGenerator = Depends(get_generator),
    cache: MetadataCache = Depends(get_cache),
):
    model = _generate_one(table_name, crawler, generator, cache)
    return {
        "success": True,
        "tableName": table_name,
        "fields": model.fields,
        "fieldMap": model.field_map,
        "count": len(model.fields),
    }
