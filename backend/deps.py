"""Dependency injection for FastAPI"""
from functools import lru_cache

from config import settings
from core.db_connector import ConnectionProvider
from core.metadata_cache import MetadataCache
from core.model_generator import ModelGenerator
from core.schema_crawler import SchemaCrawler


@lru_cache
def get_connection_provider() -> ConnectionProvider:
    return ConnectionProvider(settings.sqlalchemy_url)


def get_crawler() -> SchemaCrawler:
    """FastAPI dependency: crawler over the configured database"""
    return SchemaCrawler.from_settings(get_connection_provider(), settings)


@lru_cache
def get_generator() -> ModelGenerator:
    return ModelGenerator(package=settings.MODEL_PACKAGE)


# Global instance
metadata_cache = MetadataCache()


def get_cache() -> MetadataCache:
    return metadata_cache


def shutdown() -> None:
    if get_connection_provider.cache_info().currsize:
        get_connection_provider().dispose()
        get_connection_provider.cache_clear()
