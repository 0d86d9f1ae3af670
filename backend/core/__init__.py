from core.db_connector import ConnectionProvider  # noqa: F401
from core.schema_crawler import SchemaCrawler, group_index_rows  # noqa: F401
from core.model_generator import ModelGenerator  # noqa: F401
from core.naming import transform_identifier  # noqa: F401
from core.type_mapping import TypeMapping, JAVA_TYPE_MAPPING  # noqa: F401
from core.java_renderer import render_java_source  # noqa: F401
from core.metadata_cache import MetadataCache  # noqa: F401
