"""
In-memory result cache: table_name → TableMetadata, class_name → GeneratedModel.
Holds the latest crawl/generation results for read-back; never consulted to
skip a crawl. Invalidation is explicit.
"""
import threading
from typing import Optional

from models.generated import GeneratedModel
from models.table import TableMetadata


class MetadataCache:
    def __init__(self):
        self._lock = threading.Lock()
        self._tables: dict[str, TableMetadata] = {}
        self._models: dict[str, GeneratedModel] = {}

    # Table metadata
    def save_table(self, table: TableMetadata) -> None:
        with self._lock:
            self._tables[table.table_name] = table

    def get_table(self, table_name: str) -> Optional[TableMetadata]:
        return self._tables.get(table_name)

    def delete_table(self, table_name: str) -> bool:
        with self._lock:
            return self._tables.pop(table_name, None) is not None

    # Generated models
    def save_model(self, model: GeneratedModel) -> None:
        with self._lock:
            self._models[model.class_name] = model

    def get_model(self, class_name: str) -> Optional[GeneratedModel]:
        return self._models.get(class_name)

    def delete_model(self, class_name: str) -> bool:
        with self._lock:
            return self._models.pop(class_name, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._tables.clear()
            self._models.clear()

    def stats(self) -> dict[str, int]:
        return {
            "table_metadata_count": len(self._tables),
            "generated_model_count": len(self._models),
        }
