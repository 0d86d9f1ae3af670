"""
Type mapping — SQL declared type names to target-language types.

A TypeMapping is immutable and built explicitly; the generator receives one at
construction time, so alternate targets (or test doubles) are just another
instance.
"""
from types import MappingProxyType
from typing import Mapping, Optional


def _normalize(type_name: str) -> str:
    return " ".join(type_name.strip().upper().split())


class TypeMapping:
    """Case-insensitive source-type → target-type lookup with a fallback."""

    def __init__(self, entries: Mapping[str, str], fallback: str):
        self._entries = MappingProxyType({_normalize(k): v for k, v in entries.items()})
        self.fallback = fallback

    @property
    def entries(self) -> Mapping[str, str]:
        return self._entries

    def resolve(self, source_type: Optional[str]) -> str:
        """
        Resolve a declared type name. Tries the full name, then the name with a
        (size) suffix removed, then its first word (INT UNSIGNED → INT).
        Unknown or missing names resolve to the fallback.
        """
        if not source_type:
            return self.fallback
        name = _normalize(source_type)
        candidates = [name]
        if "(" in name:
            name = _normalize(name.split("(")[0])
            candidates.append(name)
        if " " in name:
            candidates.append(name.split(" ")[0])
        for candidate in candidates:
            if candidate in self._entries:
                return self._entries[candidate]
        return self.fallback

    def with_overrides(self, overrides: Mapping[str, str], fallback: Optional[str] = None) -> "TypeMapping":
        merged = dict(self._entries)
        merged.update({_normalize(k): v for k, v in overrides.items()})
        return TypeMapping(merged, fallback or self.fallback)

    def __contains__(self, source_type: str) -> bool:
        return _normalize(source_type) in self._entries


# ── Java (POJO) target ───────────────────────────────────────────────────────
_JAVA_TYPES = {
    # integers
    "BIGINT": "Long",
    "INT": "Integer",
    "INTEGER": "Integer",
    "MEDIUMINT": "Integer",
    "SMALLINT": "Short",
    "TINYINT": "Byte",
    # floating point / fixed point
    "FLOAT": "Float",
    "REAL": "Float",
    "DOUBLE": "Double",
    "DOUBLE PRECISION": "Double",
    "DECIMAL": "java.math.BigDecimal",
    "NUMERIC": "java.math.BigDecimal",
    # text
    "VARCHAR": "String",
    "NVARCHAR": "String",
    "CHAR": "String",
    "NCHAR": "String",
    "TEXT": "String",
    "TINYTEXT": "String",
    "MEDIUMTEXT": "String",
    "LONGTEXT": "String",
    "CLOB": "String",
    # date / time
    "DATE": "java.time.LocalDate",
    "DATETIME": "java.time.LocalDateTime",
    "TIMESTAMP": "java.time.LocalDateTime",
    "TIME": "java.time.LocalTime",
    # boolean
    "BOOLEAN": "Boolean",
    "BOOL": "Boolean",
    "BIT": "Boolean",
    # binary
    "BLOB": "byte[]",
    "TINYBLOB": "byte[]",
    "MEDIUMBLOB": "byte[]",
    "LONGBLOB": "byte[]",
    "BINARY": "byte[]",
    "VARBINARY": "byte[]",
    "BYTEA": "byte[]",
    # structured text
    "JSON": "String",
    "JSONB": "String",
}

JAVA_TYPE_MAPPING = TypeMapping(_JAVA_TYPES, fallback="String")
