"""Pydantic schemas for crawled table, column and index metadata."""
from typing import Generic, Optional, TypeVar
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")

# Wire format is camelCase (columnName, dataType, isNullable, ...)
_WIRE_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ColumnMetadata(BaseModel):
    model_config = _WIRE_CONFIG

    name: str
    data_type: str
    column_size: Optional[int] = None
    is_nullable: Optional[bool] = True
    column_default: Optional[str] = None
    remarks: Optional[str] = None
    is_primary_key: bool = False
    is_foreign_key: bool = False
    foreign_key_table: Optional[str] = None
    foreign_key_column: Optional[str] = None
    is_auto_increment: bool = False


class IndexMetadata(BaseModel):
    model_config = _WIRE_CONFIG

    index_name: str
    columns: list[str] = Field(default_factory=list)   # index key order
    is_unique: bool = False
    is_primary: bool = False


class TableMetadata(BaseModel):
    model_config = _WIRE_CONFIG

    table_name: str
    columns: list[ColumnMetadata] = Field(default_factory=list)
    primary_keys: list[str] = Field(default_factory=list)
    foreign_keys: list[str] = Field(default_factory=list)   # constraint names only
    indexes: list[IndexMetadata] = Field(default_factory=list)
    unavailable_facets: dict[str, str] = Field(default_factory=dict)   # facet → error

    @property
    def is_complete(self) -> bool:
        return not self.unavailable_facets


class FacetResult(BaseModel, Generic[T]):
    """Outcome of fetching one facet: the data, or the reason it is unavailable."""
    data: T
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, data: T) -> "FacetResult[T]":
        return cls(data=data)

    @classmethod
    def unavailable(cls, empty: T, cause: BaseException) -> "FacetResult[T]":
        return cls(data=empty, error=f"{type(cause).__name__}: {cause}")
