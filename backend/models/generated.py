"""Pydantic schemas for generated model classes."""
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field as PydanticField
from pydantic.alias_generators import to_camel

_FROZEN_WIRE_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class RelationshipKind(str, Enum):
    MANY_TO_ONE = "ManyToOne"


class Field(BaseModel):
    model_config = _FROZEN_WIRE_CONFIG

    name: str
    type: str            # fully qualified where the target type lives in a package
    nullable: bool = True


class Relationship(BaseModel):
    model_config = _FROZEN_WIRE_CONFIG

    related_class: str
    cardinality: RelationshipKind = RelationshipKind.MANY_TO_ONE
    column: Optional[str] = None              # owning FK column
    referenced_column: Optional[str] = None


class GeneratedModel(BaseModel):
    model_config = _FROZEN_WIRE_CONFIG

    class_name: str
    table_name: str
    fields: list[Field] = PydanticField(default_factory=list)
    field_map: dict[str, str] = PydanticField(default_factory=dict)
    relationships: list[Relationship] = PydanticField(default_factory=list)
    primary_keys: list[str] = PydanticField(default_factory=list)
    code: str = ""
