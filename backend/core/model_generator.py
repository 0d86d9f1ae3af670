"""
Model generator — pure transformation from TableMetadata to GeneratedModel.
Resolves field types, infers many-to-one relationships from FK columns and
renders Java source. No database access.
"""
import logging
from typing import Optional

from core.java_renderer import render_java_source
from core.naming import transform_identifier
from core.type_mapping import JAVA_TYPE_MAPPING, TypeMapping
from models.generated import Field, GeneratedModel, Relationship, RelationshipKind
from models.table import ColumnMetadata, TableMetadata

logger = logging.getLogger(__name__)


class ModelGenerator:
    def __init__(self, type_mapping: TypeMapping = JAVA_TYPE_MAPPING, package: str = "com.example.models"):
        self.type_mapping = type_mapping
        self.package = package

    def get_target_type(self, source_type: Optional[str]) -> str:
        return self.type_mapping.resolve(source_type)

    @staticmethod
    def transform_identifier(value: Optional[str], capitalize_first: bool) -> Optional[str]:
        return transform_identifier(value, capitalize_first)

    def generate_fields(self, columns: Optional[list[ColumnMetadata]]) -> list[Field]:
        """Field names are unique: a colliding identifier gets a numeric suffix (userId, userId2)."""
        fields = []
        taken: set[str] = set()
        for col in columns or []:
            base = name = transform_identifier(col.name, False)
            suffix = 1
            while name in taken:
                suffix += 1
                name = f"{base}{suffix}"
            if name != base:
                logger.warning("Column %s maps to field %s which is already taken; using %s", col.name, base, name)
            taken.add(name)
            fields.append(Field(
                name=name,
                type=self.get_target_type(col.data_type),
                nullable=col.is_nullable if col.is_nullable is not None else True,
            ))
        return fields

    def generate_relationships(self, table: TableMetadata) -> list[Relationship]:
        """One ManyToOne per FK column. Reverse sides are not inferred."""
        return [
            Relationship(
                related_class=transform_identifier(col.foreign_key_table, True),
                cardinality=RelationshipKind.MANY_TO_ONE,
                column=col.name,
                referenced_column=col.foreign_key_column,
            )
            for col in table.columns
            if col.is_foreign_key and col.foreign_key_table
        ]

    def render_source(self, model: GeneratedModel) -> str:
        return render_java_source(model, self.package)

    def generate_model(self, table: TableMetadata) -> GeneratedModel:
        fields = self.generate_fields(table.columns)
        model = GeneratedModel(
            class_name=transform_identifier(table.table_name, True),
            table_name=table.table_name,
            fields=fields,
            field_map={f.name: f.type for f in fields},
            relationships=self.generate_relationships(table),
            primary_keys=list(table.primary_keys),
        )
        logger.debug("Generated model %s for table %s (%d fields, %d relationships)",
                     model.class_name, table.table_name, len(fields), len(model.relationships))
        return model.model_copy(update={"code": self.render_source(model)})

    def generate_models(self, tables: list[TableMetadata]) -> list[GeneratedModel]:
        return [self.generate_model(t) for t in tables]
