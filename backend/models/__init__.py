from models.connection import DatabaseConnection, DatabaseStatus  # noqa: F401
from models.table import TableMetadata, ColumnMetadata, IndexMetadata, FacetResult  # noqa: F401
from models.generated import GeneratedModel, Field, Relationship, RelationshipKind  # noqa: F401
