"""Domain entities for RecordBase.

Entities describe schemas and records. They have no dependencies on the
store or migration machinery.
"""

from recordbase.domain.entities.record import (
    CREATED_AT_FIELD,
    ID_FIELD,
    SYSTEM_FIELDS,
    UPDATED_AT_FIELD,
    Page,
    Record,
)
from recordbase.domain.entities.schema import (
    FieldDefinition,
    FieldType,
    RelationshipConfig,
    ResourceDefinition,
    SchemaDefinition,
)

__all__ = [
    "CREATED_AT_FIELD",
    "FieldDefinition",
    "FieldType",
    "ID_FIELD",
    "Page",
    "Record",
    "RelationshipConfig",
    "ResourceDefinition",
    "SYSTEM_FIELDS",
    "SchemaDefinition",
    "UPDATED_AT_FIELD",
]
