"""Domain services for RecordBase.

Services contain logic that doesn't naturally fit within a single entity:
pluralization, schema mapping and record validation.
"""

from recordbase.domain.services.pluralize import is_plural, pluralize, singularize
from recordbase.domain.services.record_validator import RecordValidator
from recordbase.domain.services.schema_mapper import (
    RelationshipDefinition,
    ThingDefinition,
    map_schema_to_collections,
    map_schema_to_relationships,
    map_schema_to_things,
)

__all__ = [
    "RecordValidator",
    "RelationshipDefinition",
    "ThingDefinition",
    "is_plural",
    "map_schema_to_collections",
    "map_schema_to_relationships",
    "map_schema_to_things",
    "pluralize",
    "singularize",
]
