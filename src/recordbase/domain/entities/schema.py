"""Schema definitions for resource stores.

A schema names a set of resources (collections). Each resource declares
its fields, their types and constraints, and optionally relationships to
other resources. Schemas are parsed once and are immutable afterwards.
"""

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class FieldType(str, Enum):
    """Supported field types for resource schemas."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"


class FieldDefinition(BaseModel):
    """Definition of a single field in a resource."""

    model_config = ConfigDict(frozen=True)

    type: FieldType = Field(..., description="Field type: string, number, boolean, date")
    required: bool = Field(default=False, description="Whether the field must be supplied on create")
    enum: tuple[str, ...] | None = Field(
        default=None,
        description="Ordered set of allowed values (string fields only)",
    )

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, v: Any) -> Any:
        """Normalize field type to lowercase."""
        if isinstance(v, str):
            return v.lower()
        return v

    @model_validator(mode="after")
    def validate_enum(self) -> "FieldDefinition":
        """Enums are only meaningful on string fields."""
        if self.enum is not None:
            if self.type is not FieldType.STRING:
                raise ValueError(
                    f"enum is only supported on string fields, not '{self.type.value}'"
                )
            if not self.enum:
                raise ValueError("enum must list at least one value")
        return self


class RelationshipConfig(BaseModel):
    """Relationship from one resource to another."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    resource: str = Field(..., description="Target resource (collection) name")
    type: Literal["belongsTo", "hasMany"]
    foreign_key: str | None = Field(default=None, alias="foreignKey")
    cascade: Literal["delete", "nullify", "restrict"] | None = None


class ResourceDefinition(BaseModel):
    """Definition of one resource: its fields and relationships."""

    model_config = ConfigDict(frozen=True)

    fields: dict[str, FieldDefinition] = Field(default_factory=dict)
    relationships: dict[str, RelationshipConfig] = Field(default_factory=dict)

    @field_validator("fields", mode="before")
    @classmethod
    def expand_shorthand_fields(cls, v: Any) -> Any:
        """Allow ``{"email": "string"}`` as shorthand for ``{"email": {"type": "string"}}``."""
        if isinstance(v, dict):
            return {
                name: {"type": definition} if isinstance(definition, str) else definition
                for name, definition in v.items()
            }
        return v

    @field_validator("relationships", mode="before")
    @classmethod
    def default_relationships(cls, v: Any) -> Any:
        return {} if v is None else v

    @property
    def required_fields(self) -> list[str]:
        """Names of the fields marked required, in declaration order."""
        return [name for name, field in self.fields.items() if field.required]


class SchemaDefinition(BaseModel):
    """Complete schema for one store instance."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    namespace: str | None = None
    resources: dict[str, ResourceDefinition] = Field(default_factory=dict)

    @model_validator(mode="after")
    def validate_relationship_targets(self) -> "SchemaDefinition":
        """Every relationship must point at a declared resource."""
        for resource_name, resource in self.resources.items():
            for rel_name, rel in resource.relationships.items():
                if rel.resource not in self.resources:
                    raise ValueError(
                        f"Relationship '{resource_name}.{rel_name}' targets unknown "
                        f"resource '{rel.resource}'"
                    )
        return self

    @classmethod
    def coerce(cls, schema: "SchemaDefinition | dict[str, Any]") -> "SchemaDefinition":
        """Return ``schema`` as a SchemaDefinition, parsing mappings."""
        if isinstance(schema, cls):
            return schema
        return cls.model_validate(schema)

    @property
    def resource_names(self) -> list[str]:
        """Resource names in declaration order."""
        return list(self.resources)
