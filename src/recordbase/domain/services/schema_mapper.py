"""Schema mapping service.

Maps a schema to the metadata other tooling needs: collection names,
per-resource type descriptors ("things") and a flat list of relationship
edges. All functions are pure.
"""

import re
from dataclasses import dataclass
from typing import Any, Literal

from recordbase.domain.entities.schema import SchemaDefinition
from recordbase.domain.services.pluralize import singularize

WORD_SEPARATOR = re.compile(r"[-_\s]+")


@dataclass(frozen=True)
class ThingDefinition:
    """Type descriptor for one resource.

    Attributes:
        namespace: Namespace (domain) the type belongs to.
        type_name: Singular PascalCase type name, e.g. ``User``.
        url_pattern: URL pattern for instances, e.g. ``/users/:id``.
    """

    namespace: str
    type_name: str
    url_pattern: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "namespace": self.namespace,
            "typeName": self.type_name,
            "urlPattern": self.url_pattern,
        }


@dataclass(frozen=True)
class RelationshipDefinition:
    """A relationship edge between two resources.

    Attributes:
        name: Relationship name, e.g. ``author``.
        from_resource: Resource the relationship is declared on.
        to_resource: Resource the relationship points to.
        kind: ``belongsTo`` or ``hasMany``.
        cardinality: ``one`` for belongsTo, ``many`` for hasMany.
    """

    name: str
    from_resource: str
    to_resource: str
    kind: Literal["belongsTo", "hasMany"]
    cardinality: Literal["one", "many"]

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "from": self.from_resource,
            "to": self.to_resource,
            "kind": self.kind,
            "cardinality": self.cardinality,
        }


def to_pascal_case(text: str) -> str:
    """Convert ``blog_posts`` / ``blog-posts`` / ``blog posts`` to ``BlogPosts``."""
    return "".join(
        word[:1].upper() + word[1:].lower() for word in WORD_SEPARATOR.split(text) if word
    )


def to_type_name(resource_name: str) -> str:
    """Singularize a collection name and convert it to PascalCase."""
    return to_pascal_case(singularize(resource_name))


def map_schema_to_collections(schema: SchemaDefinition | dict[str, Any]) -> list[str]:
    """Map a schema to its collection names, in declaration order."""
    return SchemaDefinition.coerce(schema).resource_names


def map_schema_to_things(schema: SchemaDefinition | dict[str, Any]) -> list[ThingDefinition]:
    """Map a schema to one ThingDefinition per resource.

    Example:
        >>> things = map_schema_to_things({"name": "Blog", "namespace": "blog.example.com",
        ...                                "resources": {"users": {"fields": {}}}})
        >>> things[0].type_name, things[0].url_pattern
        ('User', '/users/:id')
    """
    schema = SchemaDefinition.coerce(schema)
    namespace = schema.namespace or schema.name

    return [
        ThingDefinition(
            namespace=namespace,
            type_name=to_type_name(resource_name),
            url_pattern=f"/{resource_name}/:id",
        )
        for resource_name in schema.resources
    ]


def map_schema_to_relationships(
    schema: SchemaDefinition | dict[str, Any],
) -> list[RelationshipDefinition]:
    """Flatten the relationships of every resource into one list."""
    schema = SchemaDefinition.coerce(schema)
    result: list[RelationshipDefinition] = []

    for resource_name, resource in schema.resources.items():
        for rel_name, rel in resource.relationships.items():
            result.append(
                RelationshipDefinition(
                    name=rel_name,
                    from_resource=resource_name,
                    to_resource=rel.resource,
                    kind=rel.type,
                    cardinality="one" if rel.type == "belongsTo" else "many",
                )
            )

    return result
