"""
Access to the project's database schema.

The schema file is never parsed here: an introspector hands back the
datamodel (models and enums with their fields), which is then looked up by
name.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .errors import LookupNotFoundError
from .files import read_file
from .node import DMMF_SCRIPT, run_node_json
from .paths import ProjectPaths

logger = logging.getLogger(__name__)


@dataclass
class Field:
    """A field of a model."""

    name: str
    kind: str  # "scalar", "object" (relation) or "enum"
    type: str
    is_list: bool = False
    is_required: bool = True
    is_id: bool = False
    is_unique: bool = False
    has_default_value: bool = False
    relation_name: str | None = None
    documentation: str | None = None

    @staticmethod
    def from_dict(d: dict[str, Any]) -> Field:
        return Field(
            name=d["name"],
            kind=d.get("kind", "scalar"),
            type=d["type"],
            is_list=d.get("isList", False),
            is_required=d.get("isRequired", True),
            is_id=d.get("isId", False),
            is_unique=d.get("isUnique", False),
            has_default_value=d.get("hasDefaultValue", False),
            relation_name=d.get("relationName"),
            documentation=d.get("documentation"),
        )


@dataclass
class Model:
    """A named entity (database table) of the schema."""

    name: str
    fields: list[Field] = field(default_factory=list)
    db_name: str | None = None
    primary_key: dict[str, Any] | None = None
    unique_fields: list[list[str]] = field(default_factory=list)
    documentation: str | None = None

    @staticmethod
    def from_dict(d: dict[str, Any]) -> Model:
        return Model(
            name=d["name"],
            fields=[Field.from_dict(f) for f in d.get("fields", [])],
            db_name=d.get("dbName"),
            primary_key=d.get("primaryKey"),
            unique_fields=d.get("uniqueFields", []),
            documentation=d.get("documentation"),
        )

    def get_field(self, name: str) -> Field | None:
        return next((f for f in self.fields if f.name == name), None)


@dataclass
class EnumValue:
    name: str
    db_name: str | None = None


@dataclass
class EnumDefinition:
    """A named enumeration of the schema."""

    name: str
    values: list[EnumValue] = field(default_factory=list)
    documentation: str | None = None

    @staticmethod
    def from_dict(d: dict[str, Any]) -> EnumDefinition:
        return EnumDefinition(
            name=d["name"],
            values=[EnumValue(name=v["name"], db_name=v.get("dbName")) for v in d.get("values", [])],
            documentation=d.get("documentation"),
        )


@dataclass
class Datamodel:
    """Every model and enum of a schema."""

    models: list[Model] = field(default_factory=list)
    enums: list[EnumDefinition] = field(default_factory=list)

    @staticmethod
    def from_dict(d: dict[str, Any]) -> Datamodel:
        return Datamodel(
            models=[Model.from_dict(m) for m in d.get("models", [])],
            enums=[EnumDefinition.from_dict(e) for e in d.get("enums", [])],
        )


class SchemaIntrospector(ABC):
    """Abstract base class for schema introspectors."""

    @abstractmethod
    def get_datamodel(self, schema_text: str) -> Datamodel:
        """
        Introspect a schema definition.

        Args:
            schema_text: Content of the schema file

        Returns:
            The schema's models and enums
        """


class PrismaIntrospector(SchemaIntrospector):
    """Introspector running the Prisma engine under Node.

    Args:
        cwd: Directory ``@prisma/internals`` is resolved from (the project base)
    """

    def __init__(self, cwd: Path | None = None):
        self.cwd = cwd

    def get_datamodel(self, schema_text: str) -> Datamodel:
        return Datamodel.from_dict(run_node_json(DMMF_SCRIPT, schema_text, cwd=self.cwd))


def get_schema_definitions(paths: ProjectPaths, introspector: SchemaIntrospector | None = None) -> Datamodel:
    """Return the datamodel of the project's schema.prisma."""
    introspector = introspector or PrismaIntrospector(cwd=paths.base)
    logger.debug("Introspecting %s", paths.schema_path)
    return introspector.get_datamodel(read_file(paths.schema_path))


def get_schema(
    paths: ProjectPaths,
    name: str | None = None,
    introspector: SchemaIntrospector | None = None,
) -> Model | Datamodel:
    """
    Return the model called ``name`` from the project's schema.

    Args:
        paths: Project paths
        name: Model name; without one the whole datamodel is returned
        introspector: Introspector to use (defaults to Prisma)

    Raises:
        LookupNotFoundError: If no model has that name
    """
    datamodel = get_schema_definitions(paths, introspector)
    if not name:
        return datamodel

    model = next((model for model in datamodel.models if model.name == name), None)
    if model is None:
        raise LookupNotFoundError(f"No schema definition found for `{name}` in schema.prisma file", name)
    return model


def get_enum(
    paths: ProjectPaths,
    name: str | None = None,
    introspector: SchemaIntrospector | None = None,
) -> EnumDefinition | list[EnumDefinition]:
    """
    Return the enum called ``name`` from the project's schema.

    Args:
        paths: Project paths
        name: Enum name; without one every enum is returned
        introspector: Introspector to use (defaults to Prisma)

    Raises:
        LookupNotFoundError: If no enum has that name
    """
    datamodel = get_schema_definitions(paths, introspector)
    if not name:
        return datamodel.enums

    enum = next((enum for enum in datamodel.enums if enum.name == name), None)
    if enum is None:
        raise LookupNotFoundError(f"No enum schema definition found for `{name}` in schema.prisma file", name)
    return enum
