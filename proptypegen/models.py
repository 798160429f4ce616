# File: proptypegen/models.py
"""
PropTypeGen - Core Data Models
===============================
Pydantic V2 models representing the structural type graph and the
generation configuration.  These models form the single source of truth
for the entire pipeline: Graph Loading → Validation → Rendering → Export.

The type graph is immutable.  ``Object`` and ``Enum`` types are never
nested inside other types; they are referenced by *handle* (``ObjectRef`` /
``EnumRef``), and the definitions live in the ``TypeGraph`` arena.  This is
what lets two objects reference each other without building cyclic Python
objects.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Annotated, Any, Dict, Iterator, List, Literal, Optional, Set, Tuple, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
    model_validator,
)

from proptypegen.utils import count_lines, sha256_hex

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("proptypegen.models")

# ---------------------------------------------------------------------------
# Enums: fixed sets used across the entire project
# ---------------------------------------------------------------------------


class TypeKind(str, Enum):
    """Every variant of the type graph's tagged union."""

    ANY = "any"
    NULL = "null"
    BOOL = "bool"
    INTEGER = "integer"
    DOUBLE = "double"
    STRING = "string"
    TRANSFORMED_STRING = "transformed-string"
    ARRAY = "array"
    MAP = "map"
    OBJECT = "object"
    ENUM = "enum"
    UNION = "union"


class AcronymStyle(str, Enum):
    """How all-caps words (``URL``, ``HTTP``) are cased in generated names."""

    ORIGINAL = "original"
    PASCAL = "pascal"
    CAMEL = "camel"
    LOWER_CASE = "lowerCase"


# ---------------------------------------------------------------------------
# Shared model configuration
# ---------------------------------------------------------------------------

_SHARED_CONFIG: ConfigDict = ConfigDict(
    strict=False,
    populate_by_name=True,
    validate_assignment=True,
    use_enum_values=True,
    frozen=False,
    extra="forbid",
)

# Graph nodes are immutable for the lifetime of an emission pass.
_TYPE_CONFIG: ConfigDict = ConfigDict(
    strict=False,
    use_enum_values=True,
    frozen=True,
    extra="forbid",
)


# ---------------------------------------------------------------------------
# Type variants
# ---------------------------------------------------------------------------


class PrimitiveType(BaseModel):
    """A structural leaf: any, null, bool, integer, double or string."""

    model_config = _TYPE_CONFIG

    kind: Literal["any", "null", "bool", "integer", "double", "string"]

    def __repr__(self) -> str:
        return f"<{self.kind}>"


class TransformedStringType(BaseModel):
    """A string with a recognised format (date-time, uuid, uri, ...)."""

    model_config = _TYPE_CONFIG

    kind: Literal["transformed-string"] = "transformed-string"
    format: str = Field(..., min_length=1, description="String format, e.g. 'uuid'.")

    def __repr__(self) -> str:
        return f"<string:{self.format}>"


class ArrayType(BaseModel):
    model_config = _TYPE_CONFIG

    kind: Literal["array"] = "array"
    items: TypeRef = Field(..., description="Element type.")

    def __repr__(self) -> str:
        return f"<array {self.items!r}>"


class MapType(BaseModel):
    model_config = _TYPE_CONFIG

    kind: Literal["map"] = "map"
    values: TypeRef = Field(..., description="Value type (string keys).")

    def __repr__(self) -> str:
        return f"<map {self.values!r}>"


class UnionType(BaseModel):
    """Union of member types, kept in a stable declaration order."""

    model_config = _TYPE_CONFIG

    kind: Literal["union"] = "union"
    members: Tuple[TypeRef, ...] = Field(
        ..., min_length=1, description="Member types in stable order."
    )

    def __repr__(self) -> str:
        return f"<union {' | '.join(repr(m) for m in self.members)}>"


class ObjectRef(BaseModel):
    """Handle to an ``ObjectDefinition`` in ``TypeGraph.objects``."""

    model_config = _TYPE_CONFIG

    kind: Literal["object"] = "object"
    ref: str = Field(..., min_length=1, description="Key into TypeGraph.objects.")

    def __repr__(self) -> str:
        return f"<object &{self.ref}>"


class EnumRef(BaseModel):
    """Handle to an ``EnumDefinition`` in ``TypeGraph.enums``."""

    model_config = _TYPE_CONFIG

    kind: Literal["enum"] = "enum"
    ref: str = Field(..., min_length=1, description="Key into TypeGraph.enums.")

    def __repr__(self) -> str:
        return f"<enum &{self.ref}>"


TypeRef = Annotated[
    Union[
        PrimitiveType,
        TransformedStringType,
        ArrayType,
        MapType,
        UnionType,
        ObjectRef,
        EnumRef,
    ],
    Field(discriminator="kind"),
]

NamedTypeRef = Union[ObjectRef, EnumRef]

ArrayType.model_rebuild()
MapType.model_rebuild()
UnionType.model_rebuild()


# ---------------------------------------------------------------------------
# Constructors: shorthand for programmatic graph building
# ---------------------------------------------------------------------------


def primitive(kind: str) -> PrimitiveType:
    """Build a primitive type from its kind name (``"string"``, ``"bool"``, ...)."""
    return PrimitiveType(kind=kind)


def array_of(items: Any) -> ArrayType:
    return ArrayType(items=items)


def map_of(values: Any) -> MapType:
    return MapType(values=values)


def union_of(*members: Any) -> UnionType:
    return UnionType(members=tuple(members))


def object_ref(ref: str) -> ObjectRef:
    return ObjectRef(ref=ref)


def enum_ref(ref: str) -> EnumRef:
    return EnumRef(ref=ref)


# ---------------------------------------------------------------------------
# Type tree helpers
# ---------------------------------------------------------------------------


def iter_type_nodes(t: Any) -> Iterator[Any]:
    """
    Yield *t* and every structural node beneath it, pre-order.

    Handles are yielded but never followed, so this always terminates even
    when the graph is cyclic.
    """
    stack: List[Any] = [t]
    while stack:
        node: Any = stack.pop()
        yield node
        if isinstance(node, ArrayType):
            stack.append(node.items)
        elif isinstance(node, MapType):
            stack.append(node.values)
        elif isinstance(node, UnionType):
            stack.extend(reversed(node.members))


def directly_reachable_named_type(t: Any) -> Optional[NamedTypeRef]:
    """
    Return the single named type *t* stands for, if any.

    A handle stands for itself.  A union stands for a named type when its
    only non-null member is that named type (the usual "nullable object").
    """
    if isinstance(t, (ObjectRef, EnumRef)):
        return t
    if isinstance(t, UnionType):
        non_null: List[Any] = [
            m for m in t.members
            if not (isinstance(m, PrimitiveType) and m.kind == TypeKind.NULL.value)
        ]
        if len(non_null) == 1 and isinstance(non_null[0], (ObjectRef, EnumRef)):
            return non_null[0]
    return None


# ---------------------------------------------------------------------------
# Named definitions
# ---------------------------------------------------------------------------


class PropertyDefinition(BaseModel):
    """One object property: its type and whether it may be absent."""

    model_config = _TYPE_CONFIG

    type: TypeRef = Field(..., description="Property type.")
    optional: bool = Field(default=False, description="May the property be absent?")

    @model_validator(mode="before")
    @classmethod
    def _accept_bare_type(cls, data: Any) -> Any:
        # ``{"kind": "string"}`` is shorthand for a required property.
        if isinstance(data, dict) and "kind" in data and "type" not in data:
            return {"type": data}
        return data


class ObjectDefinition(BaseModel):
    """
    A class-like type with ordered, JSON-keyed properties.

    Keys are the exact JSON source strings; they are escaped, never renamed,
    when emitted.
    """

    model_config = _TYPE_CONFIG

    label: Optional[str] = Field(
        default=None, description="Naming candidate (defaults to the graph key)."
    )
    properties: Dict[str, PropertyDefinition] = Field(
        default_factory=dict, description="JSON key → property, in source order."
    )

    def __repr__(self) -> str:
        return f"<ObjectDefinition {self.label} ({len(self.properties)} props)>"


class EnumDefinition(BaseModel):
    """A closed set of string cases."""

    model_config = _TYPE_CONFIG

    label: Optional[str] = Field(
        default=None, description="Naming candidate (defaults to the graph key)."
    )
    cases: Tuple[str, ...] = Field(
        ..., min_length=1, description="Allowed values, in declared order."
    )

    @field_validator("cases")
    @classmethod
    def _unique_cases(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        if len(v) != len(set(v)):
            dupes: List[str] = sorted({x for x in v if v.count(x) > 1})
            raise ValueError(f"Duplicate enum cases detected: {dupes}")
        return v

    def __repr__(self) -> str:
        return f"<EnumDefinition {self.label} {list(self.cases)}>"


# ---------------------------------------------------------------------------
# Type graph: top-level container
# ---------------------------------------------------------------------------


class TypeGraph(BaseModel):
    """
    The root model: the **entire** type graph for one emission pass.

    Invariant: every ``ObjectRef`` / ``EnumRef`` anywhere in the graph
    resolves to a definition in ``objects`` / ``enums``.  Iteration over
    objects, enums and top levels follows declaration order, so repeated
    traversals of the same graph are identical.
    """

    model_config = _TYPE_CONFIG

    objects: Dict[str, ObjectDefinition] = Field(
        default_factory=dict, description="Object definitions keyed by handle."
    )
    enums: Dict[str, EnumDefinition] = Field(
        default_factory=dict, description="Enum definitions keyed by handle."
    )
    top_levels: Dict[str, TypeRef] = Field(
        ..., min_length=1, description="Root label → root type."
    )

    @model_validator(mode="after")
    def _validate_handles_resolve(self) -> "TypeGraph":
        missing: List[str] = []
        for owner, t in self._iter_owned_types():
            for node in iter_type_nodes(t):
                if isinstance(node, ObjectRef) and node.ref not in self.objects:
                    missing.append(f"{owner} → object '{node.ref}'")
                elif isinstance(node, EnumRef) and node.ref not in self.enums:
                    missing.append(f"{owner} → enum '{node.ref}'")
        if missing:
            raise ValueError(f"Unresolved type handles: {missing}")
        return self

    # -- Traversal ----------------------------------------------------------

    def _iter_owned_types(self) -> Iterator[Tuple[str, Any]]:
        for key, obj in self.objects.items():
            for prop_name, prop in obj.properties.items():
                yield f"{key}.{prop_name}", prop.type
        for label, t in self.top_levels.items():
            yield f"top-level '{label}'", t

    def iter_objects(self) -> Iterator[Tuple[str, ObjectDefinition]]:
        return iter(self.objects.items())

    def iter_enums(self) -> Iterator[Tuple[str, EnumDefinition]]:
        return iter(self.enums.items())

    def iter_top_levels(self) -> Iterator[Tuple[str, Any]]:
        return iter(self.top_levels.items())

    def get_object(self, ref: str) -> Optional[ObjectDefinition]:
        return self.objects.get(ref)

    def get_enum(self, ref: str) -> Optional[EnumDefinition]:
        return self.enums.get(ref)

    def label_for(self, t: NamedTypeRef) -> str:
        """Naming candidate for a named type: its label, else its handle."""
        definition: Optional[Union[ObjectDefinition, EnumDefinition]]
        if isinstance(t, ObjectRef):
            definition = self.objects.get(t.ref)
        else:
            definition = self.enums.get(t.ref)
        if definition is not None and definition.label:
            return definition.label
        return t.ref

    # -- Stats --------------------------------------------------------------

    @computed_field  # type: ignore[misc]
    @property
    def object_count(self) -> int:
        return len(self.objects)

    @computed_field  # type: ignore[misc]
    @property
    def enum_count(self) -> int:
        return len(self.enums)

    @computed_field  # type: ignore[misc]
    @property
    def total_properties(self) -> int:
        return sum(len(o.properties) for o in self.objects.values())

    def reachable_named_types(self) -> Set[Tuple[str, str]]:
        """
        ``(kind, ref)`` of every named type reachable from a top level.

        Worklist traversal, O(N + P) where P = total properties.
        """
        seen: Set[Tuple[str, str]] = set()
        worklist: List[Any] = list(self.top_levels.values())
        while worklist:
            for node in iter_type_nodes(worklist.pop()):
                if not isinstance(node, (ObjectRef, EnumRef)):
                    continue
                key: Tuple[str, str] = (node.kind, node.ref)
                if key in seen:
                    continue
                seen.add(key)
                if isinstance(node, ObjectRef):
                    worklist.extend(
                        p.type for p in self.objects[node.ref].properties.values()
                    )
        return seen

    def __repr__(self) -> str:
        return (
            f"<TypeGraph {self.object_count} objects, "
            f"{self.enum_count} enums, "
            f"{len(self.top_levels)} top levels>"
        )


# ---------------------------------------------------------------------------
# Code Generation Configuration
# ---------------------------------------------------------------------------


class GenerationConfig(BaseModel):
    """
    Settings that control rendering and export.

    A single instance of this model (combined with a ``TypeGraph``) is all
    the renderer needs to produce its output.
    """

    model_config = _SHARED_CONFIG

    acronym_style: AcronymStyle = Field(
        default=AcronymStyle.PASCAL,
        description="Casing applied to all-caps words in generated names.",
    )
    leading_comments: Optional[List[str]] = Field(
        default=None,
        description="Comment lines replacing the default usage comment.",
    )
    indent_size: int = Field(
        default=4, ge=2, le=8, description="Indentation width for shape bodies."
    )
    output_path: Optional[str] = Field(
        default=None, description="Target file; None renders to stdout."
    )
    overwrite_existing: bool = Field(
        default=False, description="Replace output_path if it already exists."
    )

    @field_validator("leading_comments")
    @classmethod
    def _split_comment_lines(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return v
        lines: List[str] = []
        for entry in v:
            lines.extend(entry.splitlines() or [""])
        return lines


# ---------------------------------------------------------------------------
# Generation Result
# ---------------------------------------------------------------------------


class GeneratedFile(BaseModel):
    """Represents the single file produced by a generation run."""

    model_config = _SHARED_CONFIG

    path: str = Field(..., min_length=1, description="File path or '<stdout>'.")
    content: str = Field(..., description="Full file content.")

    @computed_field  # type: ignore[misc]
    @property
    def line_count(self) -> int:
        return count_lines(self.content)

    @computed_field  # type: ignore[misc]
    @property
    def size_bytes(self) -> int:
        return len(self.content.encode("utf-8"))

    @computed_field  # type: ignore[misc]
    @property
    def checksum(self) -> str:
        return sha256_hex(self.content)

    def __repr__(self) -> str:
        return f"<GeneratedFile {self.path} ({self.line_count} lines)>"


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "TypeKind",
    "AcronymStyle",
    "PrimitiveType",
    "TransformedStringType",
    "ArrayType",
    "MapType",
    "UnionType",
    "ObjectRef",
    "EnumRef",
    "TypeRef",
    "NamedTypeRef",
    "primitive",
    "array_of",
    "map_of",
    "union_of",
    "object_ref",
    "enum_ref",
    "iter_type_nodes",
    "directly_reachable_named_type",
    "PropertyDefinition",
    "ObjectDefinition",
    "EnumDefinition",
    "TypeGraph",
    "GenerationConfig",
    "GeneratedFile",
]

logger.debug("proptypegen.models loaded — %d public symbols.", len(__all__))
