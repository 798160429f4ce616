# File: proptypegen/validators.py
"""
PropTypeGen - Type Graph & Configuration Validators
=====================================================
This module provides a **pure-function validation pipeline** that operates
on the Pydantic V2 models defined in ``proptypegen.models``.

Pydantic's built-in validators handle structural correctness (variant
shapes, unresolved handles, duplicate enum cases).  This module adds
**cross-entity semantic checks**: reachability of definitions, recursive
definition cycles, unions that collapse, and places where the generated
validators are knowingly less precise than the graph (map values, optional
properties).

Usage by downstream modules:
    from proptypegen.validators import validate_full
    result = validate_full(graph, config)
    if not result.is_valid:
        raise SystemExit(...)
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Callable, Dict, Iterator, List, Optional, Set, Tuple

from proptypegen.models import (
    ArrayType,
    EnumRef,
    GenerationConfig,
    MapType,
    ObjectRef,
    TypeGraph,
    UnionType,
    iter_type_nodes,
)
from proptypegen.naming import make_type_name_style
from proptypegen.utils import split_words

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("proptypegen.validators")

# ---------------------------------------------------------------------------
# Validation result container
# ---------------------------------------------------------------------------


class ValidationError:
    """Lightweight error descriptor (no Pydantic overhead)."""

    __slots__ = ("level", "code", "message", "context")

    def __init__(
        self,
        level: str,
        code: str,
        message: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.level: str = level  # "error" | "warning" | "info"
        self.code: str = code
        self.message: str = message
        self.context: Dict[str, Any] = context or {}

    @property
    def is_error(self) -> bool:
        return self.level == "error"

    @property
    def is_warning(self) -> bool:
        return self.level == "warning"

    def __repr__(self) -> str:
        return f"[{self.level.upper()}] {self.code}: {self.message}"

    def __str__(self) -> str:
        return self.__repr__()


class ValidationResult:
    """
    Accumulates ``ValidationError`` instances produced by the pipeline.

    Provides O(1) access to counts and O(n) filtering.
    """

    __slots__ = ("_items",)

    def __init__(self) -> None:
        self._items: List[ValidationError] = []

    # -- Mutation -----------------------------------------------------------

    def add_error(
        self,
        code: str,
        message: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._items.append(ValidationError("error", code, message, context))

    def add_warning(
        self,
        code: str,
        message: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._items.append(ValidationError("warning", code, message, context))

    def add_info(
        self,
        code: str,
        message: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._items.append(ValidationError("info", code, message, context))

    def merge(self, other: "ValidationResult") -> None:
        """Merge another result into this one — O(k) where k = len(other)."""
        self._items.extend(other._items)

    # -- Query --------------------------------------------------------------

    @property
    def errors(self) -> List[ValidationError]:
        return [e for e in self._items if e.is_error]

    @property
    def warnings(self) -> List[ValidationError]:
        return [e for e in self._items if e.is_warning]

    @property
    def infos(self) -> List[ValidationError]:
        return [e for e in self._items if e.level == "info"]

    @property
    def has_errors(self) -> bool:
        return any(e.is_error for e in self._items)

    @property
    def has_warnings(self) -> bool:
        return any(e.is_warning for e in self._items)

    @property
    def error_count(self) -> int:
        return sum(1 for e in self._items if e.is_error)

    @property
    def warning_count(self) -> int:
        return sum(1 for e in self._items if e.is_warning)

    @property
    def is_valid(self) -> bool:
        return not self.has_errors

    def codes(self) -> List[str]:
        return [e.code for e in self._items]

    def summary(self) -> str:
        return (
            f"Validation: {self.error_count} error(s), "
            f"{self.warning_count} warning(s), "
            f"{len(self._items)} total item(s)."
        )

    def __repr__(self) -> str:
        return f"<ValidationResult {self.summary()}>"

    def __bool__(self) -> bool:
        """Truthy when there are NO errors (i.e. valid)."""
        return self.is_valid

    def __len__(self) -> int:
        return len(self._items)

    def format_report(self, include_info: bool = False) -> str:
        """Human-readable multi-line report."""
        lines: List[str] = [self.summary(), ""]
        for item in self._items:
            if not include_info and item.level == "info":
                continue
            prefix: str = {
                "error": "❌",
                "warning": "⚠️",
                "info": "ℹ️",
            }.get(item.level, "•")
            lines.append(f"  {prefix} [{item.code}] {item.message}")
            if item.context:
                for k, v in item.context.items():
                    lines.append(f"       {k}: {v}")
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Thresholds
# ---------------------------------------------------------------------------

# Emission ordering is quadratic in the number of objects.
_LARGE_GRAPH_OBJECTS: int = 500

_OUTPUT_EXTENSIONS: Tuple[str, ...] = (".js", ".jsx", ".mjs", ".cjs")


# ---------------------------------------------------------------------------
# Graph walking helpers
# ---------------------------------------------------------------------------


def _iter_property_types(graph: TypeGraph) -> Iterator[Tuple[str, str, Any, bool]]:
    """Yield ``(object_key, json_name, type, optional)`` for every property."""
    for key, obj in graph.iter_objects():
        for json_name, prop in obj.properties.items():
            yield key, json_name, prop.type, prop.optional


def _emitted_object_references(t: Any) -> Iterator[str]:
    """
    Object handles that the synthesized validator for *t* will mention.

    Map value types are not emitted, so handles beneath a map are skipped.
    """
    stack: List[Any] = [t]
    while stack:
        node: Any = stack.pop()
        if isinstance(node, ObjectRef):
            yield node.ref
        elif isinstance(node, MapType):
            continue
        elif isinstance(node, UnionType):
            stack.extend(node.members)
        elif isinstance(node, ArrayType):
            stack.append(node.items)


# ---------------------------------------------------------------------------
# Individual validation functions (each is O(n) or better)
# ---------------------------------------------------------------------------


def validate_labels(graph: TypeGraph) -> ValidationResult:
    """
    Warn about labels with no usable words.

    Such labels still get a legal identifier (``Empty``, ``Empty1``, ...),
    but the generated names say nothing about the type.

    Complexity: O(N) where N = named types + top levels.
    """
    result: ValidationResult = ValidationResult()
    candidates: List[Tuple[str, str]] = (
        [("object", graph.label_for(ObjectRef(ref=k))) for k in graph.objects]
        + [("enum", graph.label_for(EnumRef(ref=k))) for k in graph.enums]
        + [("top-level", label) for label in graph.top_levels]
    )
    for kind, label in candidates:
        if not split_words(label):
            result.add_warning(
                "LABEL_HAS_NO_WORDS",
                f"The {kind} label '{label}' contains no letters or digits; "
                f"a placeholder name will be generated.",
                {"kind": kind, "label": label},
            )
    return result


def validate_reachability(graph: TypeGraph) -> ValidationResult:
    """
    Warn about objects and enums no top level reaches.

    Unreachable definitions are still emitted, but nothing exports them.

    Complexity: O(N + P).
    """
    result: ValidationResult = ValidationResult()
    reachable: Set[Tuple[str, str]] = graph.reachable_named_types()

    for key in graph.objects:
        if ("object", key) not in reachable:
            result.add_warning(
                "UNREACHABLE_DEFINITION",
                f"Object '{key}' is not reachable from any top level.",
                {"kind": "object", "ref": key},
            )
    for key in graph.enums:
        if ("enum", key) not in reachable:
            result.add_warning(
                "UNREACHABLE_DEFINITION",
                f"Enum '{key}' is not reachable from any top level.",
                {"kind": "enum", "ref": key},
            )
    return result


def validate_recursive_definitions(graph: TypeGraph) -> ValidationResult:
    """
    Report cycles between object definitions using iterative DFS.

    Cycles are legal: every object is hoisted before any body is emitted,
    but one assignment in each cycle will run before its dependency has
    been assigned.

    Complexity: O(N + E).
    """
    result: ValidationResult = ValidationResult()

    adjacency: Dict[str, List[str]] = defaultdict(list)
    for key, _json_name, t, optional in _iter_property_types(graph):
        if optional:
            continue
        for ref in _emitted_object_references(t):
            if ref not in adjacency[key]:
                adjacency[key].append(ref)

    visited: Set[str] = set()
    in_stack: Set[str] = set()
    cycles_found: List[List[str]] = []

    for start in graph.objects:
        if start in visited:
            continue

        # Iterative DFS using an explicit stack
        stack: List[Tuple[str, bool]] = [(start, False)]
        path: List[str] = []

        while stack:
            node, is_returning = stack.pop()

            if is_returning:
                in_stack.discard(node)
                if path and path[-1] == node:
                    path.pop()
                continue

            if node in in_stack:
                cycle_start_idx: int = path.index(node) if node in path else len(path)
                cycles_found.append(path[cycle_start_idx:] + [node])
                continue

            if node in visited:
                continue

            visited.add(node)
            in_stack.add(node)
            path.append(node)

            stack.append((node, True))
            for neighbour in reversed(adjacency.get(node, [])):
                stack.append((neighbour, False))

    for cycle in cycles_found:
        result.add_info(
            "RECURSIVE_DEFINITION",
            f"Recursive object definitions: {' → '.join(cycle)}.",
            {"cycle": cycle},
        )

    if not cycles_found:
        logger.debug("No recursive object definitions detected.")

    return result


def validate_unions(graph: TypeGraph) -> ValidationResult:
    """
    Warn about unions with a single member or with repeated members.

    Complexity: O(T) where T = total type nodes.
    """
    result: ValidationResult = ValidationResult()
    roots: List[Tuple[str, Any]] = [
        (f"{key}.{json_name}", t) for key, json_name, t, _ in _iter_property_types(graph)
    ] + [(f"top-level '{label}'", t) for label, t in graph.iter_top_levels()]

    for location, root in roots:
        for node in iter_type_nodes(root):
            if not isinstance(node, UnionType):
                continue
            if len(node.members) == 1:
                result.add_warning(
                    "SINGLE_MEMBER_UNION",
                    f"Union at {location} has a single member.",
                    {"location": location},
                )
            elif len(set(node.members)) != len(node.members):
                result.add_warning(
                    "DUPLICATE_UNION_MEMBER",
                    f"Union at {location} repeats a member type.",
                    {"location": location},
                )
    return result


def validate_precision_loss(graph: TypeGraph) -> ValidationResult:
    """
    Note every place where the generated validator is looser than the graph:
    map value types and optional property types are not checked.

    Complexity: O(T).
    """
    result: ValidationResult = ValidationResult()
    for key, json_name, t, optional in _iter_property_types(graph):
        location: str = f"{key}.{json_name}"
        if optional:
            result.add_info(
                "OPTIONAL_PROPERTY_UNCHECKED",
                f"Optional property {location} is validated as PropTypes.any.",
                {"location": location},
            )
            continue
        if any(isinstance(n, MapType) for n in iter_type_nodes(t)):
            result.add_info(
                "MAP_VALUES_UNCHECKED",
                f"Map at {location} is validated as PropTypes.object; "
                f"its value type is not checked.",
                {"location": location},
            )
    for label, t in graph.iter_top_levels():
        if any(isinstance(n, MapType) for n in iter_type_nodes(t)):
            result.add_info(
                "MAP_VALUES_UNCHECKED",
                f"Map at top-level '{label}' is validated as PropTypes.object; "
                f"its value type is not checked.",
                {"location": f"top-level '{label}'"},
            )
    return result


def validate_graph_size(graph: TypeGraph) -> ValidationResult:
    """
    Emit informational messages about graph size.

    Complexity: O(1).
    """
    result: ValidationResult = ValidationResult()

    if graph.object_count > _LARGE_GRAPH_OBJECTS:
        result.add_warning(
            "LARGE_GRAPH",
            f"Graph contains {graph.object_count} objects. Emission ordering "
            f"is quadratic and may be slow.",
            {"object_count": graph.object_count},
        )

    result.add_info(
        "GRAPH_STATS",
        f"Graph: {graph.object_count} objects, {graph.enum_count} enums, "
        f"{graph.total_properties} properties, "
        f"{len(graph.top_levels)} top levels.",
        {
            "objects": graph.object_count,
            "enums": graph.enum_count,
            "properties": graph.total_properties,
            "top_levels": len(graph.top_levels),
        },
    )
    return result


def validate_generation_config(config: GenerationConfig) -> ValidationResult:
    """
    Validate the generation configuration beyond what Pydantic field
    constraints enforce.

    Complexity: O(1).
    """
    result: ValidationResult = ValidationResult()

    # Only reachable for configs built with model_construct(); the
    # AcronymStyle enum rejects unknown styles on normal validation.
    try:
        make_type_name_style(config.acronym_style)
    except ValueError as exc:
        result.add_error("INVALID_ACRONYM_STYLE", str(exc))

    if config.output_path is not None:
        lowered: str = config.output_path.lower()
        if not lowered.endswith(_OUTPUT_EXTENSIONS):
            result.add_warning(
                "UNUSUAL_OUTPUT_EXTENSION",
                f"Output path '{config.output_path}' does not end in one of "
                f"{', '.join(_OUTPUT_EXTENSIONS)}.",
                {"output_path": config.output_path},
            )

    return result


# ---------------------------------------------------------------------------
# Composite validation orchestrators
# ---------------------------------------------------------------------------


def validate_graph(graph: TypeGraph) -> ValidationResult:
    """
    Run all graph-level validators.  Returns a merged ``ValidationResult``.
    """
    result: ValidationResult = ValidationResult()

    validators: List[Callable[[TypeGraph], ValidationResult]] = [
        validate_labels,
        validate_reachability,
        validate_recursive_definitions,
        validate_unions,
        validate_precision_loss,
        validate_graph_size,
    ]

    for validator_fn in validators:
        logger.debug("Running validator: %s", validator_fn.__name__)
        result.merge(validator_fn(graph))

    logger.info("Graph validation complete: %s", result.summary())
    return result


def validate_full(graph: TypeGraph, config: GenerationConfig) -> ValidationResult:
    """
    **Master validation entry point.**

    This is the single function that ``generator.py`` and ``cli.py`` call
    before rendering.
    """
    logger.info(
        "Starting full validation — %d objects, %d enums.",
        graph.object_count,
        graph.enum_count,
    )

    result: ValidationResult = ValidationResult()
    result.merge(validate_graph(graph))
    result.merge(validate_generation_config(config))

    if result.has_errors:
        logger.error(
            "Validation FAILED with %d error(s). %s",
            result.error_count,
            result.summary(),
        )
    else:
        logger.info("Validation PASSED. %s", result.summary())

    return result


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "ValidationError",
    "ValidationResult",
    "validate_labels",
    "validate_reachability",
    "validate_recursive_definitions",
    "validate_unions",
    "validate_precision_loss",
    "validate_graph_size",
    "validate_generation_config",
    "validate_graph",
    "validate_full",
]

logger.debug("proptypegen.validators loaded — %d public symbols.", len(__all__))
