# File: proptypegen/__init__.py
"""
PropTypeGen — PropTypes Validator Generator
============================================

Renders a structural type graph (objects, enums, arrays, maps, unions and
primitives) as one JavaScript module of runtime ``prop-types`` validators.

Architecture overview::

    ┌──────────────┐     ┌──────────────────┐     ┌──────────────────┐
    │  CLI / Entry │────▶│ PropTypesGenerator│────▶│ PropTypesRenderer│
    │   (cli.py)   │     │  (generator.py)   │     │   (renderer.py)  │
    └──────────────┘     └────────┬─────────┘     └────────┬─────────┘
                                  │                        │
                     ┌────────────┼──────────┐   ┌─────────┼──────────┐
                     ▼            ▼          ▼   ▼         ▼          ▼
              ┌──────────┐ ┌──────────┐ ┌────────┐ ┌───────────┐ ┌──────────┐
              │validators│ │  models  │ │ naming │ │synthesizer│ │ ordering │
              └──────────┘ └──────────┘ └────────┘ └───────────┘ └──────────┘

Usage::

    # As a library
    from proptypegen import TypeGraph, render_graph
    source = render_graph(TypeGraph.model_validate(raw))

    # From the command line
    python -m proptypegen --graph graph.yaml --output propTypes.js

Public API:
    - PropTypesGenerator  — Pipeline orchestrator
    - PropTypesRenderer   — One emission pass over a graph
    - TypeGraph           — Type graph model
    - GenerationConfig    — Rendering settings model
    - validate_full       — Graph validation entry point
"""

from __future__ import annotations

__version__: str = "1.0.0"
__author__: str = "PropTypeGen Team"
__license__: str = "MIT"

from proptypegen.models import (
    AcronymStyle,
    ArrayType,
    EnumDefinition,
    EnumRef,
    GeneratedFile,
    GenerationConfig,
    MapType,
    ObjectDefinition,
    ObjectRef,
    PrimitiveType,
    PropertyDefinition,
    TransformedStringType,
    TypeGraph,
    TypeKind,
    UnionType,
    array_of,
    enum_ref,
    map_of,
    object_ref,
    primitive,
    union_of,
)
from proptypegen.naming import Name, Namer, NamingError, make_type_name_style
from proptypegen.synthesizer import InternalConsistencyError, ValidatorSynthesizer
from proptypegen.ordering import order_definitions
from proptypegen.renderer import PropTypesRenderer, render_graph
from proptypegen.validators import ValidationResult, validate_full
from proptypegen.generator import GenerationReport, PropTypesGenerator

# ---------------------------------------------------------------------------
# Public API surface
# ---------------------------------------------------------------------------

__all__: list[str] = [
    # Version info
    "__version__",
    "__author__",
    "__license__",
    # Core orchestrator
    "PropTypesGenerator",
    "GenerationReport",
    # Models
    "AcronymStyle",
    "ArrayType",
    "EnumDefinition",
    "EnumRef",
    "GeneratedFile",
    "GenerationConfig",
    "MapType",
    "ObjectDefinition",
    "ObjectRef",
    "PrimitiveType",
    "PropertyDefinition",
    "TransformedStringType",
    "TypeGraph",
    "TypeKind",
    "UnionType",
    "array_of",
    "enum_ref",
    "map_of",
    "object_ref",
    "primitive",
    "union_of",
    # Naming
    "Name",
    "Namer",
    "NamingError",
    "make_type_name_style",
    # Rendering
    "ValidatorSynthesizer",
    "InternalConsistencyError",
    "order_definitions",
    "PropTypesRenderer",
    "render_graph",
    # Validation
    "validate_full",
    "ValidationResult",
]
