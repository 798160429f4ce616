# File: proptypegen/renderer.py
"""
PropTypeGen - PropTypes Renderer
=================================
Turns a ``TypeGraph`` into one JavaScript module of PropTypes validators.

Output structure::

    // For use with proptypes.                     ← or leading comments

    import PropTypes from "prop-types";

    let _Person;                                   ← every object, hoisted
    let _Address;
    const _Color = PropTypes.oneOf(["Red"]);      ← enums are leaves

    _Address = PropTypes.shape({                   ← bodies, dependency order
        "street": PropTypes.string,
    });

    _Person = PropTypes.shape({
        "address": _Address,
    });

    export const Person = _Person;                 ← one binding per root

**Assembly contract:**
    - All text is collected in a ``List[str]`` and joined once.
    - ``render()`` either returns the complete module or raises; nothing is
      emitted for a failed pass.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Set

from proptypegen.models import (
    ArrayType,
    EnumRef,
    GenerationConfig,
    ObjectRef,
    PrimitiveType,
    TransformedStringType,
    TypeGraph,
    directly_reachable_named_type,
)
from proptypegen.naming import Name, Namer, StyleFn, make_type_name_style
from proptypegen.ordering import order_definitions
from proptypegen.synthesizer import (
    LINE_BREAK,
    NAMED_PREFIX,
    NamedDefinition,
    NamedTypeKey,
    ValidatorExpression,
    ValidatorSynthesizer,
    named_type_key,
    render_expression,
)
from proptypegen.utils import indent_lines

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("proptypegen.renderer")

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

USAGE_COMMENT: str = "// For use with proptypes."
IMPORT_STATEMENT: str = 'import PropTypes from "prop-types";'


class PropTypesRenderer:
    """
    Renders one emission pass over a type graph.

    A renderer owns its ``Namer``; create a new renderer (or pass a fresh
    namer) for every pass so names are assigned from a clean table.
    """

    def __init__(
        self,
        graph: TypeGraph,
        config: Optional[GenerationConfig] = None,
        namer: Optional[Namer] = None,
    ) -> None:
        self._graph: TypeGraph = graph
        self._config: GenerationConfig = config or GenerationConfig()
        self._namer: Namer = namer if namer is not None else Namer()
        self._style: StyleFn = make_type_name_style(self._config.acronym_style)
        self._names: Dict[NamedTypeKey, Name] = {}
        self._top_level_names: Dict[str, Name] = {}
        self._top_level_aliases: Dict[str, Name] = {}
        self._synthesizer: ValidatorSynthesizer = ValidatorSynthesizer(self._names)
        self._lines: List[str] = []

    # -----------------------------------------------------------------
    # Public API
    # -----------------------------------------------------------------

    def render(self) -> str:
        """Return the complete JavaScript module for the graph."""
        self._lines = []
        self._assign_names()
        self._emit_leading_comments()
        self._emit_imports()
        self._emit_types()
        logger.info(
            "Rendered %d objects, %d enums, %d top levels (%d lines).",
            self._graph.object_count,
            self._graph.enum_count,
            len(self._top_level_names),
            len(self._lines),
        )
        return "\n".join(self._lines) + "\n"

    def name_for(self, kind: str, ref: str) -> Name:
        """Assigned name of the object or enum with handle *ref*."""
        return self._names[(kind, ref)]

    def top_level_name(self, label: str) -> Name:
        return self._top_level_names[label]

    def object_definitions(self) -> List[NamedDefinition]:
        """Synthesized object bodies, in graph declaration order."""
        return [
            NamedDefinition(
                identity=self._names[("object", key)],
                body=self._synthesizer.synthesize_shape(obj),
            )
            for key, obj in self._graph.iter_objects()
        ]

    # -----------------------------------------------------------------
    # Naming
    # -----------------------------------------------------------------

    def _assign_names(self) -> None:
        """
        Name every top level, object and enum, in that order.

        A root that stands for a named type gives that type its own label,
        and the binding reuses the type's name.  Only the first such root
        claims a given type; later ones get a name of their own.
        """
        claimed: Set[NamedTypeKey] = set()
        for label, t in self._graph.iter_top_levels():
            target: Optional[Any] = directly_reachable_named_type(t)
            if target is not None and named_type_key(target) not in claimed:
                key: NamedTypeKey = named_type_key(target)
                claimed.add(key)
                name: Name = self._namer.assign_name(label, self._style, owner=key)
                self._names[key] = name
                self._top_level_names[label] = name
                self._top_level_aliases[label] = name
                continue
            self._top_level_names[label] = self._namer.assign_name(
                label, self._style, owner=("top-level", label)
            )
            if target is not None:
                self._top_level_aliases[label] = self._names[named_type_key(target)]

        for key_ref, _obj in self._graph.iter_objects():
            self._names[("object", key_ref)] = self._namer.assign_name(
                self._graph.label_for(ObjectRef(ref=key_ref)),
                self._style,
                owner=("object", key_ref),
            )
        for key_ref, _enum in self._graph.iter_enums():
            self._names[("enum", key_ref)] = self._namer.assign_name(
                self._graph.label_for(EnumRef(ref=key_ref)),
                self._style,
                owner=("enum", key_ref),
            )
        logger.debug("Assigned %d names.", len(self._namer))

    # -----------------------------------------------------------------
    # Emission helpers
    # -----------------------------------------------------------------

    def _emit_line(self, *parts: Any) -> None:
        self._lines.append("".join(str(p) for p in parts))

    def _ensure_blank_line(self) -> None:
        if self._lines and self._lines[-1] != "":
            self._lines.append("")

    def _emit_leading_comments(self) -> None:
        comments: Optional[List[str]] = self._config.leading_comments
        if comments is None:
            self._emit_line(USAGE_COMMENT)
            return
        for comment in comments:
            self._emit_line(f"// {comment}".rstrip())

    def _emit_imports(self) -> None:
        self._ensure_blank_line()
        self._emit_line(IMPORT_STATEMENT)

    # -----------------------------------------------------------------
    # Types
    # -----------------------------------------------------------------

    def _emit_types(self) -> None:
        self._ensure_blank_line()

        for key, _obj in self._graph.iter_objects():
            self._emit_line("let ", NAMED_PREFIX, self._names[("object", key)], ";")

        for key, enum in self._graph.iter_enums():
            self._emit_line(
                "const ",
                NAMED_PREFIX,
                self._names[("enum", key)],
                " = ",
                render_expression(self._synthesizer.synthesize_enum(enum)),
                ";",
            )

        for definition in order_definitions(self.object_definitions()):
            self._emit_object(definition)

        for label, t in self._graph.iter_top_levels():
            self._ensure_blank_line()
            self._emit_top_level(label, t)

    def _emit_object(self, definition: NamedDefinition) -> None:
        self._ensure_blank_line()
        lines: List[str] = render_expression(definition.body).split(LINE_BREAK)
        self._emit_line(NAMED_PREFIX, definition.identity, " = ", lines[0])
        self._lines.extend(
            indent_lines(lines[1:-1], level=1, size=self._config.indent_size)
        )
        self._emit_line(lines[-1], ";")

    def _emit_top_level(self, label: str, t: Any) -> None:
        name: Name = self._top_level_names[label]
        expression: ValidatorExpression
        if isinstance(t, (PrimitiveType, TransformedStringType)):
            expression = self._synthesizer.synthesize(t)
        elif isinstance(t, ArrayType):
            expression = (
                "PropTypes.arrayOf(",
                *self._synthesizer.synthesize(t.items),
                ")",
            )
        elif label in self._top_level_aliases:
            expression = (NAMED_PREFIX, self._top_level_aliases[label])
        else:
            expression = self._synthesizer.synthesize(t)
        self._emit_line("export const ", name, " = ", render_expression(expression), ";")


def render_graph(
    graph: TypeGraph,
    config: Optional[GenerationConfig] = None,
) -> str:
    """Render *graph* with a fresh namer. Convenience wrapper."""
    return PropTypesRenderer(graph, config).render()


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "PropTypesRenderer",
    "render_graph",
    "USAGE_COMMENT",
    "IMPORT_STATEMENT",
]

logger.debug("proptypegen.renderer loaded.")
