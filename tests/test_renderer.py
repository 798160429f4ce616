"""
tests/test_renderer.py
Tests for the PropTypes renderer: exact module text, naming of roots,
hoisting, ordering and configuration knobs.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List

import pytest

from proptypegen.models import GenerationConfig, TypeGraph
from proptypegen.naming import Name, Namer, NamingError
from proptypegen.renderer import IMPORT_STATEMENT, USAGE_COMMENT, PropTypesRenderer, render_graph


def _render(raw: Dict[str, Any], **config: Any) -> str:
    return render_graph(TypeGraph.model_validate(raw), GenerationConfig(**config))


def _body_lines(output: str) -> List[str]:
    """Lines after the import statement, blank lines removed."""
    lines = output.splitlines()
    start = lines.index(IMPORT_STATEMENT) + 1
    return [line for line in lines[start:] if line]


# ---------------------------------------------------------------------------
# Whole-module output
# ---------------------------------------------------------------------------


class TestExampleModule:
    def test_exact_output(self, example_graph: TypeGraph, example_output: str) -> None:
        assert render_graph(example_graph) == example_output

    def test_rendering_is_repeatable(self, example_graph: TypeGraph) -> None:
        assert render_graph(example_graph) == render_graph(example_graph)

    def test_renderer_exposes_names(self, example_graph: TypeGraph) -> None:
        renderer = PropTypesRenderer(example_graph)
        renderer.render()
        assert renderer.name_for("object", "person") == Name("Person")
        assert renderer.name_for("enum", "color") == Name("Color")
        assert renderer.top_level_name("Person") == Name("Person")

    def test_every_object_hoisted_once(self, example_graph: TypeGraph) -> None:
        output = render_graph(example_graph)
        assert output.count("let _Person;") == 1
        assert output.count("let _Address;") == 1
        assert output.index("let _Address;") < output.index("_Address = ")


class TestSmallGraphs:
    def test_minimal(self, minimal_graph_dict: Dict[str, Any]) -> None:
        assert _render(minimal_graph_dict) == (
            "// For use with proptypes.\n"
            "\n"
            'import PropTypes from "prop-types";\n'
            "\n"
            "let _User;\n"
            "\n"
            "_User = PropTypes.shape({\n"
            '    "id": PropTypes.number,\n'
            "});\n"
            "\n"
            "export const User = _User;\n"
        )

    def test_enum_root(self, enum_root_dict: Dict[str, Any]) -> None:
        assert _body_lines(_render(enum_root_dict)) == [
            'const _Color = PropTypes.oneOf(["Red", "Green", "Blue"]);',
            "export const Color = _Color;",
        ]

    def test_mutual_recursion(self, mutual_recursion_dict: Dict[str, Any]) -> None:
        assert _body_lines(_render(mutual_recursion_dict)) == [
            "let _A;",
            "let _B;",
            "_A = PropTypes.shape({",
            '    "b": _B,',
            "});",
            "_B = PropTypes.shape({",
            '    "a": _A,',
            "});",
            "export const A = _A;",
        ]

    def test_empty_object(self) -> None:
        raw = {
            "objects": {"e": {"label": "Empty Thing", "properties": {}}},
            "top_levels": {"Thing": {"kind": "object", "ref": "e"}},
        }
        assert _body_lines(_render(raw)) == [
            "let _Thing;",
            "_Thing = PropTypes.shape({",
            "});",
            "export const Thing = _Thing;",
        ]


# ---------------------------------------------------------------------------
# Top-level bindings
# ---------------------------------------------------------------------------


class TestTopLevels:
    def test_primitive_roots(self) -> None:
        raw = {
            "top_levels": {
                "Flag": {"kind": "bool"},
                "When": {"kind": "transformed-string", "format": "date-time"},
                "Nothing": {"kind": "null"},
            },
        }
        assert _body_lines(_render(raw)) == [
            "export const Flag = PropTypes.bool;",
            "export const When = PropTypes.string;",
            "export const Nothing = PropTypes.any;",
        ]

    def test_array_root_of_objects(self, minimal_graph_dict: Dict[str, Any]) -> None:
        minimal_graph_dict["top_levels"] = {
            "Users": {"kind": "array", "items": {"kind": "object", "ref": "user"}},
        }
        assert _body_lines(_render(minimal_graph_dict))[-1] == (
            "export const Users = PropTypes.arrayOf(_User);"
        )

    def test_map_and_union_roots_inlined(self) -> None:
        raw = {
            "top_levels": {
                "Lookup": {"kind": "map", "values": {"kind": "string"}},
                "Either": {
                    "kind": "union",
                    "members": [{"kind": "string"}, {"kind": "integer"}],
                },
            },
        }
        assert _body_lines(_render(raw)) == [
            "export const Lookup = PropTypes.object;",
            "export const Either = PropTypes.oneOfType([PropTypes.string, PropTypes.number]);",
        ]

    def test_nullable_object_root_names_the_object(
        self, minimal_graph_dict: Dict[str, Any]
    ) -> None:
        minimal_graph_dict["top_levels"] = {
            "Account": {
                "kind": "union",
                "members": [{"kind": "null"}, {"kind": "object", "ref": "user"}],
            },
        }
        lines = _body_lines(_render(minimal_graph_dict))
        assert lines[0] == "let _Account;"
        assert lines[-1] == "export const Account = _Account;"

    def test_second_root_for_same_object_aliases_first(
        self, minimal_graph_dict: Dict[str, Any]
    ) -> None:
        minimal_graph_dict["top_levels"] = {
            "Primary": {"kind": "object", "ref": "user"},
            "Secondary": {"kind": "object", "ref": "user"},
        }
        lines = _body_lines(_render(minimal_graph_dict))
        assert lines[0] == "let _Primary;"
        assert lines[-2:] == [
            "export const Primary = _Primary;",
            "export const Secondary = _Primary;",
        ]

    def test_root_label_wins_name_collision(self, minimal_graph_dict: Dict[str, Any]) -> None:
        minimal_graph_dict["top_levels"] = {
            "User": {"kind": "string"},
            "Users": {"kind": "array", "items": {"kind": "object", "ref": "user"}},
        }
        lines = _body_lines(_render(minimal_graph_dict))
        assert lines[0] == "let _User1;"
        assert "export const User = PropTypes.string;" in lines
        assert "export const Users = PropTypes.arrayOf(_User1);" in lines

    def test_reserved_root_label(self) -> None:
        raw = {"top_levels": {"PropTypes": {"kind": "string"}}}
        assert _body_lines(_render(raw)) == ["export const PropTypes1 = PropTypes.string;"]

    def test_array_of_strings_root_has_no_definitions(self) -> None:
        raw = {"top_levels": {"X": {"kind": "array", "items": {"kind": "string"}}}}
        assert _body_lines(_render(raw)) == [
            "export const X = PropTypes.arrayOf(PropTypes.string);",
        ]


class TestProperties:
    def test_required_and_optional(self) -> None:
        raw = {
            "objects": {
                "o": {
                    "properties": {
                        "title": {"type": {"kind": "string"}},
                        "count": {"type": {"kind": "integer"}, "optional": True},
                    },
                },
            },
            "top_levels": {"Item": {"kind": "object", "ref": "o"}},
        }
        lines = _body_lines(_render(raw))
        assert '    "title": PropTypes.string,' in lines
        assert '    "count": PropTypes.any,' in lines

    def test_non_ascii_keys_escaped(self) -> None:
        raw = {
            "objects": {"o": {"properties": {"größe": {"kind": "double"}}}},
            "top_levels": {"O": {"kind": "object", "ref": "o"}},
        }
        assert '    "gr\\u00f6\\u00dfe": PropTypes.number,' in _body_lines(_render(raw))

    def test_map_values_never_checked(self) -> None:
        raw = {
            "objects": {
                "o": {
                    "properties": {
                        "m": {"kind": "map", "values": {"kind": "object", "ref": "o"}},
                    },
                },
            },
            "top_levels": {"O": {"kind": "object", "ref": "o"}},
        }
        assert '    "m": PropTypes.object,' in _body_lines(_render(raw))


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class TestConfiguration:
    def test_leading_comments_replace_usage_comment(
        self, minimal_graph_dict: Dict[str, Any]
    ) -> None:
        output = _render(minimal_graph_dict, leading_comments=["Generated.", "", "Do not edit."])
        assert output.startswith("// Generated.\n//\n// Do not edit.\n\nimport PropTypes")
        assert USAGE_COMMENT not in output

    def test_empty_leading_comments(self, minimal_graph_dict: Dict[str, Any]) -> None:
        output = _render(minimal_graph_dict, leading_comments=[])
        assert output.startswith(IMPORT_STATEMENT)

    def test_indent_size(self, minimal_graph_dict: Dict[str, Any]) -> None:
        assert '\n  "id": PropTypes.number,\n' in _render(minimal_graph_dict, indent_size=2)

    def test_acronym_style(self) -> None:
        raw = {
            "objects": {"u": {"label": "userURL", "properties": {}}},
            "top_levels": {"Root": {"kind": "array", "items": {"kind": "object", "ref": "u"}}},
        }
        assert "let _UserURL;" in _render(raw, acronym_style="original")
        assert "let _UserUrl;" in _render(raw, acronym_style="pascal")


# ---------------------------------------------------------------------------
# Module-level properties
# ---------------------------------------------------------------------------


class TestModuleProperties:
    _IDENT = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

    def test_identifiers_are_legal_and_unique(self) -> None:
        raw = {
            "objects": {
                "a": {"label": "3 items", "properties": {}},
                "b": {"label": "3-items", "properties": {}},
                "c": {"label": "???", "properties": {}},
            },
            "enums": {"d": {"label": "class", "cases": ["x"]}},
            "top_levels": {
                "All": {
                    "kind": "union",
                    "members": [
                        {"kind": "object", "ref": "a"},
                        {"kind": "object", "ref": "b"},
                        {"kind": "object", "ref": "c"},
                        {"kind": "enum", "ref": "d"},
                    ],
                },
            },
        }
        output = _render(raw)
        bound = re.findall(r"^(?:let|const|export const) _?(\S+?)(?:;| =)", output, re.M)
        assert len(bound) == len(set(bound)) == 5
        assert all(self._IDENT.match(name) for name in bound)
        assert "let _The3Items;" in output
        assert "let _The3Items1;" in output
        assert "let _Empty;" in output

    def test_every_reference_is_declared(self, example_graph: TypeGraph) -> None:
        output = render_graph(example_graph)
        declared = set(re.findall(r"^(?:let|const) (_\w+)", output, re.M))
        used = set(re.findall(r"(?<![\w$])(_[A-Za-z]\w*)", output))
        assert used <= declared

    def test_accepts_injected_namer(self, minimal_graph: TypeGraph) -> None:
        namer = Namer()
        first = PropTypesRenderer(minimal_graph, namer=namer).render()
        assert "export const User = _User;" in first
        assert len(namer) > 0
        assert namer.name_for(("object", "user")) == Name("User")

    def test_naming_exhaustion_propagates(self) -> None:
        raw = {
            "objects": {
                "a": {"label": "Dup", "properties": {}},
                "b": {"label": "Dup", "properties": {}},
            },
            "top_levels": {"Root": {"kind": "string"}},
        }
        renderer = PropTypesRenderer(
            TypeGraph.model_validate(raw), namer=Namer(max_attempts=1)
        )
        with pytest.raises(NamingError):
            renderer.render()
