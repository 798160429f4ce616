"""
tests/conftest.py
Shared fixtures for the proptypegen test suite.

No external mocking libraries are used; real file I/O is performed
inside temporary directories managed by pytest's tmp_path fixtures.
"""

from __future__ import annotations

import copy
import json
import pathlib
from typing import Any, Dict

import pytest
import yaml

from proptypegen.models import GenerationConfig, TypeGraph


# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------

ROOT_DIR: pathlib.Path = pathlib.Path(__file__).resolve().parent.parent
GRAPH_EXAMPLE_PATH: pathlib.Path = ROOT_DIR / "graph_example.yaml"


# ---------------------------------------------------------------------------
# Raw graph data fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def raw_example_dict() -> Dict[str, Any]:
    """Load the reference graph_example.yaml once per session and return as dict."""
    assert GRAPH_EXAMPLE_PATH.exists(), (
        f"Reference graph not found at {GRAPH_EXAMPLE_PATH}. "
        "Make sure graph_example.yaml is in the project root."
    )
    with open(GRAPH_EXAMPLE_PATH, "r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh)
    assert isinstance(data, dict), "Top-level YAML must be a mapping."
    return data


@pytest.fixture()
def example_dict(raw_example_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Return a deep copy so each test can mutate freely."""
    return copy.deepcopy(raw_example_dict)


@pytest.fixture()
def example_graph(example_dict: Dict[str, Any]) -> TypeGraph:
    return TypeGraph.model_validate(example_dict["graph"])


@pytest.fixture()
def example_yaml_path(example_dict: Dict[str, Any], tmp_path: pathlib.Path) -> pathlib.Path:
    """Write the example dict to a temporary YAML file and return its path."""
    path = tmp_path / "graph.yaml"
    with open(path, "w", encoding="utf-8") as fh:
        yaml.dump(example_dict, fh, default_flow_style=False, sort_keys=False)
    return path


@pytest.fixture()
def example_json_path(example_dict: Dict[str, Any], tmp_path: pathlib.Path) -> pathlib.Path:
    path = tmp_path / "graph.json"
    path.write_text(json.dumps(example_dict, indent=2), encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Minimal / edge-case graph fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def minimal_graph_dict() -> Dict[str, Any]:
    """Smallest useful graph: one object with one property, one root."""
    return {
        "objects": {
            "user": {
                "label": "User",
                "properties": {"id": {"type": {"kind": "integer"}}},
            },
        },
        "top_levels": {"User": {"kind": "object", "ref": "user"}},
    }


@pytest.fixture()
def minimal_graph(minimal_graph_dict: Dict[str, Any]) -> TypeGraph:
    return TypeGraph.model_validate(minimal_graph_dict)


@pytest.fixture()
def mutual_recursion_dict() -> Dict[str, Any]:
    """Two objects that reference each other."""
    return {
        "objects": {
            "a": {"label": "A", "properties": {"b": {"kind": "object", "ref": "b"}}},
            "b": {"label": "B", "properties": {"a": {"kind": "object", "ref": "a"}}},
        },
        "top_levels": {"A": {"kind": "object", "ref": "a"}},
    }


@pytest.fixture()
def enum_root_dict() -> Dict[str, Any]:
    return {
        "enums": {"color": {"label": "Color", "cases": ["Red", "Green", "Blue"]}},
        "top_levels": {"Color": {"kind": "enum", "ref": "color"}},
    }


@pytest.fixture()
def unreachable_graph_dict(minimal_graph_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Minimal graph plus an object no top level reaches."""
    minimal_graph_dict["objects"]["orphan"] = {
        "label": "Orphan",
        "properties": {"x": {"kind": "string"}},
    }
    return minimal_graph_dict


@pytest.fixture()
def default_config() -> GenerationConfig:
    return GenerationConfig()


# ---------------------------------------------------------------------------
# Expected output
# ---------------------------------------------------------------------------

EXAMPLE_OUTPUT: str = """\
// For use with proptypes.

import PropTypes from "prop-types";

let _Person;
let _Address;
const _Color = PropTypes.oneOf(["Red", "Green", "Blue"]);

_Address = PropTypes.shape({
    "street": PropTypes.string,
    "zipCode": PropTypes.oneOfType([PropTypes.string, PropTypes.any]),
});

_Person = PropTypes.shape({
    "name": PropTypes.string,
    "age": PropTypes.number,
    "email": PropTypes.any,
    "address": _Address,
    "favoriteColor": _Color,
    "tags": PropTypes.arrayOf(PropTypes.string),
    "friends": PropTypes.arrayOf(_Person),
    "metadata": PropTypes.object,
});

export const Person = _Person;
"""


@pytest.fixture()
def example_output() -> str:
    return EXAMPLE_OUTPUT
