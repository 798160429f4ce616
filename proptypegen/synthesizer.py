# File: proptypegen/synthesizer.py
"""
PropTypeGen - Validator Synthesizer
====================================
Pure mapping from type-graph nodes to PropTypes validator expressions.

A ``ValidatorExpression`` is a tuple of tokens.  Each token is either
literal text or a ``Name``; names are embedded (never pre-rendered) so the
emission orderer can find the definitions a body depends on.

Mapping::

    any, null                → PropTypes.any
    bool                     → PropTypes.bool
    integer, double          → PropTypes.number
    string, transformed      → PropTypes.string
    array<T>                 → PropTypes.arrayOf(T)
    map<T>                   → PropTypes.object       (value type dropped)
    object, enum             → _<Name>                (always indirected)
    union<A, B, ...>         → PropTypes.oneOfType([A, B, ...])

Optional object properties are emitted as ``PropTypes.any``; their declared
type is not consulted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Mapping, Tuple, Union

from proptypegen.models import (
    ArrayType,
    EnumDefinition,
    EnumRef,
    MapType,
    ObjectDefinition,
    ObjectRef,
    PrimitiveType,
    PropertyDefinition,
    TransformedStringType,
    UnionType,
)
from proptypegen.naming import Name
from proptypegen.utils import quote_js_string

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("proptypegen.synthesizer")

# ---------------------------------------------------------------------------
# Expression tokens
# ---------------------------------------------------------------------------

Token = Union[str, Name]
ValidatorExpression = Tuple[Token, ...]

NamedTypeKey = Tuple[str, str]  # (kind, ref)

LINE_BREAK: str = "\n"
NAMED_PREFIX: str = "_"

ACCEPT_ANYTHING: str = "PropTypes.any"
ANY_OBJECT: str = "PropTypes.object"

_PRIMITIVE_VALIDATORS: Dict[str, str] = {
    "any": ACCEPT_ANYTHING,
    "null": ACCEPT_ANYTHING,
    "bool": "PropTypes.bool",
    "integer": "PropTypes.number",
    "double": "PropTypes.number",
    "string": "PropTypes.string",
}


class InternalConsistencyError(RuntimeError):
    """A type reached the synthesizer that it has no mapping for."""


@dataclass(frozen=True, slots=True)
class NamedDefinition:
    """An object's identity paired with its synthesized shape body."""

    identity: Name
    body: ValidatorExpression


def references(expression: ValidatorExpression) -> Iterator[Name]:
    """Yield every ``Name`` embedded in *expression*, in token order."""
    for token in expression:
        if isinstance(token, Name):
            yield token


def render_expression(expression: ValidatorExpression) -> str:
    """Flatten tokens to text, writing each ``Name`` as its identifier."""
    return "".join(str(token) for token in expression)


def named_type_key(t: Union[ObjectRef, EnumRef]) -> NamedTypeKey:
    return (t.kind, t.ref)


# ---------------------------------------------------------------------------
# Synthesizer
# ---------------------------------------------------------------------------


class ValidatorSynthesizer:
    """
    Builds validator expressions for a single emission pass.

    Args:
        names: Read-only table from ``(kind, ref)`` of every object and enum
            to its assigned ``Name``.
    """

    def __init__(self, names: Mapping[NamedTypeKey, Name]) -> None:
        self._names: Mapping[NamedTypeKey, Name] = names

    # -- Types --------------------------------------------------------------

    def synthesize(self, t: Any, required: bool = True) -> ValidatorExpression:
        """
        Return the validator expression for *t*.

        *required* marks the position (a required property or a root) as
        opposed to a nested element.  PropTypes expressions carry no
        requiredness marker, so both positions produce the same tokens.

        Raises:
            InternalConsistencyError: For a variant with no mapping, or a
                named type that was never assigned a name.
        """
        if isinstance(t, (ObjectRef, EnumRef)):
            return (NAMED_PREFIX, self._resolve(t))
        if isinstance(t, PrimitiveType):
            validator: Any = _PRIMITIVE_VALIDATORS.get(t.kind)
            if validator is None:
                raise InternalConsistencyError(f"No validator for primitive {t.kind!r}.")
            return (validator,)
        if isinstance(t, TransformedStringType):
            return ("PropTypes.string",)
        if isinstance(t, ArrayType):
            return ("PropTypes.arrayOf(", *self.synthesize(t.items, False), ")")
        if isinstance(t, MapType):
            return (ANY_OBJECT,)
        if isinstance(t, UnionType):
            tokens: List[Token] = ["PropTypes.oneOfType(["]
            for index, member in enumerate(t.members):
                if index:
                    tokens.append(", ")
                tokens.extend(self.synthesize(member, False))
            tokens.append("])")
            return tuple(tokens)
        raise InternalConsistencyError(
            f"Cannot synthesize a validator for {type(t).__name__}: {t!r}"
        )

    def synthesize_property(self, prop: PropertyDefinition) -> ValidatorExpression:
        if prop.optional:
            return (ACCEPT_ANYTHING,)
        return self.synthesize(prop.type, True)

    # -- Named definition bodies --------------------------------------------

    def synthesize_shape(self, obj: ObjectDefinition) -> ValidatorExpression:
        """
        ``PropTypes.shape({...})`` with one line per property.

        Lines are separated by ``LINE_BREAK`` tokens; the first and last
        lines are the opening and closing of the call.
        """
        tokens: List[Token] = ["PropTypes.shape({"]
        for json_name, prop in obj.properties.items():
            tokens.append(LINE_BREAK)
            tokens.append(quote_js_string(json_name))
            tokens.append(": ")
            tokens.extend(self.synthesize_property(prop))
            tokens.append(",")
        tokens.append(LINE_BREAK)
        tokens.append("})")
        return tuple(tokens)

    def synthesize_enum(self, enum: EnumDefinition) -> ValidatorExpression:
        """``PropTypes.oneOf([...])`` over the literal cases, in order."""
        tokens: List[Token] = ["PropTypes.oneOf(["]
        for index, case in enumerate(enum.cases):
            if index:
                tokens.append(", ")
            tokens.append(quote_js_string(case))
        tokens.append("])")
        return tuple(tokens)

    # -- Internal -----------------------------------------------------------

    def _resolve(self, t: Union[ObjectRef, EnumRef]) -> Name:
        try:
            return self._names[named_type_key(t)]
        except KeyError:
            raise InternalConsistencyError(
                f"No name assigned to {t.kind} '{t.ref}'."
            ) from None


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "Token",
    "ValidatorExpression",
    "NamedTypeKey",
    "NamedDefinition",
    "InternalConsistencyError",
    "ValidatorSynthesizer",
    "references",
    "render_expression",
    "named_type_key",
    "LINE_BREAK",
    "NAMED_PREFIX",
    "ACCEPT_ANYTHING",
    "ANY_OBJECT",
]

logger.debug("proptypegen.synthesizer loaded.")
