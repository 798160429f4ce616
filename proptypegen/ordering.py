# File: proptypegen/ordering.py
"""
PropTypeGen - Emission Orderer
===============================
Best-effort dependency ordering of named definition bodies.

JavaScript evaluates ``_A = PropTypes.shape({... _B ...})`` eagerly, so
``_B`` should be assigned before ``_A``.  Definitions are visited in input
order and each one is *inserted* (not appended) directly after the last
already-placed definition it references.  References to itself or to
definitions not yet placed are ignored: in a cycle one direction must lose,
and every name is hoisted with ``let`` beforehand, so a late assignment
never produces a reference error.

Complexity: O(n² · r) where n = definitions, r = references per body.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from proptypegen.synthesizer import NamedDefinition, references

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("proptypegen.ordering")


def insertion_ordinal(
    definition: NamedDefinition,
    placed: Sequence[NamedDefinition],
) -> int:
    """One past the last position in *placed* that *definition* references."""
    ordinal: int = 0
    for dependency in references(definition.body):
        for position, candidate in enumerate(placed):
            if candidate.identity == dependency:
                ordinal = max(ordinal, position + 1)
    return ordinal


def order_definitions(definitions: Sequence[NamedDefinition]) -> List[NamedDefinition]:
    """
    Return a permutation of *definitions* with dependencies first where the
    input order allows it.

    Always terminates, whatever cycles the bodies contain.
    """
    ordered: List[NamedDefinition] = []
    for definition in definitions:
        ordinal: int = insertion_ordinal(definition, ordered)
        ordered.insert(ordinal, definition)
        logger.debug(
            "Placed '%s' at %d of %d.", definition.identity, ordinal, len(ordered)
        )
    return ordered


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "insertion_ordinal",
    "order_definitions",
]

logger.debug("proptypegen.ordering loaded.")
