# File: proptypegen/naming.py
"""
PropTypeGen - Identifier Naming
================================
Assigns legal, globally unique and deterministic JavaScript identifiers to
named types and top-level bindings.

A ``Name`` is an interned handle: synthesized validator expressions embed
``Name`` tokens instead of raw strings, which is how the emission orderer
discovers dependencies between definitions.

Contract of ``Namer.assign_name``:
    (a) the result is a legal identifier (guaranteed by the style function);
    (b) every result is unique within one ``Namer`` and never a reserved word;
    (c) asking again for the same *owner* returns the same ``Name``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, FrozenSet, Hashable, List, Optional, Set

from proptypegen.models import AcronymStyle
from proptypegen.utils import (
    JS_RESERVED_WORDS,
    first_upper,
    is_acronym,
    legalize_js_identifier,
    split_words,
)

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("proptypegen.naming")

StyleFn = Callable[[str], str]

DEFAULT_MAX_ATTEMPTS: int = 10_000


class NamingError(RuntimeError):
    """The namer could not produce a unique identifier."""


@dataclass(frozen=True, slots=True)
class Name:
    """A resolved identifier token."""

    value: str

    def __str__(self) -> str:
        return self.value


# ---------------------------------------------------------------------------
# Style functions
# ---------------------------------------------------------------------------

_ACRONYM_STYLES: Dict[str, StyleFn] = {
    AcronymStyle.ORIGINAL.value: lambda w: w,
    AcronymStyle.PASCAL.value: first_upper,
    AcronymStyle.CAMEL.value: str.lower,
    AcronymStyle.LOWER_CASE.value: str.lower,
}


def make_type_name_style(acronym_style: str = AcronymStyle.PASCAL.value) -> StyleFn:
    """
    Build the upper-camel style function used for type and binding names.

    Examples (default pascal acronyms):
        ``"http response"`` → ``"HttpResponse"``
        ``"userID"``        → ``"UserId"``
        ``"3d-model"``      → ``"The3DModel"``
    """
    style_value: str = getattr(acronym_style, "value", acronym_style)
    try:
        acronyms: StyleFn = _ACRONYM_STYLES[style_value]
    except KeyError:
        raise ValueError(f"Unknown acronym style: {acronym_style!r}") from None

    def style(original: str) -> str:
        words: List[str] = []
        for index, word in enumerate(split_words(original)):
            if is_acronym(word):
                styled: str = acronyms(word)
                words.append(styled[:1].upper() + styled[1:] if index == 0 else styled)
            else:
                words.append(first_upper(word))
        return legalize_js_identifier("".join(words))

    return style


# ---------------------------------------------------------------------------
# Namer
# ---------------------------------------------------------------------------


class Namer:
    """
    Counter-suffix namer.

    Collisions are resolved by appending ``1``, ``2``, ... in request order,
    so the same sequence of requests always yields the same names.
    """

    def __init__(
        self,
        reserved: FrozenSet[str] = JS_RESERVED_WORDS,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1.")
        self._reserved: FrozenSet[str] = reserved
        self._max_attempts: int = max_attempts
        self._taken: Set[str] = set()
        self._by_owner: Dict[Hashable, Name] = {}

    def assign_name(
        self,
        candidate: str,
        style_fn: StyleFn,
        owner: Optional[Hashable] = None,
    ) -> Name:
        """
        Return a unique ``Name`` for *candidate* styled by *style_fn*.

        Raises:
            NamingError: If no free identifier was found within
                ``max_attempts`` suffixes.
        """
        if owner is not None and owner in self._by_owner:
            return self._by_owner[owner]

        base: str = style_fn(candidate)
        for attempt in range(self._max_attempts):
            proposal: str = base if attempt == 0 else f"{base}{attempt}"
            if proposal in self._taken or proposal in self._reserved:
                continue
            name: Name = Name(proposal)
            self._taken.add(proposal)
            if owner is not None:
                self._by_owner[owner] = name
            if attempt:
                logger.debug(
                    "Name '%s' taken — assigned '%s' for %r.", base, proposal, candidate
                )
            return name

        raise NamingError(
            f"Could not find a free identifier for {candidate!r} "
            f"after {self._max_attempts} attempts (base '{base}')."
        )

    def name_for(self, owner: Hashable) -> Optional[Name]:
        """Look up a previously assigned name without assigning one."""
        return self._by_owner.get(owner)

    def __len__(self) -> int:
        return len(self._taken)

    def __repr__(self) -> str:
        return f"<Namer {len(self._taken)} names>"


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "Name",
    "Namer",
    "NamingError",
    "StyleFn",
    "make_type_name_style",
    "DEFAULT_MAX_ATTEMPTS",
]

logger.debug("proptypegen.naming loaded.")
