# File: proptypegen/utils.py
"""
PropTypeGen - Utility Functions & Helpers
==========================================
String transformation, JavaScript escaping, file I/O and timing utilities
used throughout the generation pipeline.

Performance strategy:
- Pure string functions are decorated with ``@lru_cache(maxsize=None)``
  because the same labels and keys are styled repeatedly during a pass.
- File writes use a temporary file plus atomic rename.
"""

from __future__ import annotations

import functools
import hashlib
import logging
import os
import re
import shutil
import tempfile
import time
from pathlib import Path
from typing import FrozenSet, List, Optional, Sequence, Tuple

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("proptypegen.utils")

# ---------------------------------------------------------------------------
# Pre-compiled regex patterns (compiled once at module load)
# ---------------------------------------------------------------------------

# Runs over a character-class shape of the label (A upper, a lower, 0 digit).
_SPLIT_WORDS_RE: re.Pattern[str] = re.compile(
    r"[A-Z]?[a-z]+|[A-Z]+(?=[A-Z][a-z]|\d|\b)|[A-Z]|\d+"
)

# JavaScript reserved words and globals that generated bindings must avoid.
JS_RESERVED_WORDS: FrozenSet[str] = frozenset({
    "abstract", "arguments", "await", "boolean", "break", "byte", "case",
    "catch", "char", "class", "const", "continue", "debugger", "default",
    "delete", "do", "double", "else", "enum", "eval", "export", "extends",
    "false", "final", "finally", "float", "for", "function", "goto", "if",
    "implements", "import", "in", "instanceof", "int", "interface", "let",
    "long", "native", "new", "null", "package", "private", "protected",
    "public", "return", "short", "static", "super", "switch",
    "synchronized", "this", "throw", "throws", "transient", "true", "try",
    "typeof", "var", "void", "volatile", "while", "with", "yield",
    "Object", "Array", "String", "Number", "Boolean", "Symbol", "Date",
    "Error", "Function", "Map", "Set", "JSON", "Math", "Promise",
    "undefined", "NaN", "Infinity", "PropTypes",
})


# ---------------------------------------------------------------------------
# Cached string transformation functions
# ---------------------------------------------------------------------------


@functools.lru_cache(maxsize=None)
def split_words(name: str) -> Tuple[str, ...]:
    """
    Split a label of any casing style into its words, preserving case.

    Examples:
        >>> split_words("HTTPResponse")
        ('HTTP', 'Response')
        >>> split_words("user_id")
        ('user', 'id')
        >>> split_words("item2Price")
        ('item', '2', 'Price')

    Non-ASCII letters are kept: ``"Größe"`` splits as ``("Größe",)``.

    Returns a tuple (hashable for LRU cache).
    """
    shape: str = "".join(_char_class(c) for c in name)
    return tuple(
        name[m.start():m.end()] for m in _SPLIT_WORDS_RE.finditer(shape) if m.group()
    )


def _char_class(c: str) -> str:
    if c.isdecimal():
        return "0"
    if c.isupper():
        return "A"
    if c.isalpha():
        return "a"
    return " "


def is_acronym(word: str) -> bool:
    """An all-caps word of two or more letters (``URL``, ``ID``)."""
    return len(word) > 1 and word.isalpha() and word.isupper()


def first_upper(word: str) -> str:
    """``"hello"`` → ``"Hello"``, ``"WORLD"`` → ``"World"``."""
    if not word:
        return ""
    return word[0].upper() + word[1:].lower()


@functools.lru_cache(maxsize=None)
def legalize_js_identifier(name: str) -> str:
    """
    Drop characters that cannot appear in a JavaScript identifier and make
    sure the first character can start one.  Unicode letters are legal.

    Examples:
        >>> legalize_js_identifier("9Lives")
        'The9Lives'
        >>> legalize_js_identifier("Größe")
        'Größe'
        >>> legalize_js_identifier("")
        'Empty'
    """
    result: str = "".join(c for c in name if c == "$" or f"_{c}".isidentifier())
    if not result:
        return "Empty"
    if not (result[0] == "$" or result[0].isidentifier()):
        result = f"The{result}"
    return result


# ---------------------------------------------------------------------------
# JavaScript string literal escaping
# ---------------------------------------------------------------------------

_SHORT_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\t": "\\t",
}


@functools.lru_cache(maxsize=None)
def utf16_string_escape(value: str) -> str:
    """
    Escape *value* for embedding in a double-quoted JavaScript string.

    Printable ASCII is kept as-is; everything else becomes ``\\uXXXX``
    escapes of its UTF-16 code units, so astral characters are written as
    surrogate pairs.

    Examples:
        >>> utf16_string_escape('say "hi"')
        'say \\\\"hi\\\\"'
        >>> utf16_string_escape("café")
        'caf\\\\u00e9'
    """
    parts: List[str] = []
    for ch in value:
        short: Optional[str] = _SHORT_ESCAPES.get(ch)
        if short is not None:
            parts.append(short)
            continue
        code: int = ord(ch)
        if 0x20 <= code < 0x7F:
            parts.append(ch)
        elif code > 0xFFFF:
            code -= 0x10000
            parts.append(f"\\u{0xD800 + (code >> 10):04x}")
            parts.append(f"\\u{0xDC00 + (code & 0x3FF):04x}")
        else:
            parts.append(f"\\u{code:04x}")
    return "".join(parts)


def quote_js_string(value: str) -> str:
    """Wrap *value* in double quotes, escaping internals."""
    return f'"{utf16_string_escape(value)}"'


# ---------------------------------------------------------------------------
# Indentation helpers
# ---------------------------------------------------------------------------


def indent_lines(lines: Sequence[str], level: int = 1, size: int = 4) -> List[str]:
    """Indent a list of lines, returning a new list. O(n)."""
    prefix: str = " " * (level * size)
    return [prefix + line if line.strip() else line for line in lines]


# ---------------------------------------------------------------------------
# File I/O helpers
# ---------------------------------------------------------------------------


def ensure_directory(path: Path) -> None:
    """Create directory (and parents) if it doesn't exist."""
    path.mkdir(parents=True, exist_ok=True)
    logger.debug("Ensured directory exists: %s", path)


def write_file(path: Path, content: str, atomic: bool = True) -> int:
    """
    Write *content* to *path*.

    When *atomic* is True, writes to a temporary file first then renames,
    so a crash never leaves a half-written output file.

    Returns the number of bytes written.
    """
    ensure_directory(path.parent)

    encoded: bytes = content.encode("utf-8")
    byte_count: int = len(encoded)

    if atomic:
        fd: int
        tmp_path: str
        fd, tmp_path = tempfile.mkstemp(
            dir=str(path.parent),
            prefix=f".{path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(encoded)
            shutil.move(tmp_path, str(path))
        except Exception:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise
    else:
        path.write_bytes(encoded)

    logger.debug("Wrote %d bytes to %s", byte_count, path)
    return byte_count


# ---------------------------------------------------------------------------
# Checksum & metrics
# ---------------------------------------------------------------------------


def sha256_hex(content: str) -> str:
    """Return SHA-256 hex digest of a string. O(n)."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def count_lines(content: str) -> int:
    """Count the number of lines in a string. O(n)."""
    if not content:
        return 0
    return content.count("\n") + (1 if not content.endswith("\n") else 0)


# ---------------------------------------------------------------------------
# Timer context manager
# ---------------------------------------------------------------------------


class Timer:
    """
    Simple context-manager timer for profiling pipeline steps.

    Usage:
        with Timer("render") as t:
            ...
        print(t.elapsed)
    """

    __slots__ = ("label", "start_time", "end_time", "elapsed")

    def __init__(self, label: str = "operation") -> None:
        self.label: str = label
        self.start_time: float = 0.0
        self.end_time: float = 0.0
        self.elapsed: float = 0.0

    def __enter__(self) -> "Timer":
        self.start_time = time.perf_counter()
        return self

    def __exit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[BaseException],
        exc_tb: Optional[object],
    ) -> None:
        self.end_time = time.perf_counter()
        self.elapsed = self.end_time - self.start_time
        logger.info(
            "Timer [%s]: %.4f seconds",
            self.label,
            self.elapsed,
        )

    def __repr__(self) -> str:
        return f"<Timer {self.label}: {self.elapsed:.4f}s>"


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "JS_RESERVED_WORDS",
    "split_words",
    "is_acronym",
    "first_upper",
    "legalize_js_identifier",
    "utf16_string_escape",
    "quote_js_string",
    "indent_lines",
    "ensure_directory",
    "write_file",
    "sha256_hex",
    "count_lines",
    "Timer",
]

logger.debug("proptypegen.utils loaded — %d public symbols.", len(__all__))
