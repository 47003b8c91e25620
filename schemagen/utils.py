# File: schemagen/utils.py
"""
schemagen - Utility Functions & Helpers
========================================
String transformation, file I/O and timing utilities used throughout the
generation pipeline.

- Identifier conversions are decorated with ``@lru_cache(maxsize=None)``;
  the same column names are converted once per entity, DTO and validator.
- File writes go through a temporary file and an atomic rename.
- No external dependencies beyond the Python standard library.
"""

from __future__ import annotations

import functools
import hashlib
import logging
import os
import re
import tempfile
import time
from pathlib import Path
from typing import List, Optional, Tuple

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("schemagen.utils")

# ---------------------------------------------------------------------------
# Pre-compiled regex patterns (compiled once at module load)
# ---------------------------------------------------------------------------

_SEPARATOR_RE: re.Pattern[str] = re.compile(r"[ \-]")
_MULTI_UNDERSCORE_RE: re.Pattern[str] = re.compile(r"_+")
_UNDERSCORE_LOWER_RE: re.Pattern[str] = re.compile(r"_([a-z])")
_FIRST_PAREN_GROUP_RE: re.Pattern[str] = re.compile(r"\([^)]*\)")
_MULTI_SPACE_RE: re.Pattern[str] = re.compile(r"\s{2,}")
_IDENTIFIER_RE: re.Pattern[str] = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

LINE_ENDINGS: Tuple[Tuple[str, str], ...] = (
    ("lf", "\n"),
    ("crlf", "\r\n"),
)


# ---------------------------------------------------------------------------
# Cached string transformation functions
# ---------------------------------------------------------------------------


@functools.lru_cache(maxsize=None)
def camelize(name: str) -> str:
    """
    Convert a snake_case column name to camelCase.

    Spaces and hyphens count as underscores and runs of underscores
    collapse. Only a lowercase letter after an underscore is promoted, so
    upper-case segments keep their separator.

    Examples:
        >>> camelize("user_id")
        'userId'
        >>> camelize("last-login time")
        'lastLoginTime'
        >>> camelize("Order_Total")
        'order_Total'
    """
    if not name:
        return ""
    s: str = _SEPARATOR_RE.sub("_", name)
    s = _MULTI_UNDERSCORE_RE.sub("_", s)
    s = _UNDERSCORE_LOWER_RE.sub(lambda m: m.group(1).upper(), s)
    return s[0].lower() + s[1:]


@functools.lru_cache(maxsize=None)
def upper_camelize(name: str) -> str:
    """
    Convert a snake_case name to UpperCamelCase.

        >>> upper_camelize("user_profile")
        'UserProfile'
    """
    s: str = camelize(name)
    if not s:
        return ""
    return s[0].upper() + s[1:]


@functools.lru_cache(maxsize=None)
def strip_type_arguments(column_type: str) -> str:
    """
    Remove the first parenthesised argument list from a column type.

        >>> strip_type_arguments("int(11)")
        'int'
        >>> strip_type_arguments("int(10) unsigned")
        'int unsigned'
    """
    s: str = _FIRST_PAREN_GROUP_RE.sub("", column_type, count=1)
    return _MULTI_SPACE_RE.sub(" ", s).strip()


@functools.lru_cache(maxsize=None)
def type_arguments(column_type: str) -> str:
    """Return everything from the first ``(`` onwards, or an empty string."""
    pos: int = column_type.find("(")
    if pos < 0:
        return ""
    return column_type[pos:]


def is_identifier(name: str) -> bool:
    """True when *name* is usable as a class or property identifier."""
    return bool(_IDENTIFIER_RE.match(name))


def namespace_to_path(namespace: str) -> Path:
    """Turn ``App\\Entity`` into ``App/Entity``."""
    parts: List[str] = [p for p in namespace.replace("\\", "/").split("/") if p]
    return Path(*parts) if parts else Path(".")


def resolve_line_ending(name: str) -> str:
    """Map a line-ending name (``lf``/``crlf``) to its terminator."""
    for key, terminator in LINE_ENDINGS:
        if key == name.lower():
            return terminator
    raise ValueError(
        f"Unknown line ending '{name}'. Expected one of: "
        f"{', '.join(k for k, _ in LINE_ENDINGS)}."
    )


# ---------------------------------------------------------------------------
# File I/O helpers
# ---------------------------------------------------------------------------


def ensure_directory(path: Path) -> None:
    """Create directory (and parents) if it doesn't exist."""
    path.mkdir(parents=True, exist_ok=True)
    logger.debug("Ensured directory exists: %s", path)


def write_file(path: Path, content: str, atomic: bool = True) -> int:
    """
    Write *content* to *path* as UTF-8 without newline translation.

    When *atomic* is True, writes to a temporary file first then renames.

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
            os.replace(tmp_path, str(path))
        except OSError:
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
    """Return SHA-256 hex digest of a string."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def count_lines(content: str) -> int:
    """Count the number of lines in a string."""
    if not content:
        return 0
    return content.count("\n") + (1 if not content.endswith("\n") else 0)


# ---------------------------------------------------------------------------
# Timer context manager
# ---------------------------------------------------------------------------


class Timer:
    """
    Context-manager timer for profiling generation steps.

    Usage:
        with Timer("assemble entities") as t:
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
        logger.debug("Timer [%s]: %.4f seconds", self.label, self.elapsed)

    def __repr__(self) -> str:
        return f"<Timer {self.label}: {self.elapsed:.4f}s>"


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "LINE_ENDINGS",
    "camelize",
    "upper_camelize",
    "strip_type_arguments",
    "type_arguments",
    "is_identifier",
    "namespace_to_path",
    "resolve_line_ending",
    "ensure_directory",
    "write_file",
    "sha256_hex",
    "count_lines",
    "Timer",
]

logger.debug("schemagen.utils loaded — %d public symbols.", len(__all__))
