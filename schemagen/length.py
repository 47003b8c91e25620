# File: schemagen/length.py
"""
schemagen - Length / Precision Deriver
=======================================
Derive the ``length`` annotation attribute from a column type string.

Temporal types get the width of their rendered value (``2024-01-01`` is 10
characters, ``2024-01-01 00:00:00.000`` is 23); everything else takes the
digits that appear in the type's arguments.
"""

from __future__ import annotations

import functools
import logging
import re
from typing import List, Optional

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("schemagen.length")

_TEMPORAL_RE: re.Pattern[str] = re.compile(r"(datetime|timestamp)(\((\d+)\))?", re.IGNORECASE)
_NON_DIGIT_RE: re.Pattern[str] = re.compile(r"\D")

DATETIME_MILLIS_LENGTH: int = 23
DATETIME_LENGTH: int = 26
DATE_LENGTH: int = 10
TIME_LENGTH: int = 8


@functools.lru_cache(maxsize=None)
def derive_length(raw_type: str) -> int:
    """
    Return the length/precision for *raw_type*, or 0 when it has none.

    Rules, first match wins:

    1. ``datetime``/``timestamp`` anywhere in the string: 23 for ``(3)``,
       26 for any other precision or none at all.
    2. Starts with ``date``: 10.
    3. Starts with ``time``: 8.
    4. Otherwise every digit in the string, concatenated.

        >>> derive_length("datetime(3)"), derive_length("timestamp")
        (23, 26)
        >>> derive_length("varchar(255)"), derive_length("int")
        (255, 0)

    Multi-argument types concatenate their digits, so ``decimal(10,2)``
    yields 102.
    """
    match: Optional[re.Match[str]] = _TEMPORAL_RE.search(raw_type)
    if match is not None:
        precision: Optional[str] = match.group(3)
        if precision is not None and int(precision) == 3:
            return DATETIME_MILLIS_LENGTH
        return DATETIME_LENGTH

    lowered: str = raw_type.strip().lower()
    if lowered.startswith("date"):
        return DATE_LENGTH
    if lowered.startswith("time"):
        return TIME_LENGTH

    digits: str = _NON_DIGIT_RE.sub("", raw_type)
    return int(digits) if digits else 0


__all__: List[str] = [
    "DATETIME_MILLIS_LENGTH",
    "DATETIME_LENGTH",
    "DATE_LENGTH",
    "TIME_LENGTH",
    "derive_length",
]

logger.debug("schemagen.length loaded — %d public symbols.", len(__all__))
