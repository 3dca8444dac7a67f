"""Wildcard matching for workspace names.

A wildcard pattern is a plain string where every ``*`` matches any run of
characters (including none).  Everything else matches literally and the
whole name must match.  Unlike a filesystem glob, ``*`` also crosses ``/``
and there are no character classes.
"""

from __future__ import annotations

import re
from functools import lru_cache

WILDCARD = "*"


@lru_cache(maxsize=128)
def create_wildcard_regex(pattern: str) -> re.Pattern[str]:
    """Compile a wildcard pattern into an anchored, case-sensitive regex."""
    return re.compile(".*".join(re.escape(part) for part in pattern.split(WILDCARD)), re.DOTALL)


def matches(pattern: str, candidate: str) -> bool:
    """Return True if *candidate* matches the wildcard *pattern* in full."""
    return create_wildcard_regex(pattern).fullmatch(candidate) is not None
