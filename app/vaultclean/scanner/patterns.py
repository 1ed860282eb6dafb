"""Filename pattern matching for cleanup classification.

Cleanable and protected rules are user-supplied regular expressions
evaluated against the bare filename with search semantics: a pattern
matches if it matches anywhere in the name. Anchor with ``^``/``$``
for whole-name matching.

An invalid pattern never matches. It is reported as a warning when
compiled and never aborts a scan.
"""

import logging
import re

logger = logging.getLogger(__name__)


def compile_pattern(source: str | None, *, label: str = "pattern") -> re.Pattern[str] | None:
    """Compile a user-supplied pattern source.

    Args:
        source: Regular expression source. Empty or None means "match nothing".
        label: Name of the setting, used in the warning message.

    Returns:
        Compiled pattern, or None if the source is empty or invalid.
    """
    if not source:
        return None

    try:
        return re.compile(source)
    except re.error as e:
        logger.warning(
            "Invalid %s pattern %r, treating it as matching nothing: %s", label, source, e
        )
        return None


def search(name: str, pattern: re.Pattern[str] | None) -> bool:
    """Check if a compiled pattern matches anywhere in a filename.

    Args:
        name: Bare filename (not a path).
        pattern: Compiled pattern, or None for "match nothing".

    Returns:
        True if the pattern is set and matches.
    """
    if pattern is None:
        return False
    return pattern.search(name) is not None


def matches(name: str, pattern_source: str | None) -> bool:
    """Compile ``pattern_source`` and test it against ``name``.

    Args:
        name: Bare filename (not a path).
        pattern_source: Regular expression source.

    Returns:
        True if the pattern is valid, non-empty, and matches.
    """
    return search(name, compile_pattern(pattern_source))


def is_valid_pattern(source: str | None) -> bool:
    """Check if a pattern source compiles (empty sources are valid)."""
    if not source:
        return True
    try:
        re.compile(source)
    except re.error:
        return False
    return True
