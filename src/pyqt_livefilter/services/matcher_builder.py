"""
Query matching for client-side filtering.

Turns free-text query into a predicate over records. The default behaviour:
- Split the query on whitespace into tokens
- Match ANY token (OR), case-insensitively, as an unanchored substring
- Match a record when ANY searched field's string form matches

Both steps are plain callables so callers can swap either one:

    PatternBuilder: query -> compiled pattern
    MatcherBuilder: (query, fields=..., pattern_builder=...) -> predicate
"""

import logging
import re
from typing import Any, Callable, List, Optional, Sequence

from pyqt_livefilter.core.exceptions import InvalidQueryError
from pyqt_livefilter.core.observable_collection import Record

logger = logging.getLogger(__name__)

Predicate = Callable[[Record], bool]
PatternBuilder = Callable[[str], re.Pattern]
MatcherBuilder = Callable[..., Predicate]

_WHITESPACE = re.compile(r"\s+")


def tokenize(query: Optional[str]) -> List[str]:
    """Split query into whitespace-separated tokens. Blank input gives []."""
    if not query:
        return []
    stripped = query.strip()
    if not stripped:
        return []
    return _WHITESPACE.split(stripped)


def build_pattern(query: str) -> re.Pattern:
    """Case-insensitive pattern matching any token of query literally.

    Regex metacharacters in the query are escaped, so any user text compiles.
    """
    return re.compile("|".join(re.escape(token) for token in tokenize(query)), re.IGNORECASE)


def build_raw_pattern(query: str) -> re.Pattern:
    """Case-insensitive pattern treating each token as regular-expression source.

    Opt-in for callers that want regex queries. Raises InvalidQueryError
    when a token is not a valid expression.
    """
    source = "|".join(tokenize(query))
    try:
        return re.compile(source, re.IGNORECASE)
    except re.error as e:
        raise InvalidQueryError(f"Invalid pattern {source!r}: {e}") from e


def _field_text(value: Any) -> Optional[str]:
    """String form of a field value; None for missing or None values, which never match."""
    if value is None:
        return None
    if isinstance(value, str):
        return value
    return str(value)


def build_matcher(
    query: str,
    fields: Optional[Sequence[str]] = None,
    pattern_builder: PatternBuilder = build_pattern
) -> Predicate:
    """
    Build a predicate matching records against query.

    Args:
        query: Search text from the search box
        fields: Field names to search; None searches every key of each record
        pattern_builder: Strategy turning query into a compiled pattern

    Returns:
        Function returning True when any searched field matches any token
    """
    pattern = pattern_builder(query)
    search_fields = list(fields) if fields is not None else None

    def matches(record: Record) -> bool:
        keys = search_fields if search_fields is not None else list(record.keys())
        for key in keys:
            # Missing fields never match
            text = _field_text(record.get(key))
            if text is not None and pattern.search(text):
                return True
        return False

    return matches
