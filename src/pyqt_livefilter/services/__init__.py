"""
Service layer for client-side filtering.

Query matching, shadow collection synchronization and the filter engine
that ties them to a live collection and a search box.
"""

from .matcher_builder import (
    Predicate,
    PatternBuilder,
    MatcherBuilder,
    tokenize,
    build_pattern,
    build_raw_pattern,
    build_matcher,
)
from .shadow_sync_service import ShadowSynchronizer
from .filter_engine import ClientSideFilter, FilterState

__all__ = [
    "Predicate",
    "PatternBuilder",
    "MatcherBuilder",
    "tokenize",
    "build_pattern",
    "build_raw_pattern",
    "build_matcher",
    "ShadowSynchronizer",
    "ClientSideFilter",
    "FilterState",
]
