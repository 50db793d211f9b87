"""Base configuration class for client-side filtering.

Provides application-wide defaults for ClientSideFilter instances.
Constructor arguments always win over these defaults.
"""

from typing import Any, Callable, Optional, List
from dataclasses import dataclass

from pyqt_livefilter.core.debounce_timer import DEFAULT_WAIT_MS


@dataclass
class LiveFilterConfig:
    """Configuration for client-side filter behavior.

    Applications can subclass this to provide custom configuration.

    Attributes:
        fields: Record fields to search; None searches every field
        wait_ms: Quiet period before a search or clear runs
        matcher_builder: Strategy building a record predicate from query text
            (None uses matcher_builder.build_matcher)
        pattern_builder: Strategy compiling query text (None uses build_pattern,
            pass build_raw_pattern for regex queries)
        placeholder: Placeholder text for search boxes created by the library
    """

    fields: Optional[List[str]] = None
    wait_ms: int = DEFAULT_WAIT_MS
    matcher_builder: Optional[Callable[..., Any]] = None
    pattern_builder: Optional[Callable[[str], Any]] = None
    placeholder: Optional[str] = None


# Global config instance (set by application)
_filter_config: Optional[LiveFilterConfig] = None


def set_filter_config(config: Optional[LiveFilterConfig]) -> None:
    """Set the application-wide filter configuration.

    Args:
        config: LiveFilterConfig instance, or None to restore defaults
    """
    global _filter_config
    _filter_config = config


def get_filter_config() -> LiveFilterConfig:
    """Get the current filter configuration.

    Returns:
        Current LiveFilterConfig or default if not set
    """
    if _filter_config is None:
        return LiveFilterConfig()
    return _filter_config
