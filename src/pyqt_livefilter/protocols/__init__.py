"""
Collaborator contracts and configuration.

ABC contract for search inputs, the pagination protocol and the
application-wide filter configuration.
"""

from .search_box import SearchBoxContract, PyQtWidgetMeta
from .pagination import Paginator
from .filter_config import LiveFilterConfig, set_filter_config, get_filter_config

__all__ = [
    "SearchBoxContract",
    "PyQtWidgetMeta",
    "Paginator",
    "LiveFilterConfig",
    "set_filter_config",
    "get_filter_config",
]
