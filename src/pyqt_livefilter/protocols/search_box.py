"""
Search box ABC contract.

Defines what ClientSideFilter needs from a search input, so any widget
(the bundled SearchBox, a toolbar line edit, a test double) can drive a filter.

Design Philosophy:
- Explicit inheritance over duck typing
- Callbacks instead of framework-specific signal names
"""

from abc import ABC, ABCMeta, abstractmethod
from typing import Callable

from PyQt6.QtCore import QObject


class SearchBoxContract(ABC):
    """
    ABC for search inputs that can drive a ClientSideFilter.

    The filter reads the query text, clears it, and subscribes to three events:
    submitted (user confirmed the query), cleared (user asked to clear),
    input_changed (text edited).
    """

    @abstractmethod
    def query(self) -> str:
        """
        Get the current query text.

        Returns:
            The raw text in the box, "" when empty.
        """
        pass

    @abstractmethod
    def clear_input(self) -> None:
        """Empty the box without emitting input_changed."""
        pass

    @abstractmethod
    def set_clear_button_visible(self, visible: bool) -> None:
        """Show or hide the clear affordance."""
        pass

    @abstractmethod
    def connect_submitted(self, callback: Callable[[], None]) -> None:
        pass

    @abstractmethod
    def connect_cleared(self, callback: Callable[[], None]) -> None:
        pass

    @abstractmethod
    def connect_input_changed(self, callback: Callable[[str], None]) -> None:
        """
        Connect a callback fired on every edit.

        Args:
            callback: Receives the new text
        """
        pass

    @abstractmethod
    def disconnect_callback(self, callback: Callable) -> None:
        """Remove callback from every event it was connected to."""
        pass


# Qt's metaclass combined with ABCMeta so QWidget subclasses can implement the contract
_QtMetaclass = type(QObject)


class PyQtWidgetMeta(_QtMetaclass, ABCMeta):
    """Metaclass for PyQt widgets that need ABC support."""
    pass
