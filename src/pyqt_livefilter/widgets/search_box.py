"""Search box widget: line edit with a clear button that only shows when there is text."""

import logging
from typing import Callable, Optional

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import QHBoxLayout, QLineEdit, QToolButton, QWidget

from pyqt_livefilter.protocols.filter_config import get_filter_config
from pyqt_livefilter.protocols.search_box import PyQtWidgetMeta, SearchBoxContract

logger = logging.getLogger(__name__)


class SearchBox(QWidget, SearchBoxContract, metaclass=PyQtWidgetMeta):
    """
    Search input for driving a ClientSideFilter.

    Signals:
        submitted(): Return pressed in the line edit
        cleared(): clear button clicked
        input_changed(str): text edited by the user (not by set_value/clear_input)

    Usage:
        box = SearchBox(placeholder="Search...")
        engine = ClientSideFilter(collection, box)
        layout.addWidget(box)
    """

    submitted = pyqtSignal()
    cleared = pyqtSignal()
    input_changed = pyqtSignal(str)

    def __init__(self, placeholder: Optional[str] = None, value: Optional[str] = None, parent=None):
        super().__init__(parent)
        if placeholder is None:
            placeholder = get_filter_config().placeholder
        self._setup_ui(placeholder)
        self._setup_connections()
        if value:
            self.line_edit.setText(value)
        self.show_clear_button_maybe()

    def _setup_ui(self, placeholder: Optional[str]):
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(2)

        self.line_edit = QLineEdit()
        if placeholder:
            self.line_edit.setPlaceholderText(placeholder)
        layout.addWidget(self.line_edit, 1)

        self.clear_button = QToolButton()
        self.clear_button.setText("×")
        self.clear_button.setToolTip("Clear search")
        layout.addWidget(self.clear_button)

    def _setup_connections(self):
        self.line_edit.textEdited.connect(self._on_text_edited)
        self.line_edit.returnPressed.connect(self.submitted.emit)
        self.clear_button.clicked.connect(lambda: self.cleared.emit())

    def _on_text_edited(self, text: str):
        self.show_clear_button_maybe()
        self.input_changed.emit(text)

    def show_clear_button_maybe(self):
        """Show the clear button when the box has text, hide it otherwise."""
        self.set_clear_button_visible(bool(self.query()))

    # ========== SearchBoxContract ==========

    def query(self) -> str:
        return self.line_edit.text()

    def set_value(self, text: Optional[str]) -> None:
        """Set the text programmatically; input_changed is not emitted."""
        self.line_edit.setText(text or "")
        self.show_clear_button_maybe()

    def clear_input(self) -> None:
        self.line_edit.clear()
        self.show_clear_button_maybe()

    def set_clear_button_visible(self, visible: bool) -> None:
        self.clear_button.setVisible(visible)

    def connect_submitted(self, callback: Callable[[], None]) -> None:
        self.submitted.connect(callback)

    def connect_cleared(self, callback: Callable[[], None]) -> None:
        self.cleared.connect(callback)

    def connect_input_changed(self, callback: Callable[[str], None]) -> None:
        self.input_changed.connect(callback)

    def disconnect_callback(self, callback: Callable) -> None:
        for signal in (self.submitted, self.cleared, self.input_changed):
            try:
                signal.disconnect(callback)
            except TypeError:
                # Signal not connected to this callback
                pass
