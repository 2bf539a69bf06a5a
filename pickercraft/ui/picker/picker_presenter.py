"""
Presenter for the picker.

Sits between PickerModel and a PickerView:
- debounces search requests coming from the prompt
- owns the 1-based selection and keeps the preview in step with it
- hands the chosen item to the host on open
"""

import logging
from typing import List, Optional

from ...config.constants import DEFAULT_DEBOUNCE_MS, SEARCH_PLACEHOLDER
from ...services.result_parser import Result
from ...utils.debounce import Debouncer
from ..protocols import PickerHost, PickerView
from .picker_model import PickerModel

logger = logging.getLogger(__name__)


class PickerPresenter:
    """Coordinates search, selection, preview and open/close actions."""

    def __init__(
        self,
        model: PickerModel,
        view: PickerView,
        host: PickerHost,
        debounce_ms: float = DEFAULT_DEBOUNCE_MS,
    ):
        self.model = model
        self.view = view
        self.host = host
        self.selection = 1
        self._debounced_search = Debouncer(self._do_search, debounce_ms)

    @property
    def results(self) -> List[Result]:
        return self.model.results

    def selected_item(self) -> Optional[Result]:
        """Result under the current selection, if any."""
        return self._item_at(self.selection)

    def open(self, initial_query: str = "") -> None:
        """Mount the view and show either the placeholder or a first search."""
        self.view.mount()
        self._do_search(initial_query)

    def on_search(self, pattern: str) -> None:
        """Prompt text changed. Searches run once typing pauses."""
        self._debounced_search(pattern)

    def on_move(self, selection: int) -> None:
        """Move the selection, clamped to the results, and refresh the preview."""
        count = len(self.results)
        if count == 0:
            return

        self.selection = max(1, min(selection, count))
        self.view.move(self.selection, count)
        self._show_preview(self.results[self.selection - 1])

    def on_open(self, selected: Optional[int] = None) -> None:
        """Close the picker and open the chosen result in the host."""
        item = self._item_at(self.selection if selected is None else selected)
        if item is None:
            return

        self._debounced_search.cancel()
        self.model.cancel()
        self.view.umount()

        logger.info(f"Opening {item.file}")
        if item.is_located:
            self.host.open_file(item.file, item.line, item.column - 1)
        else:
            self.host.open_file(item.file)

    def on_close(self) -> None:
        """Stop pending work and unmount. Safe to call at any time."""
        self._debounced_search.cancel()
        self.model.cancel()
        self.view.umount()

    def _do_search(self, pattern: str) -> None:
        if pattern == "":
            self.model.cancel_search()
            self.selection = 1
            self.view.set_placeholder(SEARCH_PLACEHOLDER)
            return

        logger.debug(f"Searching for {pattern!r}")
        self.model.search(pattern, self._on_results)

    def _on_results(self, results: List[Result]) -> None:
        self.selection = 1
        self.view.show_results(results)
        if results:
            self._show_preview(results[0])

    def _show_preview(self, item: Result) -> None:
        def on_content(lines: List[str]) -> None:
            self.view.preview(item, lines)

        self.model.preview(item.file, on_content)

    def _item_at(self, selection: int) -> Optional[Result]:
        if 1 <= selection <= len(self.results):
            return self.results[selection - 1]
        return None
