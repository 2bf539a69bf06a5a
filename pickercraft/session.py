"""
One picker session: model, presenter and view built together and torn down
together. Nothing is shared between sessions.
"""

import logging

from .config.settings import PickerConfig, PickerSettings
from .ui.picker.picker_model import PickerModel
from .ui.picker.picker_presenter import PickerPresenter
from .ui.protocols import PickerHost, PickerView

logger = logging.getLogger(__name__)


class PickerSession:
    """Wires a configured picker to a view and a host."""

    def __init__(
        self,
        picker: PickerConfig,
        settings: PickerSettings,
        view: PickerView,
        host: PickerHost,
    ):
        self.name = picker.name
        self.model = PickerModel.from_config(
            picker.commands, settings.preview_commands, located=picker.located
        )
        self.presenter = PickerPresenter(
            self.model, view, host, debounce_ms=settings.debounce_ms
        )
        self.view = view
        self.closed = False

        # Views that emit events need the presenter to talk to
        if hasattr(view, "bind"):
            view.bind(self.presenter)

    def open(self, initial_query: str = "") -> None:
        logger.info(f"Opening picker session '{self.name}'")
        self.presenter.open(initial_query)

    def close(self) -> None:
        """Cancel in-flight work and unmount; later calls do nothing."""
        if self.closed:
            return
        self.closed = True
        self.presenter.on_close()
        logger.info(f"Closed picker session '{self.name}'")
