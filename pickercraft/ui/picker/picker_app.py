"""
Standalone Textual app running a single picker session.

The app is its own PickerHost: choosing an item records an OpenTarget and
exits, so the editor is launched only after the TUI has released the terminal.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from textual.app import App

from ...config.settings import PickerConfig, PickerSettings
from ...session import PickerSession
from ..protocols import PickerHost
from .picker_screen import PickerScreen, TextualPickerView

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OpenTarget:
    """File chosen in the picker."""

    path: str
    line: Optional[int] = None  # 1-based
    column: Optional[int] = None  # 0-based


class PickerApp(App[Optional[OpenTarget]]):
    """Run one picker and return the chosen file, or None when closed."""

    TITLE = "pickercraft"

    def __init__(
        self,
        picker: PickerConfig,
        settings: PickerSettings,
        host: PickerHost,
        initial_query: str = "",
    ):
        super().__init__()
        self.picker = picker
        self.picker_settings = settings
        self.picker_host = host
        self.initial_query = initial_query
        self.session: Optional[PickerSession] = None
        self._target: Optional[OpenTarget] = None
        self._exiting = False

    def on_mount(self) -> None:
        screen = PickerScreen(detect_filetype=self.detect_filetype)
        view = TextualPickerView(self, screen, on_umount=self._on_picker_umount)
        self.session = PickerSession(self.picker, self.picker_settings, view, self)
        self.session.open(self.initial_query)

    # PickerHost

    def open_file(
        self, path: str, line: Optional[int] = None, column: Optional[int] = None
    ) -> None:
        self._target = OpenTarget(path, line, column)

    def detect_filetype(self, path: str) -> Optional[str]:
        return self.picker_host.detect_filetype(path)

    def _on_picker_umount(self) -> None:
        if self._exiting:
            return
        self._exiting = True
        # open_file runs right after umount; exit once it has recorded the target
        self.call_later(self._exit_with_target)

    def _exit_with_target(self) -> None:
        if self.session is not None:
            self.session.close()
        self.exit(self._target)
