"""
Protocols for the picker's collaborators.

The presenter talks to a passive view and to a host that can open files.
Anything implementing these methods can stand in: the Textual screen in
``ui.picker.picker_screen`` or the test doubles in ``ui.testing``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol, Sequence, runtime_checkable

if TYPE_CHECKING:
    from ..services.result_parser import Result


@runtime_checkable
class PickerView(Protocol):
    """Passive projection of picker state."""

    def mount(self) -> None:
        """Show the picker."""
        ...

    def umount(self) -> None:
        """Tear the picker down."""
        ...

    def show_results(self, results: Sequence[Result]) -> None:
        """Replace the result list and reset the highlight to the first row."""
        ...

    def preview(self, item: Result, lines: Sequence[str]) -> None:
        """Show preview content for ``item``."""
        ...

    def set_placeholder(self, text: str) -> None:
        """Replace the result list with a single informational line."""
        ...

    def move(self, selection: int, result_count: int) -> None:
        """Highlight the 1-based ``selection``."""
        ...


@runtime_checkable
class PickerHost(Protocol):
    """Services provided by the surrounding editor or terminal."""

    def open_file(
        self, path: str, line: Optional[int] = None, column: Optional[int] = None
    ) -> None:
        """Open ``path``, optionally at a 1-based line and 0-based column."""
        ...

    def detect_filetype(self, path: str) -> Optional[str]:
        """Syntax name for ``path``, or None when unknown."""
        ...
