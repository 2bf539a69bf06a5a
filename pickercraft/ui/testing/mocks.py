"""
Mock view and host implementations for testing.

These mocks satisfy the PickerView and PickerHost protocols without Textual
and track all method calls for assertion.
"""

from typing import Dict, List, Optional, Sequence, Tuple

from ...services.result_parser import Result


class MockPickerView:
    """Mock PickerView.

    Example:
        ```python
        view = MockPickerView()
        view.show_results([Result(raw="a.py", file="a.py")])
        assert view.displayed == ["a.py"]
        ```
    """

    def __init__(self) -> None:
        self.mounted = False
        self.selection = 1
        self.results: List[Result] = []
        self.placeholder: Optional[str] = None

        # Call tracking
        self.mount_calls = 0
        self.umount_calls = 0
        self.show_results_calls: List[List[Result]] = []
        self.preview_calls: List[Tuple[Result, List[str]]] = []
        self.placeholder_calls: List[str] = []
        self.move_calls: List[Tuple[int, int]] = []

    @property
    def displayed(self) -> List[str]:
        """Lines the result list would currently show."""
        if self.placeholder is not None:
            return [self.placeholder]
        return [r.display() for r in self.results]

    @property
    def last_preview(self) -> Optional[Tuple[Result, List[str]]]:
        return self.preview_calls[-1] if self.preview_calls else None

    def mount(self) -> None:
        self.mounted = True
        self.mount_calls += 1

    def umount(self) -> None:
        self.mounted = False
        self.umount_calls += 1

    def show_results(self, results: Sequence[Result]) -> None:
        self.results = list(results)
        self.placeholder = None
        self.selection = 1
        self.show_results_calls.append(list(results))

    def preview(self, item: Result, lines: Sequence[str]) -> None:
        self.preview_calls.append((item, list(lines)))

    def set_placeholder(self, text: str) -> None:
        self.results = []
        self.placeholder = text
        self.placeholder_calls.append(text)

    def move(self, selection: int, result_count: int) -> None:
        self.selection = selection
        self.move_calls.append((selection, result_count))


class MockHost:
    """Mock PickerHost recording opened files."""

    def __init__(self, filetypes: Optional[Dict[str, str]] = None) -> None:
        self.filetypes = filetypes or {}
        self.opened: List[Tuple[str, Optional[int], Optional[int]]] = []

    def open_file(
        self, path: str, line: Optional[int] = None, column: Optional[int] = None
    ) -> None:
        self.opened.append((path, line, column))

    def detect_filetype(self, path: str) -> Optional[str]:
        return self.filetypes.get(path)
