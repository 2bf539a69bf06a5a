"""
Testing utilities for pickercraft.

The mocks record every call the presenter makes, so picker behaviour can be
tested without a Textual runtime:

    ```python
    from pickercraft.ui.testing import MockHost, MockPickerView

    view = MockPickerView()
    presenter = PickerPresenter(model, view, MockHost())
    presenter.on_close()
    assert view.umount_calls == 1
    ```
"""

from .mocks import MockHost, MockPickerView

__all__ = [
    "MockHost",
    "MockPickerView",
]
