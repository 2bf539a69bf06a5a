"""
Picker - incremental search over external command chains.

Provides:
- PickerModel: search and preview pipelines plus the current results
- PickerPresenter: debounced search, selection and preview coordination
- PickerScreen / TextualPickerView: Textual screen and the PickerView adapter over it
"""

from .picker_model import PickerModel
from .picker_presenter import PickerPresenter

__all__ = [
    "PickerModel",
    "PickerPresenter",
]
