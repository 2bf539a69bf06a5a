"""Configuration for pickercraft."""

from .settings import PickerSettings, load_settings

__all__ = [
    "PickerSettings",
    "load_settings",
]
