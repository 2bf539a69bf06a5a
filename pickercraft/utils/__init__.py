"""Utility modules for pickercraft."""
