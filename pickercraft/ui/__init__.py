"""Terminal UI for pickercraft."""
