"""
pickercraft - incremental file and text pickers built on external command chains
"""

__version__ = "0.3.0"
