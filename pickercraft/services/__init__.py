"""Service layer for pickercraft: command pipelines and output parsing."""

from .pipeline import CommandPipeline, Stage
from .result_parser import Result, parse_results

__all__ = [
    "CommandPipeline",
    "Result",
    "Stage",
    "parse_results",
]
