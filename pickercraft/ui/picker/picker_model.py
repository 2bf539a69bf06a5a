"""
Model underneath a picker.

Owns one pipeline for searching and one for previewing, each cancellable on
its own, plus the result list of the last completed search. The model keeps
no selection state; that belongs to the presenter.
"""

import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

from ...config.constants import PREVIEW_ERROR_PLACEHOLDER
from ...services.pipeline import CommandPipeline
from ...services.result_parser import Result, parse_results

logger = logging.getLogger(__name__)


class PickerModel:
    """Query-driven search and target-driven preview over command pipelines."""

    def __init__(
        self,
        pipeline: CommandPipeline,
        preview_pipeline: CommandPipeline,
        located: bool = False,
    ):
        """Initialize the model.

        Args:
            pipeline: Chain run for every search query
            preview_pipeline: Chain run for every preview target
            located: Parse search output as ``path:line:col:text`` lines
        """
        self.pipeline = pipeline
        self.preview_pipeline = preview_pipeline
        self.located = located

        self.results: List[Result] = []
        self.is_loading = False
        self.is_loading_preview = False
        self.last_error: Optional[str] = None

    @classmethod
    def from_config(
        cls,
        commands: Sequence[Dict[str, Any]],
        preview_commands: Sequence[Dict[str, Any]],
        located: bool = False,
    ) -> "PickerModel":
        return cls(
            CommandPipeline.from_config(commands),
            CommandPipeline.from_config(preview_commands),
            located=located,
        )

    def search(
        self, query: str, on_update: Callable[[List[Result]], None]
    ) -> asyncio.Task:
        """Run the search pipeline for ``query``.

        ``on_update`` receives the new result list. A failed run delivers an
        empty list; the failure message is kept in ``last_error``.
        """
        self.is_loading = True

        def on_done(lines: List[str], error: Optional[str]) -> None:
            self.is_loading = False
            self.last_error = error

            if error:
                logger.warning(f"Search for {query!r} failed: {error}")
                self.results = []
            else:
                self.results = parse_results(lines, located=self.located)

            on_update(self.results)

        return self.pipeline.run(query, on_done)

    def preview(
        self, target: str, on_content: Callable[[List[str]], None]
    ) -> asyncio.Task:
        """Run the preview pipeline for ``target`` (usually a file path)."""
        self.is_loading_preview = True

        def on_done(lines: List[str], error: Optional[str]) -> None:
            self.is_loading_preview = False
            if error:
                lines = [PREVIEW_ERROR_PLACEHOLDER, *lines]
            on_content(lines)

        return self.preview_pipeline.run(target, on_done)

    def cancel(self) -> None:
        """Cancel both pipelines."""
        self.pipeline.cancel()
        self.preview_pipeline.cancel()
        self.is_loading = False
        self.is_loading_preview = False

    def cancel_search(self) -> None:
        """Cancel both pipelines and forget the current results."""
        self.cancel()
        self.results = []
