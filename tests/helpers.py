"""Helpers shared by pipeline-driven tests."""

from pickercraft.services.pipeline import Stage


def sh(script: str) -> Stage:
    """Stage running a fixed shell snippet."""
    return Stage("sh", ("-c", script))


def sh_query() -> Stage:
    """Stage running the query of each run as a shell snippet."""
    return Stage("sh", ("-c",), arguments_builder=lambda query: [query])


class Collector:
    """Records every ``on_done(lines, error)`` call."""

    def __init__(self):
        self.calls = []

    def __call__(self, lines, error):
        self.calls.append((list(lines), error))
