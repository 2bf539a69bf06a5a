"""Turn raw pipeline output lines into Result records.

Two modes:

- plain: every non-empty line is a file path
- located: ``path:line:column:text`` lines (ripgrep/ag ``--vimgrep`` output);
  lines of any other shape are dropped without complaint
"""

import re
from dataclasses import dataclass
from typing import Iterable, List, Optional

# Shortest path prefix followed by :line:column:
_LOCATED_RE = re.compile(r"^(?P<file>.+?):(?P<line>\d+):(?P<column>\d+):(?P<match>.*)$")


@dataclass(frozen=True)
class Result:
    """A single picker entry."""

    raw: str
    file: str
    line: int = 1  # 1-based
    column: int = 1  # 1-based
    match: Optional[str] = None

    @property
    def is_located(self) -> bool:
        return self.match is not None

    def display(self) -> str:
        """Text shown in the result list."""
        if not self.is_located:
            return self.file
        return f"{self.file}:{self.line}:{self.column}: {self.match}"


def parse_located(line: str) -> Optional[Result]:
    """Parse one ``path:line:column:text`` line, or None if it has another shape."""
    m = _LOCATED_RE.match(line)
    if not m:
        return None
    return Result(
        raw=line,
        file=m.group("file"),
        line=int(m.group("line")),
        column=int(m.group("column")),
        match=m.group("match"),
    )


def parse_results(lines: Iterable[str], located: bool = False) -> List[Result]:
    """Convert pipeline output to results, preserving order."""
    results: List[Result] = []
    for line in lines:
        if not line.strip():
            continue
        if located:
            result = parse_located(line)
            if result is not None:
                results.append(result)
        else:
            results.append(Result(raw=line, file=line))
    return results
