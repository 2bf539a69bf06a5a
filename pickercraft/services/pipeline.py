"""
Linear chains of external commands.

A CommandPipeline runs its stages one after another, feeding each stage's
stdout into the next stage's stdin. Every ``run()`` starts a new generation;
the previous generation's processes are terminated and anything it still
delivers is ignored. Only the current generation may ever call ``on_done``.

Exit statuses 0 and 1 let the chain continue (1 is "no matches" for grep-like
tools). Any other status ends the run with an error message.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Set, Tuple

from ..config.constants import NON_FATAL_EXIT_CODES, QUERY_PLACEHOLDER
from ..exceptions import PipelineError, StageFailedError, StageSpawnError

logger = logging.getLogger(__name__)

OnDone = Callable[[List[str], Optional[str]], None]


@dataclass(frozen=True)
class Stage:
    """One external command in a pipeline.

    ``arguments`` are fixed; ``arguments_builder`` derives extra arguments from
    the query of each run. Building argv never mutates the stage.
    """

    command: str
    arguments: Tuple[str, ...] = ()
    arguments_builder: Optional[Callable[[str], Sequence[str]]] = field(
        default=None, compare=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "arguments", tuple(self.arguments))

    def argv(self, query: Optional[str] = None) -> List[str]:
        """Full command line for a run with the given query."""
        argv = [self.command, *self.arguments]
        if self.arguments_builder is not None:
            argv.extend(self.arguments_builder(query or ""))
        return argv

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "Stage":
        """Build a stage from ``{"cmd": ..., "args": [...]}``.

        Arguments containing ``{query}`` are substituted on every run.
        """
        command = config["cmd"]
        args = tuple(config.get("args", ()))
        if not any(QUERY_PLACEHOLDER in arg for arg in args):
            return cls(command, args)

        def build(query: str) -> List[str]:
            return [arg.replace(QUERY_PLACEHOLDER, query) for arg in args]

        return cls(command, (), build)


def split_lines(output: str) -> List[str]:
    """Split captured stdout on newlines, dropping blank lines at both ends.

    Only ``\\n`` ends a line (a trailing ``\\r`` is removed); form feeds and other
    separators stay inside their line.
    """
    lines = [line[:-1] if line.endswith("\r") else line for line in output.split("\n")]
    while lines and not lines[-1].strip():
        lines.pop()
    while lines and not lines[0].strip():
        lines.pop(0)
    return lines


class CommandPipeline:
    """Reusable, cancellable process chain.

    State machine: idle -> running -> idle. A run leaves ``running`` when it
    completes, fails, is cancelled or is superseded by another ``run()``.
    """

    def __init__(self, stages: Optional[Sequence[Stage]] = None):
        self.stages: List[Stage] = list(stages or [])
        self._processes: Set[asyncio.subprocess.Process] = set()
        self._generation = 0
        self._running = False
        self._task: Optional[asyncio.Task] = None

    @classmethod
    def from_config(cls, commands: Sequence[Dict[str, Any]]) -> "CommandPipeline":
        return cls([Stage.from_config(command) for command in commands])

    @property
    def generation(self) -> int:
        """Number identifying the current run."""
        return self._generation

    def add(self, command: str, arguments: Optional[Sequence[str]] = None) -> None:
        """Append a stage with fixed arguments."""
        self.stages.append(Stage(command, tuple(arguments or ())))

    def is_running(self) -> bool:
        return self._running

    def cancel(self) -> None:
        """Abandon the run in flight. Its ``on_done`` will never be called."""
        if not self._running:
            return

        self._generation += 1
        self._kill_all()
        self._running = False
        logger.debug(f"Cancelled pipeline run, now at generation {self._generation}")

    def run(
        self,
        input: Optional[str],
        on_done: OnDone,
        *,
        query: Optional[str] = None,
    ) -> asyncio.Task:
        """Start a new generation, superseding any run in flight.

        Args:
            input: Text fed to the first stage's stdin (None for no stdin)
            on_done: Called once with ``(lines, None)`` or ``([], error)``
            query: Value handed to stage argument builders, defaults to ``input``

        Returns:
            The task executing this generation
        """
        if self._running:
            logger.debug(f"Superseding pipeline generation {self._generation}")

        self._generation += 1
        generation = self._generation

        self._kill_all()
        self._running = True

        task = asyncio.create_task(
            self._execute(generation, input, input if query is None else query, on_done)
        )
        task.add_done_callback(self._log_task_exception)
        self._task = task
        return task

    async def wait(self) -> None:
        """Wait until the most recently started generation has settled."""
        if self._task is not None:
            await self._task

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    async def _execute(
        self,
        generation: int,
        input: Optional[str],
        query: Optional[str],
        on_done: OnDone,
    ) -> None:
        try:
            output = await self._run_stages(generation, input, query)
        except PipelineError as e:
            self._fail(generation, on_done, e.message)
            return
        except Exception as e:
            logger.exception("Unexpected error while running pipeline")
            self._fail(generation, on_done, f"Pipeline error: {e}")
            return

        if output is None:
            return
        self._finish(generation, on_done, split_lines(output), None)

    async def _run_stages(
        self, generation: int, input: Optional[str], query: Optional[str]
    ) -> Optional[str]:
        """Run every stage; None means the generation went stale on the way."""
        data = input
        for stage in self.stages:
            if not self._is_current(generation):
                return None
            data = await self._run_stage(generation, stage, data, query)
            if data is None:
                return None
        return data or ""

    async def _run_stage(
        self,
        generation: int,
        stage: Stage,
        data: Optional[str],
        query: Optional[str],
    ) -> Optional[str]:
        try:
            argv = stage.argv(query)
        except Exception as e:
            raise StageSpawnError(command=stage.command, reason=f"bad arguments: {e}") from e
        logger.debug(f"Starting stage: {argv}")

        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                stdin=asyncio.subprocess.PIPE if data is not None else asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError:
            raise StageSpawnError(command=stage.command) from None
        except OSError as e:
            raise StageSpawnError(command=stage.command, reason=e.strerror or str(e)) from e
        except ValueError as e:
            # e.g. an embedded NUL byte in an argument
            raise StageSpawnError(command=stage.command, reason=str(e)) from e

        self._processes.add(process)
        if not self._is_current(generation):
            # cancelled while the process was being spawned
            self._terminate(process)

        stdout, stderr = await process.communicate(
            data.encode("utf-8", errors="replace") if data is not None else None
        )
        self._processes.discard(process)

        if not self._is_current(generation):
            return None

        if process.returncode not in NON_FATAL_EXIT_CODES:
            raise StageFailedError(
                command=stage.command,
                exit_code=process.returncode,
                stderr=stderr.decode("utf-8", errors="replace").strip(),
            )

        return stdout.decode("utf-8", errors="replace")

    def _fail(self, generation: int, on_done: OnDone, message: str) -> None:
        if not self._is_current(generation):
            return
        logger.warning(f"Pipeline failed: {message}")
        self._kill_all()
        self._finish(generation, on_done, [], message)

    def _finish(
        self,
        generation: int,
        on_done: OnDone,
        lines: List[str],
        error: Optional[str],
    ) -> None:
        if not self._is_current(generation):
            return

        self._running = False
        self._processes = set()
        on_done(lines, error)

    def _kill_all(self) -> None:
        for process in self._processes:
            self._terminate(process)
        self._processes = set()

    @staticmethod
    def _terminate(process: asyncio.subprocess.Process) -> None:
        if process.returncode is not None:
            return
        try:
            process.terminate()
        except ProcessLookupError:
            pass

    @staticmethod
    def _log_task_exception(task: asyncio.Task) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(f"Pipeline completion handler failed: {exc!r}")
