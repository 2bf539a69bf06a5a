"""Custom exception hierarchy for pickercraft.

Exception Hierarchy:
    PickercraftError (base)
    ├── PipelineError - process chain execution
    │   ├── StageFailedError
    │   └── StageSpawnError
    └── ConfigurationError - settings/configuration issues

Pipeline errors never escape a pipeline run. They are raised while a generation
executes and converted into the single ``(lines, error)`` completion at the run
boundary, so callers only ever see the error message string.

Usage:
    from pickercraft.exceptions import StageFailedError

    if returncode not in (0, 1):
        raise StageFailedError(command="rg", exit_code=returncode)
"""

from typing import Any, Optional


class PickercraftError(Exception):
    """Base exception for all pickercraft errors.

    Attributes:
        message: Human-readable error description
        context: Additional context about the error (e.g., commands, paths)
    """

    def __init__(self, message: str, **context: Any) -> None:
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context."""
        if self.context:
            context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


# =============================================================================
# Pipeline Errors
# =============================================================================


class PipelineError(PickercraftError):
    """Base exception for process chain failures."""

    pass


class StageFailedError(PipelineError):
    """A stage exited with a status other than 0 or 1."""

    def __init__(
        self,
        *,
        command: str,
        exit_code: int,
        stderr: Optional[str] = None,
        **context: Any,
    ) -> None:
        self.command = command
        self.exit_code = exit_code
        if stderr:
            context["stderr"] = stderr[:200] + "..." if len(stderr) > 200 else stderr
        super().__init__(f"Command failed: {command} (exit {exit_code})", **context)


class StageSpawnError(PipelineError):
    """A stage executable could not be started."""

    def __init__(self, *, command: str, reason: Optional[str] = None, **context: Any) -> None:
        self.command = command
        if reason:
            message = f"Cannot start {command}: {reason}"
        else:
            message = f"Command not found: {command}"
        super().__init__(message, **context)


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(PickercraftError):
    """Invalid or unreadable configuration."""

    def __init__(
        self,
        message: str = "Invalid configuration",
        *,
        path: Optional[str] = None,
        **context: Any,
    ) -> None:
        if path:
            context["path"] = path
        super().__init__(message, **context)
