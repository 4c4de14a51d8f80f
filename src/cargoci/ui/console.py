"""Console output formatting utilities for cargoci."""

from __future__ import annotations

import sys
from typing import Optional

from ..model import Job, RunResult


class Console:
    """Centralized console output formatting."""

    def __init__(self, debug: bool = False):
        """
        Initialize console formatter.

        Args:
            debug: If True, show detailed output including stack traces
        """
        self.debug = debug

    def _emit(self, message: str = "") -> None:
        # flush so our lines land before the child process writes its own output
        print(message, flush=True)

    def print_run_started(self, project: str, workflow: str, job_count: int) -> None:
        """Print run start information."""
        self._emit("\nRUN STARTED")
        self._emit(f"Project: {project}")
        self._emit(f"Workflow: {workflow}")
        self._emit(f"Jobs: {job_count}")
        self._emit()

    def print_plan(self, job: Job) -> None:
        """Print the ordered steps of a job and its environment overlay."""
        self._emit(f"PLAN: {job.name}")
        for key, value in job.env.items():
            self._emit(f"  env {key}={value}")
        for idx, step in enumerate(job.steps, start=1):
            self._emit(f"  {idx}. {step.name}: {step.display}")

    def print_job_start(self, name: str) -> None:
        """Print job start message."""
        self._emit(f"\nJOB STARTED: {name}")

    def print_step(self, name: str, command: str) -> None:
        """Print step start message."""
        self._emit(f"STEP: {name}")
        self._emit(f"$ {command}")

    def print_step_skipped(self, name: str, command: str) -> None:
        """Print a step that was planned but not launched (dry run)."""
        self._emit(f"STEP: {name} (dry run)")
        self._emit(f"$ {command}")

    def print_failure(
        self,
        name: str,
        exit_code: int,
        hint: Optional[str] = None,
    ) -> None:
        """Print step failure message."""
        self._emit(f"STEP FAILED: {name}")
        self._emit(f"Exit code: {exit_code}")
        if hint:
            self._emit(f"Hint: {hint}")

    def print_results(self, results: list[RunResult]) -> None:
        """Print final results summary."""
        self._emit("\n" + "=" * 40)
        self._emit("RESULTS")
        self._emit("=" * 40)
        for result in results:
            status_display = "SUCCESS" if result.ok else result.status.upper()
            self._emit(f"  {result.job}: {status_display}")
            if result.failed_step:
                self._emit(f"    failed step: {result.failed_step}")

    def print_error(
        self,
        title: str,
        message: str,
        details: Optional[list[str]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        """
        Print structured error message.

        Args:
            title: Error title
            message: Main error message
            details: Optional list of detail lines
            suggestion: Optional suggestion for user
        """
        print(f"\nERROR: {title}", file=sys.stderr)
        print(f"{message}", file=sys.stderr)
        if details:
            for detail in details:
                print(f"  {detail}", file=sys.stderr)
        if suggestion:
            print(f"\n{suggestion}", file=sys.stderr)

    def print_exception(self, exc: BaseException) -> None:
        """Print exception, with full traceback only in debug mode."""
        if self.debug:
            import traceback
            traceback.print_exception(type(exc), exc, exc.__traceback__)
        else:
            print(f"Error: {exc}", file=sys.stderr)

    def print_info(self, message: str) -> None:
        """Print informational message."""
        self._emit(message)

    def print_debug(self, message: str) -> None:
        """Print debug message (only if debug mode enabled)."""
        if self.debug:
            print(f"[DEBUG] {message}", file=sys.stderr)


# Global console instance (will be initialized by CLI)
_console: Optional[Console] = None


def get_console() -> Console:
    """Get the global console instance."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_console(console: Console) -> None:
    """Set the global console instance."""
    global _console
    _console = console
