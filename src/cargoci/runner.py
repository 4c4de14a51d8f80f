# runner.py
from __future__ import annotations

import os
import runpy
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from .model import Job, RunResult, Step
from .ui.console import get_console


# Exit codes a POSIX shell reports for these cases
EXIT_COMMAND_NOT_EXECUTABLE = 126
EXIT_COMMAND_NOT_FOUND = 127
EXIT_SIGNAL_BASE = 128


@dataclass
class CIError(Exception):
    """
    Structured setup error (bad project root, unusable workflow) with enough
    context for clean CLI output without a traceback.
    """
    kind: str
    job: str
    step: str | None
    message: str
    details: dict = field(default_factory=dict)

    def __str__(self) -> str:
        lines = [f"{self.kind}: {self.message}", f"job={self.job}"]
        if self.step:
            lines.append(f"step={self.step}")
        for k, v in self.details.items():
            lines.append(f"{k}={v}")
        return "\n".join(lines)


TOOL_HINTS = {
    "cargo": "Install the Rust toolchain (https://rustup.rs) or fix PATH.",
    "rustup": "Install rustup (https://rustup.rs) or fix PATH.",
    "cargo-clippy": "Install clippy: rustup component add clippy",
    "cargo-fmt": "Install rustfmt: rustup component add rustfmt",
}


# ----------------------------------------------------------------------
# Workflow loading (local file)
# ----------------------------------------------------------------------

def load_workflow(path: str | Path) -> List[Job]:
    """
    Load a workflow from a python file path.

    The file must define either:
      - workflow() -> List[Job]
      - JOBS = [Job, ...]

    Returns:
      List[Job]
    """
    wf_path = Path(path).expanduser().resolve()
    if not wf_path.exists():
        raise FileNotFoundError(f"Workflow file not found: {wf_path}")
    if wf_path.suffix != ".py":
        raise ValueError(f"Workflow must be a .py file, got: {wf_path.name}")

    module_name = f"cargoci_workflow_{wf_path.stem}"
    globals_dict = runpy.run_path(str(wf_path), run_name=module_name)

    jobs = None
    if "workflow" in globals_dict and callable(globals_dict["workflow"]):
        jobs = globals_dict["workflow"]()
    elif "JOBS" in globals_dict:
        jobs = globals_dict["JOBS"]

    if isinstance(jobs, Job):
        jobs = [jobs]

    if not isinstance(jobs, list) or not jobs or not all(isinstance(j, Job) for j in jobs):
        raise TypeError(
            "Workflow must return/define a non-empty List[Job]. "
            "Define workflow() -> List[Job] or JOBS = [Job, ...]."
        )

    names = [j.name for j in jobs]
    if len(set(names)) != len(names):
        raise ValueError(f"Duplicate job names in workflow: {sorted({n for n in names if names.count(n) > 1})}")

    return jobs


# ----------------------------------------------------------------------
# Errors
# ----------------------------------------------------------------------

@dataclass
class StepFailure(Exception):
    job: str
    step: str
    cmd: str
    exit_code: int
    hint: Optional[str] = None

    def __str__(self) -> str:
        return f"[{self.job}] step '{self.step}' failed (exit={self.exit_code}): {self.cmd}"


# ----------------------------------------------------------------------
# Execution primitives
# ----------------------------------------------------------------------

def build_env(job: Job, base: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """Inherited environment with the job's overlay applied on top."""
    env = dict(os.environ if base is None else base)
    env.update(job.env)
    return env


def run_step(job: Job, step: Step, project_root: Path, env: Optional[Mapping[str, str]] = None) -> None:
    """
    Launch one step and wait for it.

    stdout/stderr are inherited, so the tool writes straight to the console.
    Raises StepFailure on any non-zero exit.
    """
    cwd = (project_root / (step.cwd or ".")).resolve()
    if not cwd.exists():
        raise FileNotFoundError(f"[{job.name}] step '{step.name}' cwd not found: {cwd}")

    try:
        proc = subprocess.run(
            list(step.argv),
            shell=False,
            cwd=str(cwd),
            env=dict(env) if env is not None else build_env(job),
        )
    except FileNotFoundError:
        hint = TOOL_HINTS.get(Path(step.program).name, f"Install {step.program} or fix PATH.")
        raise StepFailure(
            job=job.name,
            step=step.name,
            cmd=step.display,
            exit_code=EXIT_COMMAND_NOT_FOUND,
            hint=hint,
        )
    except PermissionError:
        raise StepFailure(
            job=job.name,
            step=step.name,
            cmd=step.display,
            exit_code=EXIT_COMMAND_NOT_EXECUTABLE,
            hint=f"{step.program} is not executable; check its permissions (chmod +x).",
        )

    code = proc.returncode
    if code < 0:
        # killed by signal N
        code = EXIT_SIGNAL_BASE - code

    if code != 0:
        raise StepFailure(job=job.name, step=step.name, cmd=step.display, exit_code=code)


def run_job(job: Job, project_root: str | Path = ".", *, dry_run: bool = False) -> RunResult:
    """
    Run every step of the job in order, stopping at the first failure.

    The result's exit code is the failing step's exit code, or 0.
    """
    console = get_console()
    root = Path(project_root).resolve()
    if not root.is_dir():
        raise CIError(
            kind="project_root_not_found",
            job=job.name,
            step=None,
            message=f"project root is not a directory: {root}",
        )

    # computed once; every step of the run sees the same environment
    env = build_env(job)
    result = RunResult(job=job.name)

    console.print_job_start(job.name)
    for step in job.steps:
        if dry_run:
            console.print_step_skipped(step.name, step.display)
            continue

        console.print_step(step.name, step.display)
        result.executed.append(step.name)
        try:
            run_step(job, step, root, env=env)
        except StepFailure as e:
            console.print_failure(e.step, e.exit_code, hint=e.hint)
            console.print_debug(str(e))
            result.exit_code = e.exit_code
            result.failed_step = e.step
            return result

    return result


def run_workflow(
    jobs: List[Job],
    project_root: str | Path = ".",
    *,
    dry_run: bool = False,
) -> List[RunResult]:
    """Run jobs one after another; a failing job ends the run."""
    results: List[RunResult] = []
    for j in jobs:
        result = run_job(j, project_root, dry_run=dry_run)
        results.append(result)
        if not result.ok:
            break
    return results


def exit_code_of(results: List[RunResult]) -> int:
    for result in results:
        if not result.ok:
            return result.exit_code
    return 0


def run(job: Job, project_root: str | Path = ".") -> int:
    """Run a single job and return its exit code."""
    return run_job(job, project_root).exit_code
