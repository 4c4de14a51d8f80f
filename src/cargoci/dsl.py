# dsl.py
from __future__ import annotations

from dataclasses import replace
from typing import Dict, List, Optional

from .model import Job, Step


# ---------------------------------------------------------------------
# Step helper
# ---------------------------------------------------------------------

def cmd(name: str, program: str, *args: str, cwd: str | None = None) -> Step:
    """Create a command step. Arguments are passed literally, no shell."""
    return Step(name=name, program=program, args=tuple(args), cwd=cwd)


# ---------------------------------------------------------------------
# Job helper
# ---------------------------------------------------------------------

def job(
    name: str,
    *steps: Step,  # allow: job("x", cmd(...), cmd(...))
    steps_list: Optional[List[Step]] = None,  # allow: job("x", steps_list=[...])
    env: Optional[Dict[str, str]] = None,
    cwd: str | None = None,  # default cwd applied to steps missing cwd
) -> Job:
    steps_final: List[Step] = []
    if steps_list:
        steps_final.extend(list(steps_list))
    steps_final.extend(list(steps))

    if not steps_final:
        raise ValueError(f"job({name!r}) must have at least one step")

    names = [s.name for s in steps_final]
    if len(set(names)) != len(names):
        dupes = sorted({n for n in names if names.count(n) > 1})
        raise ValueError(f"job({name!r}) has duplicate step names: {dupes}")

    if cwd is not None:
        steps_final = [s if s.cwd is not None else replace(s, cwd=cwd) for s in steps_final]

    return Job(name=name, steps=tuple(steps_final), env=env or {})


# ---------------------------------------------------------------------
# Workflow helper (single-file story)
# ---------------------------------------------------------------------

def wf(*jobs: Job) -> List[Job]:
    """
    Workflow definition helper.

    Users can write:
        from cargoci import wf, job, cmd

        def workflow():
            return wf(
                job("check", cmd("check", "cargo", "check")),
            )

    Or use JOBS directly:
        JOBS = wf(job(...), job(...))
    """
    return list(jobs)
