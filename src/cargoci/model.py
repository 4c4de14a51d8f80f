# model.py
from __future__ import annotations

import shlex
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Tuple


@dataclass(frozen=True)
class Step:
    """A single command (step) inside a job."""
    name: str
    program: str
    args: Tuple[str, ...] = ()
    cwd: str | None = None

    def __post_init__(self) -> None:
        # a bare string would be split into characters
        if isinstance(self.args, str):
            raise TypeError(f"Step {self.name!r}: args must be a sequence of strings, not a str")
        # accept any sequence but store an immutable tuple
        object.__setattr__(self, "args", tuple(str(a) for a in self.args))

    @property
    def argv(self) -> Tuple[str, ...]:
        return (self.program, *self.args)

    @property
    def display(self) -> str:
        """Command line as a user would type it."""
        return shlex.join(self.argv)


@dataclass(frozen=True)
class Job:
    """
    An ordered list of steps plus the environment overlay they all share.

    The overlay is frozen into a read-only mapping when the job is created,
    so every step of a run sees exactly the same values.
    """
    name: str
    steps: Tuple[Step, ...]
    env: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "steps", tuple(self.steps))
        object.__setattr__(
            self, "env", MappingProxyType({k: str(v) for k, v in dict(self.env).items()})
        )


@dataclass
class RunResult:
    """Outcome of running a job (or a whole workflow)."""
    job: str
    exit_code: int = 0
    executed: list[str] = field(default_factory=list)
    failed_step: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    @property
    def status(self) -> str:
        if self.ok:
            return "ok"
        return f"failed (exit={self.exit_code})"
