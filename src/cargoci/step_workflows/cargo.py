# step_workflows/cargo.py
from __future__ import annotations

from typing import List

from ..dsl import cmd, job
from ..model import Job, Step
from .. import settings


# Value for RUSTFLAGS / RUSTDOCFLAGS: every rustc/rustdoc warning fails the build
WARNINGS_AS_ERRORS = "-D warnings"


def warnings_as_errors_env() -> dict[str, str]:
    return {
        "RUSTFLAGS": WARNINGS_AS_ERRORS,
        "RUSTDOCFLAGS": WARNINGS_AS_ERRORS,
    }


# ---------------------------------------------------------------------
# Cargo step helpers
# ---------------------------------------------------------------------

def cargo_build(
    name: str = "build",
    *,
    all_features: bool = False,
    cargo: str | None = None,
    cwd: str | None = None,
) -> Step:
    """`cargo build` across the workspace and every target."""
    args: List[str] = ["build", "--workspace", "--all-targets"]
    if all_features:
        args.append("--all-features")
    args.append("--verbose")
    return cmd(name, cargo or settings.CARGO, *args, cwd=cwd)


def cargo_test(name: str = "test", *, cargo: str | None = None, cwd: str | None = None) -> Step:
    return cmd(
        name,
        cargo or settings.CARGO,
        "test", "--workspace", "--all-targets", "--all-features", "--verbose",
        cwd=cwd,
    )


def cargo_doc(name: str = "doc", *, cargo: str | None = None, cwd: str | None = None) -> Step:
    """Docs for the examples only; dependency docs are skipped."""
    return cmd(
        name,
        cargo or settings.CARGO,
        "doc", "--examples", "--all-features", "--no-deps",
        cwd=cwd,
    )


def cargo_clippy(name: str = "clippy", *, cargo: str | None = None, cwd: str | None = None) -> Step:
    # everything after "--" goes to clippy itself, not to cargo
    return cmd(
        name,
        cargo or settings.CARGO,
        "clippy", "--workspace", "--all-targets", "--all-features", "--", *WARNINGS_AS_ERRORS.split(),
        cwd=cwd,
    )


def cargo_fmt_check(name: str = "fmt-check", *, cargo: str | None = None, cwd: str | None = None) -> Step:
    return cmd(name, cargo or settings.CARGO, "fmt", "--all", "--", "--check", cwd=cwd)


# ---------------------------------------------------------------------
# Built-in workflow
# ---------------------------------------------------------------------

def rust_workflow(cargo: str | None = None) -> Job:
    """
    The fixed Rust check sequence, in order:

        build, build-all, test, doc, clippy, fmt-check

    run with RUSTFLAGS and RUSTDOCFLAGS set to "-D warnings".
    """
    return job(
        "rust",
        cargo_build("build", cargo=cargo),
        cargo_build("build-all", all_features=True, cargo=cargo),
        cargo_test(cargo=cargo),
        cargo_doc(cargo=cargo),
        cargo_clippy(cargo=cargo),
        cargo_fmt_check(cargo=cargo),
        env=warnings_as_errors_env(),
    )
