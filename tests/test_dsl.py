"""Tests for the workflow DSL helpers."""

import pytest

from cargoci.dsl import cmd, job, wf


def test_cmd_builds_literal_argv():
    step = cmd("fmt", "cargo", "fmt", "--all", "--", "--check")

    assert step.argv == ("cargo", "fmt", "--all", "--", "--check")
    assert step.cwd is None


def test_job_requires_steps():
    with pytest.raises(ValueError, match="at least one step"):
        job("empty")


def test_job_rejects_duplicate_step_names():
    with pytest.raises(ValueError, match="duplicate step names"):
        job("dupes", cmd("a", "true"), cmd("a", "false"))


def test_job_applies_default_cwd_only_to_steps_without_one():
    j = job(
        "rust",
        cmd("a", "true"),
        cmd("b", "true", cwd="crates/core"),
        cwd="crates/app",
    )

    assert [s.cwd for s in j.steps] == ["crates/app", "crates/core"]


def test_job_keeps_step_order_with_steps_list_first():
    j = job("rust", cmd("c", "true"), steps_list=[cmd("a", "true"), cmd("b", "true")])

    assert [s.name for s in j.steps] == ["a", "b", "c"]


def test_wf_returns_list_of_jobs():
    a = job("a", cmd("a", "true"))
    b = job("b", cmd("b", "true"))

    assert wf(a, b) == [a, b]
