from .dsl import cmd, job, wf
from .runner import run, run_job, run_workflow, load_workflow
from .model import Job, Step, RunResult
from .step_workflows.cargo import rust_workflow

__all__ = ["cmd", "job", "wf", "run", "run_job", "run_workflow", "load_workflow", "Job", "Step", "RunResult", "rust_workflow"]
