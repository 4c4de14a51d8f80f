# cli.py
from __future__ import annotations

import sys
from pathlib import Path

import click

from cargoci import settings
from cargoci.runner import exit_code_of, load_workflow, run_workflow
from cargoci.step_workflows.cargo import rust_workflow
from cargoci.ui.console import Console, set_console, get_console


def resolve_workflow_path(workflow_arg: str) -> Path:
    """
    Resolve a --workflow argument to an existing file.

    Raises:
        SystemExit: If the workflow file cannot be found
    """
    console = get_console()

    workflow_path = Path(workflow_arg)
    if not workflow_path.exists() and workflow_path.suffix != ".py":
        workflow_path = Path(str(workflow_path) + ".py")
    if not workflow_path.exists():
        console.print_error(
            "Workflow file not found",
            f"Could not find workflow file: {workflow_arg}",
            suggestion="Omit --workflow to run the built-in Rust checks, or point it at a file:\n  cargoci run --workflow my_workflow.py",
        )
        sys.exit(1)
    return workflow_path


@click.group(invoke_without_command=True)
@click.option(
    "--debug/--no-debug",
    default=lambda: settings.DEBUG,
    show_default="$CARGOCI_DEBUG or off",
    help="Enable debug mode (show stack traces and detailed output)",
)
@click.pass_context
def cli(ctx, debug):
    """cargoci: run the Rust build/test/doc/lint/format checks in order."""
    console = Console(debug=debug)
    set_console(console)
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug

    # bare `cargoci` behaves like `cargoci run`
    if ctx.invoked_subcommand is None:
        ctx.invoke(run)


@cli.command()
@click.option(
    "--workflow",
    default=None,
    help="Workflow file path (defaults to the built-in Rust checks)",
)
@click.option(
    "--project-root",
    default=lambda: settings.PROJECT_ROOT,
    show_default="$CARGOCI_PROJECT_ROOT or .",
    help="Directory the steps run in",
)
@click.option("--dry-run", is_flag=True, default=False, help="Print the steps without launching them")
@click.option("--print-plan/--no-print-plan", default=False, show_default=True, help="List the steps before running")
@click.pass_context
def run(ctx, workflow, project_root, dry_run, print_plan):
    """Run the workflow, stopping at the first failing step."""
    console = get_console()

    if workflow:
        workflow_path = resolve_workflow_path(workflow)

    try:
        if workflow:
            jobs = load_workflow(workflow_path)
            workflow_name = workflow_path.name
        else:
            jobs = [rust_workflow()]
            workflow_name = "built-in (rust)"

        console.print_run_started(
            project=Path(project_root).resolve().name,
            workflow=workflow_name,
            job_count=len(jobs),
        )

        if print_plan:
            for j in jobs:
                console.print_plan(j)

        results = run_workflow(jobs, project_root, dry_run=dry_run)
        console.print_results(results)

        code = exit_code_of(results)
        if code != 0:
            sys.exit(code)

    except KeyboardInterrupt:
        console.print_info("\nInterrupted by user")
        sys.exit(130)
    except Exception as e:
        console.print_exception(e)
        sys.exit(1)


if __name__ == "__main__":
    cli()
