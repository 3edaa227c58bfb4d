"""
Verify command implementation.
"""

import typer

from udfreg.cli.context import CommandContext
from udfreg.engine import RegistrationReconciler, build_reconciler


def _print_summary(reconciler: RegistrationReconciler) -> None:
    function_map = reconciler.get_function_map()
    declared = sum(len(signatures) for signatures in function_map.values())
    typer.echo(
        f"Declared {declared} signatures for {len(function_map)} functions "
        f"in {len(reconciler.get_entrypoint_map())} libraries"
    )

    skipped = reconciler.skipped_items
    if skipped:
        typer.echo(f"Skipped {len(skipped)} declarations with invalid library paths:")
        for item in skipped:
            typer.echo(f"  {item.function_name}: {item.candidate_path}")

    load_report = reconciler.last_load_report
    if load_report is not None:
        typer.echo(f"Loaded {len(load_report.loaded)} libraries, {len(load_report.failed)} failed")
        for path, error in load_report.failed.items():
            typer.echo(f"  {path}: {error}")

    reconciliation = reconciler.last_reconciliation
    if reconciliation is not None and reconciliation.missing:
        typer.echo("Missing registrations:")
        for missing in reconciliation.missing:
            typer.echo(f"  {missing}")


def cmd_verify(project_folder: str, verbose: bool = False):
    """Execute the verify command."""
    ctx = CommandContext(verbose=verbose)

    try:
        config = ctx.load_project(project_folder)
        typer.echo(f"Verifying dynamic functions in project: {ctx.project_path}")

        reconciler = build_reconciler(config)
        reconciler.ingest_many(config.config_files, max_workers=config.max_workers)
        verified = reconciler.load_dynamic_functions()
    except Exception as e:
        ctx.handle_error(e)

    _print_summary(reconciler)

    if not verified:
        error_prefix = typer.style("Verification failed: ", fg=typer.colors.RED, bold=True)
        typer.echo(
            f"{error_prefix}{reconciler.last_reconciliation.discrepancies} declared signatures "
            f"were not registered",
            err=True,
        )
        raise typer.Exit(1)

    typer.echo(typer.style("Verification passed", fg=typer.colors.GREEN, bold=True))
