"""
udfreg CLI Main Module

Command-line interface for parsing UDF signature documents and verifying
dynamically loaded function libraries.
"""

from typing import Any, Literal

import typer

from udfreg.cli.commands import cmd_parse, cmd_verify

# Type aliases for better type safety and IDE support
OutputFormat = Literal["text", "json", "yaml"]
ScopeName = Literal["remote", "dynamic"]


class AlphabeticalOrderGroup(typer.core.TyperGroup):
    """Custom Typer Group that lists commands in alphabetical order."""

    def list_commands(self, ctx: typer.Context) -> list[str]:
        return sorted(self.commands.keys())


def validate_format(value: str) -> OutputFormat:
    """Validate format option (text, json or yaml)."""
    if value not in ["text", "json", "yaml"]:
        raise typer.BadParameter(
            typer.style("Error: ", fg=typer.colors.RED, bold=True)
            + f"Invalid format '{value}'. Must be 'text', 'json' or 'yaml'."
        )
    return value  # type: ignore[return-value]


def validate_scope(value: str) -> ScopeName:
    """Validate signature scope option."""
    scope = value.lower()
    if scope not in ["remote", "dynamic"]:
        raise typer.BadParameter(
            typer.style("Error: ", fg=typer.colors.RED, bold=True)
            + f"Invalid scope '{value}'. Must be 'remote' or 'dynamic'."
        )
    return scope  # type: ignore[return-value]


app = typer.Typer(
    name="udfreg",
    help="udfreg - load UDF libraries and verify their registered signatures",
    add_completion=False,
    rich_markup_mode="rich",
    cls=AlphabeticalOrderGroup,
    invoke_without_command=True,
)


@app.callback()
def main_callback(ctx: typer.Context) -> None:
    """Main CLI callback - shows help when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


VERBOSE_OPTION = typer.Option(False, "-v", "--verbose", help="Enable verbose output")


def _check_required_argument(ctx: typer.Context, arg_name: str, arg_value: Any) -> None:
    """Check if a required argument is provided, show help if not."""
    if arg_value is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(0)


@app.command()
def parse(
    ctx: typer.Context,
    file_path: str | None = typer.Argument(None, help="Path to a JSON or YAML signature file"),
    scope: str = typer.Option(
        "remote",
        "--scope",
        help="Document shape: remote (udfSignatureMap) or dynamic (dynamicLibrariesUdfMap)",
        callback=validate_scope,
    ),
    output_format: str = typer.Option(
        "text", "-f", "--format", help="Output format: text, json or yaml", callback=validate_format
    ),
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Parse a signature document and print the declared signatures."""
    _check_required_argument(ctx, "file_path", file_path)
    cmd_parse(
        file_path=file_path,
        scope=scope,
        output_format=output_format,
        verbose=verbose,
    )


@app.command()
def verify(
    ctx: typer.Context,
    project_folder: str | None = typer.Argument(
        None, help="Path to the project folder containing project.toml"
    ),
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Load declared libraries and verify their registrations."""
    _check_required_argument(ctx, "project_folder", project_folder)
    cmd_verify(project_folder=project_folder, verbose=verbose)


def main() -> None:
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    main()
