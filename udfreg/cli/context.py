"""
Command context for shared setup across CLI commands.
"""

import traceback
from pathlib import Path

import typer

from udfreg.engine.config import LoaderConfig

from .utils import load_project_config, setup_logging


class CommandContext:
    """
    Shared context for CLI commands.

    Handles common setup: setting up logging and, for commands that operate
    on a project, loading project.toml into a LoaderConfig.
    """

    def __init__(self, project_folder: str | None = None, verbose: bool = False):
        """
        Initialize command context from parameters.

        Args:
            project_folder: Path to the project folder (None for file-only commands)
            verbose: Enable verbose output
        """
        self.verbose = verbose
        setup_logging(self.verbose)

        self.project_path: Path | None = None
        self.config: dict | None = None
        self.loader_config: LoaderConfig | None = None
        if project_folder is not None:
            self.load_project(project_folder)

    def load_project(self, project_folder: str) -> LoaderConfig:
        """Load project.toml and build the LoaderConfig from its [udf] table."""
        self.project_path = Path(project_folder).resolve()
        self.config = load_project_config(project_folder)
        self.loader_config = LoaderConfig.from_dict(self.config["udf"], self.project_path)
        return self.loader_config

    def handle_error(self, error: Exception, show_traceback: bool | None = None) -> None:
        """
        Handle errors consistently across commands.

        Args:
            error: The exception that occurred
            show_traceback: Whether to show traceback (defaults to verbose mode)
        """
        if show_traceback is None:
            show_traceback = self.verbose

        error_prefix = typer.style("Error: ", fg=typer.colors.RED, bold=True)
        typer.echo(f"{error_prefix}{error}", err=True)
        if show_traceback:
            traceback.print_exc()
        raise typer.Exit(1)
