"""
CLI utility functions.

Pure, stateless utility functions used across CLI commands.
"""

import logging
import tomllib
from pathlib import Path
from typing import Any


def load_project_config(project_folder: str) -> dict[str, Any]:
    """
    Load project configuration from the project.toml file.

    Args:
        project_folder: Path to the project folder

    Returns:
        Dictionary containing the project configuration

    Raises:
        FileNotFoundError: If project.toml does not exist
        ValueError: If the [udf] table is missing
    """
    project_toml_path = Path(project_folder) / "project.toml"

    if not project_toml_path.exists():
        raise FileNotFoundError(f"project.toml not found in {project_folder}")

    with open(project_toml_path, "rb") as f:
        config = tomllib.load(f)

    if "udf" not in config or not isinstance(config["udf"], dict):
        raise ValueError("project.toml must contain a [udf] configuration table")

    return config


def setup_logging(verbose: bool = False) -> None:
    """
    Set up logging configuration.

    Args:
        verbose: If True, set logging level to DEBUG, otherwise INFO
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s - %(name)s - %(message)s")
