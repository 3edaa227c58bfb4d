"""
Configuration for dynamic function loading.

Read from the ``[udf]`` table of a project's ``project.toml``:

    [udf]
    plugin_dir = "plugins"
    config_files = ["udfs.json"]
    loader = "python"
    registry = "memory"
    default_namespace_prefix = "presto.default."
    max_workers = 4
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from udfreg.adapters import is_registry_supported, list_available_registries
from udfreg.registry.core import DEFAULT_NAMESPACE_PREFIX
from udfreg.registry.loader_registry import is_loader_supported, list_available_loaders


@dataclass
class LoaderConfig:
    """Configuration for loading and verifying function libraries."""

    plugin_dir: Path
    config_files: list[Path] = field(default_factory=list)
    loader: str = "python"
    registry: str = "memory"
    default_namespace_prefix: str = DEFAULT_NAMESPACE_PREFIX
    max_workers: int | None = None

    REQUIRED_FIELDS = ("plugin_dir", "config_files")

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any], project_folder: str | Path = ".") -> "LoaderConfig":
        """
        Create a LoaderConfig from the ``[udf]`` table.

        Relative paths are resolved against the project folder.

        Raises:
            ValueError: If required fields are missing or values are invalid
        """
        missing = [name for name in cls.REQUIRED_FIELDS if name not in config_dict]
        if missing:
            raise ValueError(f"Missing required fields in [udf] configuration: {missing}")

        cls._validate_field_types(config_dict)
        cls._validate_field_values(config_dict)

        base = Path(project_folder).resolve()
        return cls(
            plugin_dir=base / config_dict["plugin_dir"],
            config_files=[base / name for name in config_dict["config_files"]],
            loader=config_dict.get("loader", "python").lower(),
            registry=config_dict.get("registry", "memory").lower(),
            default_namespace_prefix=config_dict.get(
                "default_namespace_prefix", DEFAULT_NAMESPACE_PREFIX
            ),
            max_workers=config_dict.get("max_workers"),
        )

    @staticmethod
    def _validate_field_types(config_dict: dict[str, Any]) -> None:
        if not isinstance(config_dict["plugin_dir"], str):
            raise ValueError("plugin_dir must be a string")

        config_files = config_dict["config_files"]
        if not isinstance(config_files, list) or not all(isinstance(f, str) for f in config_files):
            raise ValueError("config_files must be a list of strings")

        for name in ("loader", "registry", "default_namespace_prefix"):
            if name in config_dict and not isinstance(config_dict[name], str):
                raise ValueError(f"{name} must be a string")

        max_workers = config_dict.get("max_workers")
        if max_workers is not None and (isinstance(max_workers, bool) or not isinstance(max_workers, int)):
            raise ValueError("max_workers must be an integer")

    @staticmethod
    def _validate_field_values(config_dict: dict[str, Any]) -> None:
        loader = config_dict.get("loader", "python")
        if not is_loader_supported(loader):
            raise ValueError(
                f"Unsupported loader '{loader}'. Supported: {', '.join(list_available_loaders())}"
            )

        registry = config_dict.get("registry", "memory")
        if not is_registry_supported(registry):
            raise ValueError(
                f"Unsupported registry '{registry}'. "
                f"Supported: {', '.join(list_available_registries())}"
            )

        max_workers = config_dict.get("max_workers")
        if max_workers is not None and max_workers <= 0:
            raise ValueError("max_workers must be positive")
