"""
Registration engine: declared-state ingestion, library loading and reconciliation.
"""

from udfreg.adapters import get_registry
from udfreg.registry.loader_registry import get_loader

from .config import LoaderConfig
from .reconciler import (
    CountMismatch,
    LoadReport,
    MissingRegistration,
    ReconciliationReport,
    RegistrationReconciler,
    SkippedItem,
)
from .synchronized import ReadWriteLock, SynchronizedMap


def build_reconciler(config: LoaderConfig) -> RegistrationReconciler:
    """Create a registry, loader and reconciler from a LoaderConfig."""
    registry = get_registry(config.registry, config.default_namespace_prefix)
    loader = get_loader(config.loader, registry)
    return RegistrationReconciler(registry, loader, config.plugin_dir)


__all__ = [
    "LoaderConfig",
    "RegistrationReconciler",
    "build_reconciler",
    "LoadReport",
    "ReconciliationReport",
    "MissingRegistration",
    "CountMismatch",
    "SkippedItem",
    "SynchronizedMap",
    "ReadWriteLock",
]
