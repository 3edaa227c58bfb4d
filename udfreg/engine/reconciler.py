"""
Registration reconciliation.

Loads the libraries declared in dynamic-library signature documents and
checks that every declared overload ended up in the function registry.

Usage runs in three strictly sequential phases:

    reconciler = RegistrationReconciler(registry, loader, plugin_dir)
    reconciler.ingest_file("udfs.json")          # 1. ingest (may run concurrently)
    before = registry.current_function_signatures()
    reconciler.load_all()                         # 2. load
    missing = reconciler.reconcile(before)        # 3. reconcile

``load_dynamic_functions()`` runs phases 2 and 3 in one call.
"""

import logging
import threading
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from udfreg.parser.input import read_signature_file
from udfreg.parser.signature_parser import SignatureScope, parse_signatures
from udfreg.registry.core import FunctionRegistry
from udfreg.registry.loaders import LibraryLoader
from udfreg.typing.signature import FunctionSignature, FunctionSignatureMap, SignatureMap

from .synchronized import SynchronizedMap

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SkippedItem:
    """A declared overload whose library file could not be resolved."""

    function_name: str
    sub_directory: str | None
    file_name: str | None
    candidate_path: str


@dataclass(frozen=True)
class MissingRegistration:
    """A declared overload that is not registered after loading."""

    function_name: str
    signature: FunctionSignature

    def __str__(self) -> str:
        return f"{self.function_name}{self.signature}"


@dataclass(frozen=True)
class CountMismatch:
    """Number of new registrations differs from the number of declared overloads."""

    function_name: str
    declared: int
    new_registrations: int


@dataclass
class LoadReport:
    """Outcome of the load phase."""

    loaded: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed


@dataclass
class ReconciliationReport:
    """Outcome of the reconcile phase."""

    missing: list[MissingRegistration] = field(default_factory=list)
    count_mismatches: list[CountMismatch] = field(default_factory=list)

    @property
    def discrepancies(self) -> int:
        return len(self.missing)

    @property
    def ok(self) -> bool:
        return not self.missing


class RegistrationReconciler:
    """Declared-vs-registered check for dynamically loaded function libraries."""

    def __init__(
        self,
        registry: FunctionRegistry,
        loader: LibraryLoader,
        base_directory: str | Path | None = None,
    ) -> None:
        """
        Initialize the reconciler.

        Args:
            registry: Registry the libraries register into
            loader: Loader used to open libraries and run their entry points
            base_directory: Plugin directory library paths are resolved against
        """
        self.registry = registry
        self.loader = loader
        self.base_directory = Path(base_directory) if base_directory else None
        self.default_prefix = registry.default_namespace_prefix

        # Qualified name -> declared overloads
        self._function_map: SynchronizedMap[str, list[FunctionSignature]] = SynchronizedMap()
        # Absolute library path -> entry point (last write wins)
        self._entrypoint_map: SynchronizedMap[str, str] = SynchronizedMap()

        self._skipped_items: list[SkippedItem] = []
        self._skipped_lock = threading.Lock()

        self.last_load_report: LoadReport | None = None
        self.last_reconciliation: ReconciliationReport | None = None

    # Phase 1: ingest

    def qualified_name(self, function_name: str, namespace: str | None) -> str:
        """Registry key for a function: ``namespace.name`` or ``<default prefix>name``."""
        return self.registry.qualify_name(function_name, namespace or "")

    def expected_library_path(
        self, base_directory: Path, sub_directory: str | None, file_name: str | None
    ) -> Path:
        """
        Path a declared library is looked up at.

        A file name without a suffix gets the loader's library extension
        appended; any other file name is used as is.
        """
        name = file_name or ""
        if not Path(name).suffix:
            name += self.loader.library_extension
        return base_directory / (sub_directory or "") / name

    def construct_absolute_file_path(
        self, base_directory: Path, sub_directory: str | None, file_name: str | None
    ) -> str | None:
        """
        Resolve the library file of a declared overload.

        The file name must be present and resolve to the loader's library
        extension; a file name with any other suffix is rejected.

        Returns:
            Absolute path of an existing regular file, or None
        """
        candidate = self.expected_library_path(base_directory, sub_directory, file_name)
        if (
            file_name
            and candidate.suffix == self.loader.library_extension
            and candidate.exists()
            and not candidate.is_dir()
        ):
            return str(candidate.absolute())

        logger.error(f"The file path {candidate} is invalid and will therefore not be read")
        return None

    def ingest(self, signatures: SignatureMap, base_directory: str | Path | None = None) -> int:
        """
        Add the declarations of one parsed dynamic-library document.

        Items whose library file does not exist are skipped and recorded in
        ``skipped_items``. They never reach the function map, so ``reconcile``
        does not count them.

        Args:
            signatures: Parsed document (dynamic-library scope)
            base_directory: Overrides the reconciler's base directory

        Returns:
            Number of overloads accepted
        """
        base = Path(base_directory) if base_directory else self.base_directory
        if base is None:
            raise ValueError("A base directory is required to resolve library paths")

        functions: list[tuple[str, FunctionSignature]] = []
        entrypoints: list[tuple[str, str]] = []
        skipped: list[SkippedItem] = []

        for function_name, items in signatures.items():
            for item in items:
                path = self.construct_absolute_file_path(base, item.sub_directory, item.file_name)
                if path is None:
                    skipped.append(
                        SkippedItem(
                            function_name=function_name,
                            sub_directory=item.sub_directory,
                            file_name=item.file_name,
                            candidate_path=str(
                                self.expected_library_path(base, item.sub_directory, item.file_name)
                            ),
                        )
                    )
                    continue
                functions.append((self.qualified_name(function_name, item.namespace), item.signature))
                entrypoints.append((path, item.entrypoint or self.loader.default_entrypoint))

        def add_functions(data: dict[str, list[FunctionSignature]]) -> None:
            for name, signature in functions:
                data.setdefault(name, []).append(signature)

        def add_entrypoints(data: dict[str, str]) -> None:
            for path, entrypoint in entrypoints:
                previous = data.get(path)
                if previous is not None and previous != entrypoint:
                    logger.warning(
                        f"Library {path} declares entrypoint '{entrypoint}', "
                        f"replacing '{previous}'"
                    )
                data[path] = entrypoint

        self._function_map.update_many(add_functions)
        self._entrypoint_map.update_many(add_entrypoints)
        with self._skipped_lock:
            self._skipped_items.extend(skipped)

        logger.debug(f"Ingested {len(functions)} overloads, skipped {len(skipped)}")
        return len(functions)

    def ingest_value(self, value: Any, base_directory: str | Path | None = None) -> int:
        """Parse a decoded JSON document (dynamic-library scope) and ingest it."""
        return self.ingest(parse_signatures(value, SignatureScope.DYNAMIC_LIBRARIES_UDF), base_directory)

    def ingest_file(self, file_path: str | Path, base_directory: str | Path | None = None) -> int:
        """Read a signature file (dynamic-library scope) and ingest it."""
        path = Path(file_path)
        if path.exists() and path.is_file() and path.stat().st_size == 0:
            logger.warning(f"Config file {path} is empty, nothing to ingest")
            return 0
        signatures = read_signature_file(path, SignatureScope.DYNAMIC_LIBRARIES_UDF)
        return self.ingest(signatures, base_directory)

    def ingest_many(
        self,
        file_paths: Iterable[str | Path],
        base_directory: str | Path | None = None,
        max_workers: int | None = None,
    ) -> int:
        """
        Ingest several signature files concurrently.

        Returns only after every ingest has finished. If any ingest fails,
        the first error is raised once the others are done.

        Returns:
            Total number of overloads accepted
        """
        paths = list(file_paths)
        if not paths:
            return 0

        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = [executor.submit(self.ingest_file, path, base_directory) for path in paths]

        total = 0
        first_error: BaseException | None = None
        for path, future in zip(paths, futures):
            error = future.exception()
            if error is not None:
                logger.error(f"Failed to ingest config file {path}: {error}")
                first_error = first_error or error
                continue
            total += future.result()

        if first_error is not None:
            raise first_error
        return total

    # Phase 2: load

    def load_all(self) -> LoadReport:
        """
        Load every declared library.

        Each load is independent: a failure is logged and recorded, and the
        remaining libraries are still loaded.
        """
        report = LoadReport()
        for path, entrypoint in self.get_entrypoint_map().items():
            try:
                self.loader.load(path, entrypoint)
                report.loaded.append(path)
            except Exception as e:
                logger.error(f"Failed to load library {path} with entrypoint {entrypoint}: {e}")
                report.failed[path] = str(e)

        logger.info(
            f"Library loading completed. {len(report.loaded)} loaded, {len(report.failed)} failed"
        )
        self.last_load_report = report
        return report

    # Phase 3: reconcile

    def reconcile_report(self, signatures_before: FunctionSignatureMap) -> ReconciliationReport:
        """
        Compare declared overloads with the registry after loading.

        Args:
            signatures_before: Registry snapshot taken before loading

        Returns:
            Report listing missing overloads and count mismatches
        """
        report = ReconciliationReport()
        signatures_after = self.registry.current_function_signatures()

        for function_name, declared in self.get_function_map().items():
            logger.info(f"Checking function: {function_name}")
            registered_after = signatures_after.get(function_name, set())
            registered_before = signatures_before.get(function_name, set())

            new_registrations = len(registered_after) - len(registered_before)
            if new_registrations != len(declared):
                logger.warning(
                    f"{function_name} has {len(declared)} signatures in config file, "
                    f"but {new_registrations} new registrations"
                )
                report.count_mismatches.append(
                    CountMismatch(function_name, len(declared), new_registrations)
                )

            for signature in declared:
                if signature not in registered_after:
                    logger.error(
                        f"Function {function_name} with config signature {signature} "
                        f"was not registered successfully."
                    )
                    report.missing.append(MissingRegistration(function_name, signature))

        level = logging.ERROR if report.missing else logging.INFO
        logger.log(level, f"Found {report.discrepancies} missing config registrations")
        self.last_reconciliation = report
        return report

    def reconcile(self, signatures_before: FunctionSignatureMap) -> int:
        """Return the number of declared overloads missing from the registry."""
        return self.reconcile_report(signatures_before).discrepancies

    def load_dynamic_functions(self) -> bool:
        """
        Load all declared libraries and verify their registrations.

        Returns:
            True when every declared overload is registered
        """
        signatures_before = self.registry.current_function_signatures()
        self.load_all()
        missing = self.reconcile(signatures_before)
        if missing > 0:
            logger.error(f"Config file has {missing} extra signatures that were not registered")
            return False
        return True

    # Accessors

    def get_function_map(self) -> dict[str, list[FunctionSignature]]:
        """Copy of the declared qualified-name -> overloads map."""
        with self._function_map.read() as data:
            return {name: list(signatures) for name, signatures in data.items()}

    def get_entrypoint_map(self) -> dict[str, str]:
        """Copy of the declared library-path -> entry-point map."""
        return self._entrypoint_map.snapshot()

    @property
    def skipped_items(self) -> list[SkippedItem]:
        with self._skipped_lock:
            return list(self._skipped_items)
