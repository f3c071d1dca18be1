"""Manifest recorder — remember what was copied and log its source revision."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import structlog

from vendorwalk.engine.models import ManifestEntry, PackageDescriptor, Revision, WalkProblem
from vendorwalk.engine.revision import revision_of
from vendorwalk.exceptions import RevisionError, VendorError

log = structlog.get_logger("vendorwalk.manifest")

UNKNOWN_REVISION = "unknown"

RevisionLookup = Callable[[str], Revision]


class ManifestRecorder:
    """Accumulates copied packages for one run, keyed by import path."""

    def __init__(self, revision_lookup: RevisionLookup = revision_of) -> None:
        self._lookup = revision_lookup
        self._packages: dict[str, PackageDescriptor] = {}

    def record(self, pkg: PackageDescriptor) -> None:
        """Insert or overwrite the entry for the package's import path."""
        self._packages[pkg.import_path] = pkg

    def __contains__(self, import_path: object) -> bool:
        return import_path in self._packages

    def __len__(self) -> int:
        return len(self._packages)

    def import_paths(self) -> list[str]:
        return sorted(self._packages)

    def entries(self) -> tuple[list[ManifestEntry], list[WalkProblem]]:
        """Resolve a revision for every recorded package, sorted by import path.

        A failed lookup yields ``unknown`` and a ``revision`` problem.
        """
        entries: list[ManifestEntry] = []
        problems: list[WalkProblem] = []
        for imp in self.import_paths():
            pkg = self._packages[imp]
            try:
                label = self._lookup(pkg.dir).label
            except RevisionError as exc:
                log.warning("manifest.revision_unknown", import_path=imp, error=str(exc))
                problems.append(WalkProblem(imp, "revision", str(exc)))
                label = UNKNOWN_REVISION
            entries.append(ManifestEntry(label, imp))
        return entries, problems

    def finalize(self, path: str | Path) -> tuple[list[ManifestEntry], list[WalkProblem]]:
        """Append this run's entries to the log at *path*.

        The log is a running history: it is created if missing and never
        truncated. Raises ``VendorError`` if it cannot be written.
        """
        entries, problems = self.entries()
        try:
            with open(path, "a", encoding="utf-8") as f:
                f.writelines(e.line() for e in entries)
        except OSError as exc:
            raise VendorError(f"cannot write manifest {path}: {exc}") from exc
        log.info("manifest.written", path=str(path), entries=len(entries))
        return entries, problems
