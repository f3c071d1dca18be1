"""Test doubles for vendorwalk — in-memory resolver, copier and revision lookup.

Usage::

    from vendorwalk.testing import FakeResolver, RecordingCopier

    resolver = FakeResolver([pkg_a, pkg_b])     # resolve from a fixed set
    copier = RecordingCopier(fail={"pkgB"})     # pkgB's copy raises OSError
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path

from vendorwalk.engine.copier import copy_tree
from vendorwalk.engine.models import PackageDescriptor, PackageError, Revision
from vendorwalk.exceptions import ResolverError, RevisionError


class FakeResolver:
    """Resolve names against a fixed set of descriptors.

    Unknown names come back as descriptors carrying a "cannot find package"
    error, like ``go list -e`` does. Every batch is kept in ``calls``.
    """

    def __init__(
        self,
        packages: Iterable[PackageDescriptor],
        *,
        fail_on_call: int | None = None,
    ) -> None:
        self.packages = {p.import_path: p for p in packages}
        self.calls: list[list[str]] = []
        self._fail_on_call = fail_on_call

    def resolve(self, names: Sequence[str]) -> list[PackageDescriptor]:
        self.calls.append(list(names))
        if self._fail_on_call is not None and len(self.calls) == self._fail_on_call:
            raise ResolverError("resolver unreachable")
        out: list[PackageDescriptor] = []
        for name in names:
            pkg = self.packages.get(name)
            if pkg is None:
                pkg = PackageDescriptor(
                    import_path=name,
                    error=PackageError(
                        err=f'cannot find package "{name}"', import_stack=(name,)
                    ),
                )
            out.append(pkg)
        return out

    @property
    def resolved(self) -> list[str]:
        """Every name passed to the resolver, in call order."""
        return [n for batch in self.calls for n in batch]


class RecordingCopier:
    """Copier that records each call and optionally fails for some packages.

    *fail* holds import paths whose copy raises ``PermissionError``. With
    ``write=True`` files are really copied via ``copy_tree``.
    """

    def __init__(self, *, fail: Iterable[str] = (), write: bool = False) -> None:
        self.calls: list[tuple[Path, Path, list[str]]] = []
        self._fail = set(fail)
        self._write = write

    def __call__(self, dest_dir: Path, source_dir: Path, file_names: Sequence[str]) -> None:
        self.calls.append((dest_dir, source_dir, list(file_names)))
        target = dest_dir.as_posix()
        if any(target.endswith("/" + imp) for imp in self._fail):
            raise PermissionError(f"permission denied: {dest_dir}")
        if self._write:
            copy_tree(dest_dir, source_dir, file_names)

    @property
    def targets(self) -> list[Path]:
        return [dest for dest, _, _ in self.calls]


class FakeRevisionLookup:
    """Map package directories to fixed revisions; unknown directories fail."""

    def __init__(self, revisions: dict[str, Revision] | None = None) -> None:
        self.revisions = dict(revisions or {})

    def __call__(self, directory: str) -> Revision:
        try:
            return self.revisions[str(directory)]
        except KeyError:
            raise RevisionError(f"no recognized source-control metadata above {directory}") from None
