"""Revision lookup — find the source-control revision of a package directory."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Protocol, runtime_checkable

from vendorwalk.engine.models import Revision
from vendorwalk.exceptions import RevisionError


@runtime_checkable
class VcsBackend(Protocol):
    """Interface that every version-control backend must satisfy."""

    name: str
    marker: str

    def revision(self, directory: Path) -> Revision: ...


VCS_REGISTRY: dict[str, VcsBackend] = {}


def register_backend(backend: VcsBackend) -> None:
    """Register a backend instance by its name. Registration order is lookup order."""
    VCS_REGISTRY[backend.name] = backend


def _run(cmd: list[str], directory: Path) -> subprocess.CompletedProcess[str]:
    try:
        return subprocess.run(cmd, cwd=directory, capture_output=True, text=True)
    except OSError as exc:
        raise RevisionError(f"cannot run {cmd[0]}: {exc}") from exc


def _output(cmd: list[str], directory: Path) -> str:
    """Run a VCS command, raising RevisionError on failure."""
    proc = _run(cmd, directory)
    if proc.returncode != 0:
        raise RevisionError(
            f"{' '.join(cmd)} failed (exit {proc.returncode}): {proc.stderr.strip()}"
        )
    return proc.stdout.strip()


class GitBackend:
    name = "git"
    marker = ".git"

    def revision(self, directory: Path) -> Revision:
        commit = _output(["git", "rev-parse", "HEAD"], directory)
        clean = _run(["git", "diff-index", "--quiet", "HEAD"], directory).returncode == 0
        return Revision(commit, clean)


class MercurialBackend:
    name = "hg"
    marker = ".hg"

    def revision(self, directory: Path) -> Revision:
        node = _output(["hg", "log", "-r", ".", "--template", "{node}"], directory)
        clean = _output(["hg", "status", "-mard"], directory) == ""
        return Revision(node, clean)


class BazaarBackend:
    name = "bzr"
    marker = ".bzr"

    def revision(self, directory: Path) -> Revision:
        # "<revno> <revision-id>"
        info = _output(["bzr", "revision-info"], directory).split()
        if len(info) < 2:
            raise RevisionError(f"unexpected bzr revision-info output: {' '.join(info)!r}")
        clean = _output(["bzr", "status", "--short"], directory) == ""
        return Revision(info[1], clean)


register_backend(GitBackend())
register_backend(MercurialBackend())
register_backend(BazaarBackend())


def detect_backend(directory: Path) -> VcsBackend | None:
    """Pick the backend whose marker sits in *directory* or its nearest ancestor."""
    for candidate in (directory, *directory.parents):
        for backend in VCS_REGISTRY.values():
            if (candidate / backend.marker).exists():
                return backend
    return None


def revision_of(directory: str | Path) -> Revision:
    """Return the revision of *directory*.

    Raises ``RevisionError`` if no recognized source-control metadata is
    found or the lookup command fails.
    """
    path = Path(directory)
    backend = detect_backend(path)
    if backend is None:
        raise RevisionError(f"no recognized source-control metadata above {path}")
    return backend.revision(path)
