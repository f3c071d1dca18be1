"""Copy a package's source files into the vendor tree."""

from __future__ import annotations

import shutil
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from vendorwalk.engine.models import PackageDescriptor
from vendorwalk.exceptions import CopyError


class TreeCopier(Protocol):
    """Copy the named files from one directory into another.

    Must create *dest_dir* (and ancestors) and overwrite existing files.
    Raises ``OSError`` on any filesystem failure.
    """

    def __call__(
        self, dest_dir: Path, source_dir: Path, file_names: Sequence[str]
    ) -> None: ...


def copy_tree(dest_dir: Path, source_dir: Path, file_names: Sequence[str]) -> None:
    dest_dir.mkdir(parents=True, exist_ok=True)
    for name in file_names:
        shutil.copyfile(source_dir / name, dest_dir / name)


def vendor_dir_for(dest_root: Path, import_path: str) -> Path:
    """Mirror the import path's segments under *dest_root*."""
    return dest_root.joinpath(*import_path.split("/"))


def copy_package(
    pkg: PackageDescriptor,
    dest_root: Path,
    copier: TreeCopier = copy_tree,
) -> Path:
    """Copy *pkg* under *dest_root* and return its vendored directory.

    Raises ``CopyError`` wrapping the underlying filesystem error.
    """
    target = vendor_dir_for(dest_root, pkg.import_path)
    try:
        copier(target, Path(pkg.dir), pkg.source_files())
    except OSError as exc:
        raise CopyError(pkg.import_path, str(exc)) from exc
    return target
