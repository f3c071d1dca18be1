"""Skip reporter — nested vendored packages that are missing locally."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import TextIO

from vendorwalk.engine.classifier import unvendored_path
from vendorwalk.engine.copier import vendor_dir_for
from vendorwalk.exceptions import VendorError


class SkipReporter:
    """Collects import paths found inside another party's vendor tree.

    Lives for one run only; nothing is persisted.
    """

    def __init__(self) -> None:
        self._paths: set[str] = set()

    def note(self, import_path: str) -> None:
        self._paths.add(import_path)

    def __contains__(self, import_path: object) -> bool:
        return import_path in self._paths

    def __len__(self) -> int:
        return len(self._paths)

    def paths(self) -> list[str]:
        return sorted(self._paths)

    def missing(self, dest_root: Path) -> list[str]:
        """Skipped paths with no directory under *dest_root*.

        ``otherlib/vendor/pkgC`` is looked up as ``<dest_root>/pkgC``, where
        a direct copy on a later run would put it.
        """
        gaps: list[str] = []
        for imp in self.paths():
            target = vendor_dir_for(dest_root, unvendored_path(imp))
            try:
                os.stat(target)
            except FileNotFoundError:
                gaps.append(imp)
            except OSError as exc:
                raise VendorError(f"cannot check {target}: {exc}") from exc
        return gaps

    def report(self, dest_root: Path, out: TextIO | None = None) -> list[str]:
        """Print each gap on its own line and return them."""
        stream = out if out is not None else sys.stdout
        gaps = self.missing(dest_root)
        for imp in gaps:
            print(imp, file=stream)
        return gaps
