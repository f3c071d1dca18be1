"""Classify a resolved package relative to the project being vendored."""

from __future__ import annotations

import os
from pathlib import Path

from vendorwalk.engine.models import Category, PackageDescriptor

VENDOR_SEGMENT = "vendor"


def is_externally_vendored(import_path: str) -> bool:
    """True if any path segment of *import_path* is exactly ``vendor``.

    ``github.com/x/vendortools`` is not vendored; ``a/vendor/b`` is.
    """
    return VENDOR_SEGMENT in import_path.split("/")


def is_local(pkg: PackageDescriptor, working_dir: str | Path) -> bool:
    """True if the package directory is *working_dir* or lies beneath it.

    Both sides are compared as canonical paths, so a symlinked checkout
    matches however the resolver spells its directories. Comparison is
    separator-aware: ``/foo/barbaz`` is not under ``/foo/bar``.
    """
    if not pkg.dir:
        return False
    boundary = os.path.realpath(working_dir)
    directory = os.path.realpath(pkg.dir)
    if directory == boundary:
        return True
    prefix = boundary if boundary.endswith(os.sep) else boundary + os.sep
    return directory.startswith(prefix)


def unvendored_path(import_path: str) -> str:
    """The import path a nested vendored package would have if vendored directly.

    ``otherlib/vendor/pkgC`` -> ``pkgC``. Paths with no vendor segment are
    returned unchanged.
    """
    segments = import_path.split("/")
    if VENDOR_SEGMENT not in segments:
        return import_path
    last = len(segments) - 1 - segments[::-1].index(VENDOR_SEGMENT)
    return "/".join(segments[last + 1 :])


def classify(pkg: PackageDescriptor, working_dir: str | Path) -> Category:
    """Pure function of descriptor and boundary; never raises."""
    if pkg.standard:
        return Category.STANDARD
    if is_externally_vendored(pkg.import_path):
        return Category.EXTERNALLY_VENDORED
    if is_local(pkg, working_dir):
        return Category.LOCAL
    return Category.VENDORABLE
