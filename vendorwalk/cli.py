"""CLI entry point: vendorwalk.

Usage:
    vendorwalk ./cmd/app                 # vendor app's dependencies into ./vendor
    vendorwalk --no-deps github.com/x/y  # copy the named packages only
    vendorwalk --log deps.log ./...      # append revisions to deps.log
"""

from __future__ import annotations

import sys

import click
import structlog

from vendorwalk.core.config import VendorConfig
from vendorwalk.core.logging import setup_logging
from vendorwalk.engine.walker import vendor
from vendorwalk.exceptions import VendorError

log = structlog.get_logger("vendorwalk.cli")


@click.command()
@click.argument("names", nargs=-1)
@click.option("--log", "log_file", default=None, help="File name for the list of commit ids (default: vendor-log)")
@click.option("--dest", default=None, help="Destination root (default: ./vendor)")
@click.option("--go", "go_binary", default=None, help="Go binary used to list packages")
@click.option("--no-deps", is_flag=True, help="Do not expand the roots' dependencies")
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(
    names: tuple[str, ...],
    log_file: str | None,
    dest: str | None,
    go_binary: str | None,
    no_deps: bool,
    verbose: bool,
) -> None:
    """Copy the external dependencies of NAMES into the vendor tree.

    NAMES are import paths or Go source files; the current directory's
    package is used when none are given. Externally vendored packages that
    are missing locally are printed to stdout, one per line.
    """
    setup_logging("DEBUG" if verbose else None)
    config = VendorConfig.from_env().with_overrides(
        dest_root=dest, log_file=log_file, go_binary=go_binary, no_deps=no_deps
    )

    try:
        vendor(config, list(names) or ["."])
    except VendorError as exc:
        log.error("vendor.failed", error=str(exc))
        sys.exit(1)
