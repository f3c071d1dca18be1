"""Run configuration — environment defaults plus command-line overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path

DEFAULT_LOG_FILE = "vendor-log"
DEFAULT_GO_BINARY = "go"
VENDOR_DIR_NAME = "vendor"


def _env_flag(key: str) -> bool:
    return os.environ.get(key, "").strip().lower() in ("1", "true", "yes")


@dataclass(frozen=True)
class VendorConfig:
    """Settings for one vendoring run.

    ``working_dir`` is the boundary used for "local" classification. It is
    captured once, when the config is built, and never recomputed.
    """

    working_dir: Path
    dest_root: Path
    log_file: Path
    go_binary: str = DEFAULT_GO_BINARY
    recurse_into_deps: bool = True

    @classmethod
    def from_env(cls, working_dir: str | Path | None = None) -> VendorConfig:
        wd = Path(working_dir if working_dir is not None else os.getcwd()).resolve()
        dest = os.environ.get("VENDORWALK_DEST")
        log_file = os.environ.get("VENDORWALK_LOG_FILE", DEFAULT_LOG_FILE)
        return cls(
            working_dir=wd,
            dest_root=_under(wd, dest) if dest else wd / VENDOR_DIR_NAME,
            log_file=_under(wd, log_file),
            go_binary=os.environ.get("VENDORWALK_GO", DEFAULT_GO_BINARY),
            recurse_into_deps=not _env_flag("VENDORWALK_NO_DEPS"),
        )

    def with_overrides(
        self,
        *,
        dest_root: str | Path | None = None,
        log_file: str | Path | None = None,
        go_binary: str | None = None,
        no_deps: bool = False,
    ) -> VendorConfig:
        """Return a copy with any non-empty command-line values applied."""
        changes: dict = {}
        if dest_root:
            changes["dest_root"] = _under(self.working_dir, dest_root)
        if log_file:
            changes["log_file"] = _under(self.working_dir, log_file)
        if go_binary:
            changes["go_binary"] = go_binary
        if no_deps:
            changes["recurse_into_deps"] = False
        return replace(self, **changes)


def _under(base: Path, value: str | Path) -> Path:
    """Resolve *value* relative to *base* unless it is already absolute."""
    p = Path(value)
    return p if p.is_absolute() else base / p
