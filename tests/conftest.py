"""Shared pytest fixtures for vendorwalk tests.

Packages are laid out on disk the way ``go list`` would report them: the
project under ``<tmp>/proj`` (the working-directory boundary) and third-party
code under ``<tmp>/gopath/src/<import path>``.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from vendorwalk.core.config import VendorConfig
from vendorwalk.engine.models import PackageDescriptor


class PackageFactory:
    def __init__(self, root: Path) -> None:
        root = root.resolve()
        self.workdir = root / "proj"
        self.gopath = root / "gopath" / "src"
        self.workdir.mkdir(parents=True)
        self.gopath.mkdir(parents=True)

    def make(
        self,
        import_path: str,
        *,
        deps: tuple[str, ...] = (),
        go_files: tuple[str, ...] | None = None,
        local_dir: str | None = None,
        standard: bool = False,
        **fields,
    ) -> PackageDescriptor:
        """Create the package's files on disk and return its descriptor."""
        if standard:
            return PackageDescriptor(import_path=import_path, standard=True, goroot=True, deps=deps)
        if local_dir is not None:
            directory = self.workdir / local_dir
        else:
            directory = self.gopath.joinpath(*import_path.split("/"))
        directory.mkdir(parents=True, exist_ok=True)
        name = import_path.rsplit("/", 1)[-1]
        files = go_files if go_files is not None else (f"{name}.go",)
        for f in files:
            (directory / f).write_text(f"package {name}\n")
        for extra in fields.get("c_files", ()) + fields.get("h_files", ()):
            (directory / extra).write_text("/* c */\n")
        return PackageDescriptor(
            import_path=import_path,
            dir=str(directory),
            name=name,
            go_files=tuple(files),
            deps=deps,
            **fields,
        )


@pytest.fixture
def pkgs(tmp_path: Path) -> PackageFactory:
    return PackageFactory(tmp_path)


@pytest.fixture
def config(pkgs: PackageFactory) -> VendorConfig:
    wd = pkgs.workdir.resolve()
    return VendorConfig(
        working_dir=wd,
        dest_root=wd / "vendor",
        log_file=wd / "vendor-log",
    )
