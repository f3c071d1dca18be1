"""Data models for the vendoring engine."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Literal

ProblemStage = Literal["resolve", "package", "copy", "revision"]

# Source-file kinds copied into the vendor tree, in copy order.
# Test files are deliberately absent.
SOURCE_FILE_KINDS: tuple[tuple[str, str], ...] = (
    ("go_files", "GoFiles"),
    ("cgo_files", "CgoFiles"),
    ("ignored_go_files", "IgnoredGoFiles"),
    ("c_files", "CFiles"),
    ("cxx_files", "CXXFiles"),
    ("m_files", "MFiles"),
    ("h_files", "HFiles"),
    ("s_files", "SFiles"),
    ("swig_files", "SwigFiles"),
    ("swig_cxx_files", "SwigCXXFiles"),
    ("syso_files", "SysoFiles"),
)


class Category(enum.Enum):
    """Where a resolved package sits relative to the project being vendored."""

    STANDARD = "standard"
    LOCAL = "local"
    EXTERNALLY_VENDORED = "externally-vendored"
    VENDORABLE = "vendorable"


@dataclass(frozen=True)
class PackageError:
    """A package that failed to resolve, and the import chain that reached it."""

    err: str
    import_stack: tuple[str, ...] = ()
    pos: str = ""

    @classmethod
    def from_json(cls, record: dict[str, Any]) -> PackageError:
        return cls(
            err=record.get("Err", ""),
            import_stack=tuple(record.get("ImportStack") or ()),
            pos=record.get("Pos", ""),
        )

    def __str__(self) -> str:
        parts = [" -> ".join(self.import_stack), self.pos, self.err]
        return ": ".join(p for p in parts if p)


@dataclass(frozen=True)
class PackageDescriptor:
    """One package as reported by the metadata resolver.

    An observation, not an identity: the same import path resolved in a
    later call yields a fresh, independent descriptor.
    """

    import_path: str
    dir: str = ""
    name: str = ""
    standard: bool = False
    goroot: bool = False
    root: str = ""

    go_files: tuple[str, ...] = ()
    cgo_files: tuple[str, ...] = ()
    ignored_go_files: tuple[str, ...] = ()
    c_files: tuple[str, ...] = ()
    cxx_files: tuple[str, ...] = ()
    m_files: tuple[str, ...] = ()
    h_files: tuple[str, ...] = ()
    s_files: tuple[str, ...] = ()
    swig_files: tuple[str, ...] = ()
    swig_cxx_files: tuple[str, ...] = ()
    syso_files: tuple[str, ...] = ()

    imports: tuple[str, ...] = ()
    deps: tuple[str, ...] = ()

    incomplete: bool = False
    error: PackageError | None = None
    deps_errors: tuple[PackageError, ...] = ()

    @classmethod
    def from_json(cls, record: dict[str, Any]) -> PackageDescriptor:
        """Build a descriptor from one decoded ``go list -json`` object.

        Missing keys mean empty lists / false, matching how the tool omits
        zero values.
        """
        files = {
            attr: tuple(record.get(key) or ()) for attr, key in SOURCE_FILE_KINDS
        }
        error = record.get("Error")
        return cls(
            import_path=record.get("ImportPath", ""),
            dir=record.get("Dir", ""),
            name=record.get("Name", ""),
            standard=bool(record.get("Standard", False)),
            goroot=bool(record.get("Goroot", False)),
            root=record.get("Root", ""),
            imports=tuple(record.get("Imports") or ()),
            deps=tuple(record.get("Deps") or ()),
            incomplete=bool(record.get("Incomplete", False)),
            error=PackageError.from_json(error) if error else None,
            deps_errors=tuple(
                PackageError.from_json(e) for e in record.get("DepsErrors") or ()
            ),
            **files,
        )

    def source_files(self) -> list[str]:
        """All files to copy, flattened in kind order."""
        out: list[str] = []
        for attr, _ in SOURCE_FILE_KINDS:
            out.extend(getattr(self, attr))
        return out


@dataclass(frozen=True)
class Revision:
    """Source-control revision of a package directory."""

    identifier: str
    clean: bool = True

    @property
    def label(self) -> str:
        return self.identifier if self.clean else f"{self.identifier} (dirty)"


@dataclass(frozen=True)
class ManifestEntry:
    """One line of the manifest log."""

    revision: str
    import_path: str

    def line(self) -> str:
        return f"{self.revision}\t{self.import_path}\n"


@dataclass(frozen=True)
class WalkProblem:
    """A non-fatal error met while walking, copying or recording."""

    import_path: str
    stage: ProblemStage
    message: str


@dataclass
class WalkResult:
    """Summary of a single vendoring run."""

    copied: list[str] = field(default_factory=list)
    skipped_external: list[str] = field(default_factory=list)
    problems: list[WalkProblem] = field(default_factory=list)
    levels: int = 0
