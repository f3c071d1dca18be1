"""Package registry client — resolve import paths to package descriptors."""

from __future__ import annotations

import json
import subprocess
from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import structlog

from vendorwalk.engine.models import PackageDescriptor
from vendorwalk.exceptions import ResolverError

log = structlog.get_logger("vendorwalk.resolver")

_decoder = json.JSONDecoder()


@runtime_checkable
class PackageResolver(Protocol):
    """Interface every metadata resolver must satisfy.

    ``resolve`` takes a batch of names and returns at least one descriptor
    per resolvable name. Per-package failures are carried on the
    descriptor's ``error``; only a failure of the whole call raises.
    """

    def resolve(self, names: Sequence[str]) -> list[PackageDescriptor]: ...


def iter_json_stream(text: str) -> Iterator[dict[str, Any]]:
    """Yield each object from a stream of concatenated JSON values.

    Raises ``ValueError`` on malformed input.
    """
    idx = 0
    end = len(text)
    while True:
        while idx < end and text[idx].isspace():
            idx += 1
        if idx >= end:
            return
        obj, idx = _decoder.raw_decode(text, idx)
        if not isinstance(obj, dict):
            raise ValueError(f"expected a JSON object, got {type(obj).__name__}")
        yield obj


class GoListResolver:
    """Resolve packages with ``go list -e -json`` in one batched call."""

    def __init__(self, working_dir: Path, go_binary: str = "go") -> None:
        self._working_dir = working_dir
        self._go = go_binary

    def resolve(self, names: Sequence[str]) -> list[PackageDescriptor]:
        # With no arguments the tool lists the current directory's package.
        if not names:
            return []

        cmd = [self._go, "list", "-e", "-json", *names]
        log.debug("resolver.run", count=len(names))
        try:
            proc = subprocess.run(
                cmd,
                cwd=self._working_dir,
                capture_output=True,
                text=True,
            )
        except OSError as exc:
            raise ResolverError(f"cannot run {self._go}: {exc}") from exc

        if proc.returncode != 0:
            raise ResolverError(
                f"{self._go} list failed (exit {proc.returncode}): {proc.stderr.strip()}"
            )
        if proc.stderr.strip():
            log.warning("resolver.stderr", output=proc.stderr.strip())

        try:
            return [PackageDescriptor.from_json(r) for r in iter_json_stream(proc.stdout)]
        except ValueError as exc:
            raise ResolverError(f"cannot parse {self._go} list output: {exc}") from exc
