"""Graph walker — classify every package reachable from the roots and vendor it.

The walk covers exactly two logical levels: the root names, then the
combined ``deps`` of the roots. Packages at the second level are visited
(copied, recorded, noted) but their own dependencies are not expanded;
they are assumed satisfied by that dependency's own vendoring, or picked
up on a later run.

Each level is resolved with one batched resolver call.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

import structlog

from vendorwalk.core.config import VendorConfig
from vendorwalk.engine.classifier import classify, is_local
from vendorwalk.engine.copier import TreeCopier, copy_package, copy_tree
from vendorwalk.engine.manifest import ManifestRecorder, RevisionLookup
from vendorwalk.engine.models import (
    Category,
    PackageDescriptor,
    ProblemStage,
    WalkProblem,
    WalkResult,
)
from vendorwalk.engine.resolver import GoListResolver, PackageResolver
from vendorwalk.engine.revision import revision_of
from vendorwalk.engine.skip_report import SkipReporter
from vendorwalk.exceptions import CopyError, ResolverError

log = structlog.get_logger("vendorwalk.walker")


@dataclass
class RunContext:
    """State and collaborators owned by one top-level run."""

    working_dir: Path
    dest_root: Path
    resolver: PackageResolver
    copier: TreeCopier = copy_tree
    manifest: ManifestRecorder = field(default_factory=ManifestRecorder)
    skipped: SkipReporter = field(default_factory=SkipReporter)
    result: WalkResult = field(default_factory=WalkResult)

    def problem(self, import_path: str, stage: ProblemStage, message: str) -> None:
        self.result.problems.append(WalkProblem(import_path, stage, message))


class GraphWalker:
    def __init__(self, ctx: RunContext) -> None:
        self._ctx = ctx

    def walk(self, names: Sequence[str], recurse_into_deps: bool = True) -> WalkResult:
        """Walk from *names* (import paths or source files).

        Raises ``ResolverError`` if the roots themselves cannot be resolved.
        """
        self._walk(names, recurse_into_deps, depth=0)
        return self._ctx.result

    def _walk(self, names: Sequence[str], recurse_into_deps: bool, depth: int) -> None:
        ctx = self._ctx
        try:
            packages = ctx.resolver.resolve(names)
        except ResolverError as exc:
            if depth == 0:
                raise
            log.error("walker.resolve_failed", depth=depth, names=len(names), error=str(exc))
            ctx.problem("", "resolve", str(exc))
            return
        ctx.result.levels += 1

        # Ordered union of deps; duplicates would only cost extra resolutions.
        next_batch: dict[str, None] = {}
        for pkg in packages:
            if self._visit(pkg) and recurse_into_deps:
                next_batch.update(dict.fromkeys(pkg.deps))

        if recurse_into_deps and next_batch:
            self._walk(list(next_batch), False, depth + 1)

    def _visit(self, pkg: PackageDescriptor) -> bool:
        """Apply the side effects for one package; True if its deps may be expanded."""
        ctx = self._ctx
        if pkg.error is not None:
            log.warning("walker.package_error", import_path=pkg.import_path, error=str(pkg.error))
            ctx.problem(pkg.import_path, "package", str(pkg.error))
            return False
        for dep_err in pkg.deps_errors:
            log.debug("walker.dep_error", import_path=pkg.import_path, error=str(dep_err))

        category = classify(pkg, ctx.working_dir)
        if category is Category.STANDARD:
            return False

        if category is Category.EXTERNALLY_VENDORED:
            if not is_local(pkg, ctx.working_dir):
                if pkg.import_path not in ctx.skipped:
                    ctx.result.skipped_external.append(pkg.import_path)
                ctx.skipped.note(pkg.import_path)
            return False

        if category is Category.VENDORABLE:
            try:
                target = copy_package(pkg, ctx.dest_root, ctx.copier)
            except CopyError as exc:
                log.error("walker.copy_failed", import_path=pkg.import_path, error=exc.reason)
                ctx.problem(pkg.import_path, "copy", exc.reason)
                return False
            log.debug("walker.copied", import_path=pkg.import_path, target=str(target))
            if pkg.import_path not in ctx.manifest:
                ctx.result.copied.append(pkg.import_path)
            ctx.manifest.record(pkg)

        return True


def vendor(
    config: VendorConfig,
    names: Sequence[str],
    *,
    resolver: PackageResolver | None = None,
    copier: TreeCopier = copy_tree,
    revision_lookup: RevisionLookup = revision_of,
    out: TextIO | None = None,
) -> WalkResult:
    """Run the full pipeline: walk -> skip report -> manifest append.

    Only an unresolvable root batch (``ResolverError``), an unreadable
    destination root or an unwritable manifest log raise; everything else
    lands in ``WalkResult.problems``.
    """
    ctx = RunContext(
        working_dir=config.working_dir,
        dest_root=config.dest_root,
        resolver=resolver or GoListResolver(config.working_dir, config.go_binary),
        copier=copier,
        manifest=ManifestRecorder(revision_lookup),
    )
    GraphWalker(ctx).walk(names, config.recurse_into_deps)

    ctx.skipped.report(config.dest_root, out)

    _, revision_problems = ctx.manifest.finalize(config.log_file)
    ctx.result.problems.extend(revision_problems)

    log.info(
        "vendor.done",
        copied=len(ctx.result.copied),
        skipped_external=len(ctx.result.skipped_external),
        problems=len(ctx.result.problems),
    )
    return ctx.result
