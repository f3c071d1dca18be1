"""Tests for the go list registry client."""

from __future__ import annotations

import json
import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest
from structlog.testing import capture_logs

from vendorwalk.engine.models import PackageDescriptor
from vendorwalk.engine.resolver import GoListResolver, PackageResolver, iter_json_stream
from vendorwalk.exceptions import ResolverError

_RUN = "vendorwalk.engine.resolver.subprocess.run"

_STREAM = """{
\t"Dir": "/gopath/src/example.com/a",
\t"ImportPath": "example.com/a",
\t"Name": "a",
\t"GoFiles": ["a.go"],
\t"Imports": ["fmt", "example.com/b"],
\t"Deps": ["errors", "example.com/b", "fmt"]
}
{
\t"Dir": "/usr/local/go/src/fmt",
\t"ImportPath": "fmt",
\t"Name": "fmt",
\t"Goroot": true,
\t"Standard": true
}
{
\t"ImportPath": "example.com/missing",
\t"Incomplete": true,
\t"Error": {
\t\t"ImportStack": ["example.com/a", "example.com/missing"],
\t\t"Pos": "",
\t\t"Err": "cannot find package \\"example.com/missing\\""
\t}
}
"""


def _done(stdout: str = "", returncode: int = 0, stderr: str = "") -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


class TestIterJsonStream:
    def test_concatenated_objects(self):
        assert list(iter_json_stream('{"a": 1}\n{"b": 2}{"c": 3}\n')) == [
            {"a": 1},
            {"b": 2},
            {"c": 3},
        ]

    def test_empty(self):
        assert list(iter_json_stream("  \n")) == []

    def test_truncated_raises(self):
        with pytest.raises(ValueError):
            list(iter_json_stream('{"a": 1}\n{"b": '))

    def test_non_object_raises(self):
        with pytest.raises(ValueError):
            list(iter_json_stream("[1, 2]"))


class TestGoListResolver:
    def test_satisfies_protocol(self):
        assert isinstance(GoListResolver(Path("/w")), PackageResolver)

    def test_parses_stream(self):
        with patch(_RUN, return_value=_done(_STREAM)) as run:
            pkgs = GoListResolver(Path("/w")).resolve(["example.com/a"])

        cmd = run.call_args.args[0]
        assert cmd == ["go", "list", "-e", "-json", "example.com/a"]
        assert run.call_args.kwargs["cwd"] == Path("/w")

        assert [p.import_path for p in pkgs] == ["example.com/a", "fmt", "example.com/missing"]
        a, fmt, missing = pkgs
        assert a.go_files == ("a.go",)
        assert a.deps == ("errors", "example.com/b", "fmt")
        assert a.error is None
        assert fmt.standard
        assert missing.error is not None
        assert missing.error.import_stack == ("example.com/a", "example.com/missing")
        assert str(missing.error) == (
            'example.com/a -> example.com/missing: cannot find package "example.com/missing"'
        )

    def test_custom_binary(self):
        with patch(_RUN, return_value=_done("")) as run:
            GoListResolver(Path("/w"), go_binary="/opt/go/bin/go").resolve(["./..."])
        assert run.call_args.args[0][0] == "/opt/go/bin/go"

    def test_stderr_surfaces_as_warning(self):
        done = _done("", stderr="go: downloading example.com/a v1.2.0\n")
        with patch(_RUN, return_value=done), capture_logs() as logs:
            GoListResolver(Path("/w")).resolve(["example.com/a"])
        assert [e for e in logs if e["log_level"] == "warning"] == [
            {
                "event": "resolver.stderr",
                "output": "go: downloading example.com/a v1.2.0",
                "log_level": "warning",
            }
        ]

    def test_empty_batch_does_not_run(self):
        with patch(_RUN) as run:
            assert GoListResolver(Path("/w")).resolve([]) == []
        run.assert_not_called()

    def test_missing_binary_raises(self):
        with patch(_RUN, side_effect=FileNotFoundError("go")):
            with pytest.raises(ResolverError, match="cannot run go"):
                GoListResolver(Path("/w")).resolve(["x"])

    def test_nonzero_exit_raises(self):
        with patch(_RUN, return_value=_done(returncode=1, stderr="go: not a module")):
            with pytest.raises(ResolverError, match="not a module"):
                GoListResolver(Path("/w")).resolve(["x"])

    def test_garbled_output_raises(self):
        with patch(_RUN, return_value=_done("{not json")):
            with pytest.raises(ResolverError, match="cannot parse"):
                GoListResolver(Path("/w")).resolve(["x"])


class TestDescriptorFromJson:
    def test_defaults_for_omitted_fields(self):
        pkg = PackageDescriptor.from_json({"ImportPath": "x"})
        assert pkg.dir == ""
        assert not pkg.standard
        assert pkg.deps == ()
        assert pkg.error is None
        assert pkg.source_files() == []

    def test_source_files_in_kind_order(self):
        record = {
            "ImportPath": "x",
            "SysoFiles": ["z.syso"],
            "GoFiles": ["a.go"],
            "CgoFiles": ["c.go"],
            "HFiles": ["h.h"],
            "TestGoFiles": ["a_test.go"],
            "XTestGoFiles": ["x_test.go"],
        }
        pkg = PackageDescriptor.from_json(record)
        assert pkg.source_files() == ["a.go", "c.go", "h.h", "z.syso"]

    def test_deps_errors(self):
        record = {
            "ImportPath": "x",
            "DepsErrors": [{"Err": "boom", "ImportStack": ["x", "y"]}],
        }
        pkg = PackageDescriptor.from_json(json.loads(json.dumps(record)))
        assert [str(e) for e in pkg.deps_errors] == ["x -> y: boom"]
