"""Tests for the exception hierarchy."""

from pathlib import Path

import pytest

from cyclo.exceptions import (
    AnalysisError,
    ConfigurationError,
    CycloError,
    EmptyInputError,
    FileReadError,
    FileTooLargeError,
    InvalidConfigError,
    InvalidPathError,
    MalformedPathError,
)


class TestHierarchy:
    """Every error is a CycloError."""

    def test_analysis_errors(self):
        for cls in (FileReadError, EmptyInputError, MalformedPathError):
            assert issubclass(cls, AnalysisError)
            assert issubclass(cls, CycloError)

    def test_configuration_errors(self):
        for cls in (InvalidPathError, InvalidConfigError):
            assert issubclass(cls, ConfigurationError)
            assert issubclass(cls, CycloError)


class TestMessages:
    def test_plain_message(self):
        assert str(CycloError("boom")) == "boom"

    def test_details_rendered(self):
        err = FileReadError(Path("src/a.c"), "binary content (NUL byte)")
        assert err.filepath == Path("src/a.c")
        assert err.reason == "binary content (NUL byte)"
        assert str(err) == "Cannot read file: src/a.c: binary content (NUL byte)"

    def test_empty_input_default_reason(self):
        err = EmptyInputError("/tmp/x")
        assert err.reason == "no eligible C/C++ source files"
        assert err.details["root"] == "/tmp/x"

    def test_malformed_path(self):
        err = MalformedPathError("../a.c", "proj", "path escapes the scan root")
        assert err.details == {
            "filepath": "../a.c",
            "root": "proj",
            "reason": "path escapes the scan root",
        }

    def test_invalid_config(self):
        err = InvalidConfigError("workers", 0, "must be at least 1")
        assert err.key == "workers"
        assert err.value == 0
        assert "workers" in str(err)


class TestKinds:
    """Each error family carries a stable kind tag."""

    @pytest.mark.parametrize(
        "error, kind",
        [
            (FileReadError("a.c", "binary"), "unreadable"),
            (FileTooLargeError("a.c", 4096, 0.5), "too_large"),
            (EmptyInputError("/src"), "empty_input"),
            (MalformedPathError("../a.c", "proj", "escapes"), "malformed_path"),
            (InvalidPathError(Path("/nope"), "does not exist"), "invalid_path"),
            (InvalidConfigError("workers", 0, "must be at least 1"), "invalid_config"),
            (CycloError("boom"), "error"),
        ],
    )
    def test_kind(self, error, kind):
        assert error.kind == kind
        assert error.to_dict()["kind"] == kind

    def test_to_dict(self):
        err = MalformedPathError("../a.c", "proj", "path escapes the scan root")
        assert err.to_dict() == {
            "kind": "malformed_path",
            "message": "Cannot place ../a.c under proj",
            "filepath": "../a.c",
            "root": "proj",
            "reason": "path escapes the scan root",
        }

    def test_too_large_is_a_read_error(self):
        err = FileTooLargeError(Path("big.c"), 4096, 0.5)
        assert isinstance(err, FileReadError)
        assert err.size == 4096
        assert err.reason == "larger than the 0.5 MB limit (4096 bytes)"
