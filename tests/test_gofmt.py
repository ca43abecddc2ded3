"""Tests for gofmt formatting."""

import shutil

import pytest

from pkgdmp.errors import FormatError
from pkgdmp.parser import Package, TypeDef
from pkgdmp.parser.gofmt import format_source, gofmt_path


def test_missing_gofmt_override(monkeypatch, tmp_path):
    """A bad gofmt path is a recoverable FormatError."""
    monkeypatch.setenv("PKGDMP_GOFMT", str(tmp_path / "no-such-gofmt"))

    assert gofmt_path() == str(tmp_path / "no-such-gofmt")
    with pytest.raises(FormatError):
        format_source("package p\n")


def test_raw_text_survives_format_error(monkeypatch, tmp_path):
    monkeypatch.setenv("PKGDMP_GOFMT", str(tmp_path / "no-such-gofmt"))
    pkg = Package(name="p", types=[TypeDef(name="S", type="struct")])

    with pytest.raises(FormatError):
        pkg.source()
    assert str(pkg) == "package p\n\ntype S struct {}\n"


@pytest.mark.skipif(shutil.which("gofmt") is None, reason="gofmt not installed")
def test_format_source(monkeypatch):
    monkeypatch.delenv("PKGDMP_GOFMT", raising=False)
    src = "package p\n\ntype T struct {\nName string\n}\n"

    assert format_source(src) == "package p\n\ntype T struct {\n\tName string\n}\n"


@pytest.mark.skipif(shutil.which("gofmt") is None, reason="gofmt not installed")
def test_format_source_rejects_invalid(monkeypatch):
    monkeypatch.delenv("PKGDMP_GOFMT", raising=False)

    with pytest.raises(FormatError):
        format_source("package p\n\nfunc (\n")
