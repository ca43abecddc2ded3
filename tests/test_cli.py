"""Tests for the command line interface."""

import json

import pytest

from pkgdmp.cli import build_arg_parser, main, parse_config

SOURCE = """// Package greet says hello.
package greet

// Hello returns a greeting. It is friendly.
func Hello() string { return "hi" }

func quiet() {}
"""


@pytest.fixture
def pkg_dir(tmp_path):
    (tmp_path / "greet.go").write_text(SOURCE)
    (tmp_path / "greet_test.go").write_text("package greet\n\nfunc TestHello() {}\n")
    return tmp_path


def test_parse_config_flags():
    cfg = parse_config(
        ["--only", "func,method", "--unexported", "--theme", "native", "--no-env", "a", "b"],
    )

    assert cfg.dirs == ["a", "b"]
    assert cfg.only == "func,method"
    assert cfg.unexported
    assert cfg.theme == "native"


def test_parse_config_env():
    cfg = parse_config(["dir"], environ={"PKGDMP_FULL_DOCS": "1", "NO_COLOR": "1"})

    assert cfg.full_docs
    assert cfg.no_highlight


def test_requires_directory():
    with pytest.raises(SystemExit):
        build_arg_parser().parse_args([])


def test_main_text(pkg_dir, capsys):
    assert main(["--no-env", "--no-highlight", str(pkg_dir)]) == 0

    out = capsys.readouterr().out
    assert "package greet" in out
    assert "// Hello returns a greeting.\nfunc Hello() string" in out
    assert "It is friendly" not in out
    assert "quiet" not in out
    assert "TestHello" not in out


def test_main_json(pkg_dir, capsys):
    assert main(["--no-env", "--json", "--unexported", "--full-docs", str(pkg_dir)]) == 0

    data = json.loads(capsys.readouterr().out)
    assert len(data) == 1
    assert data[0]["name"] == "greet"
    assert [f["name"] for f in data[0]["funcs"]] == ["Hello", "quiet"]
    assert data[0]["funcs"][0]["doc"] == "Hello returns a greeting. It is friendly."


def test_main_highlighted(pkg_dir, capsys):
    assert main(["--no-env", str(pkg_dir)]) == 0
    assert "Hello" in capsys.readouterr().out


def test_main_package_filter(pkg_dir, capsys):
    assert main(["--no-env", "--json", "--exclude-packages", "greet", str(pkg_dir)]) == 0
    assert json.loads(capsys.readouterr().out) == []


def test_main_errors(tmp_path):
    assert main(["--no-env", str(tmp_path / "missing")]) == 1
    assert main(["--no-env", "--only", "bogus", str(tmp_path)]) == 1
