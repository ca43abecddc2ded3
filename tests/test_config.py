"""Tests for configuration and filter building."""

import pytest

from pkgdmp.config import (
    DEFAULT_THEME,
    Config,
    apply_env,
    build_filters,
    color_disabled,
    parse_symbol_kinds,
    parser_options_from_config,
    split_list,
)
from pkgdmp.errors import FilterError
from pkgdmp.parser import SymbolKind


def test_defaults():
    cfg = Config()
    assert cfg.theme == DEFAULT_THEME
    assert not cfg.unexported
    assert cfg.dirs == []


def test_env_fills_defaults():
    cfg = apply_env(Config(), {"PKGDMP_FULL_DOCS": "yes", "PKGDMP_THEME": "dracula", "PKGDMP_ONLY": "func"})

    assert cfg.full_docs is True
    assert cfg.theme == "dracula"
    assert cfg.only == "func"


def test_env_does_not_override_flags():
    cfg = apply_env(Config(theme="native", matching="^New"), {"PKGDMP_THEME": "dracula", "PKGDMP_MATCHING": "X"})

    assert cfg.theme == "native"
    assert cfg.matching == "^New"


def test_env_booleans():
    for value in ("1", "true", "T", "yes"):
        assert apply_env(Config(), {"PKGDMP_NO_DOCS": value}).no_docs is True
    for value in ("0", "false", "no", ""):
        assert apply_env(Config(), {"PKGDMP_NO_DOCS": value}).no_docs is False


def test_no_env_ignores_environment():
    cfg = apply_env(Config(no_env=True), {"PKGDMP_FULL_DOCS": "1", "NO_COLOR": "1"})
    assert not cfg.full_docs
    assert not cfg.no_highlight


def test_color_disabled():
    assert color_disabled({"NO_COLOR": "1"})
    assert color_disabled({"PKGDMP_NO_COLOR": "true"})
    assert color_disabled({"TERM": "dumb"})
    assert not color_disabled({"TERM": "xterm-256color"})
    assert not color_disabled({"NO_COLOR": "1", "CLICOLOR_FORCE": "1"})
    assert apply_env(Config(), {"TERM": "dumb"}).no_highlight


def test_split_list():
    assert split_list(" a, b ,,c ") == ["a", "b", "c"]
    assert split_list("") == []


def test_parse_symbol_kinds():
    """Kind names are case insensitive."""
    assert parse_symbol_kinds("Struct, METHOD,arrayType") == [
        SymbolKind.STRUCT_TYPE,
        SymbolKind.METHOD,
        SymbolKind.ARRAY_TYPE,
    ]


def test_parse_symbol_kinds_unknown():
    with pytest.raises(FilterError):
        parse_symbol_kinds("func,class")


def test_build_filters_order():
    cfg = Config(
        matching="^New",
        exclude_matching="Deprecated",
        only="func",
        exclude="method",
        only_packages="api",
        exclude_packages="internal",
    )

    assert [str(f) for f in build_filters(cfg)] == [
        "filterUnexported(action=Exclude)",
        "filterSymbolKinds(action=Exclude,kinds=method)",
        "filterSymbolKinds(action=Include,kinds=func)",
        "filterMatchingIdents(action=Include,pattern=^New)",
        "filterMatchingIdents(action=Exclude,pattern=Deprecated)",
        "filterPackages(action=Include,names=api)",
        "filterPackages(action=Exclude,names=internal)",
    ]


def test_build_filters_unexported():
    assert build_filters(Config(unexported=True)) == []


def test_parser_options_from_config():
    opts = parser_options_from_config(Config(no_docs=True, no_tags=True))

    assert opts.exclude_docs
    assert opts.exclude_tags
    assert not opts.full_docs
    assert len(opts.symbol_filters) == 1
    assert opts.fingerprint() == parser_options_from_config(Config(no_docs=True, no_tags=True)).fingerprint()
    assert opts.fingerprint() != parser_options_from_config(Config()).fingerprint()


def test_invalid_matching_pattern():
    with pytest.raises(FilterError):
        build_filters(Config(matching="(unclosed"))
