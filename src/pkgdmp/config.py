"""Configuration for pkgdmp.

Values come from command line flags, with `PKGDMP_<FIELD>` environment
variables filling in anything left at its default.
"""

import os
from dataclasses import dataclass, field, fields
from typing import Mapping, Optional

from .errors import FilterError
from .parser import (
    FilterAction,
    ParserOptions,
    SymbolKind,
    filter_matching_idents,
    filter_packages,
    filter_symbol_kinds,
    filter_unexported,
)

ENV_PREFIX = "PKGDMP"

DEFAULT_THEME = "monokai"

TRUTHY = frozenset({"1", "true", "t", "yes"})

# Kind names accepted by --only and --exclude, keyed by their lowercase form.
KIND_NAMES = {
    "arraytype": SymbolKind.ARRAY_TYPE,
    "chantype": SymbolKind.CHAN_TYPE,
    "const": SymbolKind.CONST,
    "func": SymbolKind.FUNC,
    "functype": SymbolKind.FUNC_TYPE,
    "identtype": SymbolKind.IDENT_TYPE,
    "interface": SymbolKind.INTERFACE_TYPE,
    "maptype": SymbolKind.MAP_TYPE,
    "method": SymbolKind.METHOD,
    "struct": SymbolKind.STRUCT_TYPE,
}

# Display spelling of the accepted kind names.
KIND_FLAG_NAMES = [
    "arrayType", "chanType", "const", "func", "funcType",
    "identType", "interface", "mapType", "method", "struct",
]

# Fields never read from the environment.
_ENV_SKIP = frozenset({"dirs", "no_env"})


@dataclass
class Config:
    """Settings for one pkgdmp run."""
    dirs: list[str] = field(default_factory=list)
    matching: str = ""              # Include idents matching this regexp
    exclude_matching: str = ""      # Exclude idents matching this regexp
    only: str = ""                  # Comma separated kind names to include
    exclude: str = ""               # Comma separated kind names to exclude
    only_packages: str = ""
    exclude_packages: str = ""
    exclude_files: str = ""         # Comma separated gitignore-style patterns
    unexported: bool = False
    no_docs: bool = False
    full_docs: bool = False
    no_tags: bool = False
    no_highlight: bool = False
    theme: str = DEFAULT_THEME
    json: bool = False
    no_env: bool = False
    verbose: bool = False


def env_key(name: str) -> str:
    return f"{ENV_PREFIX}_{name.upper()}"


def is_truthy(value: str) -> bool:
    return value.strip().lower() in TRUTHY


def color_disabled(environ: Mapping[str, str]) -> bool:
    """Check the common conventions for turning off terminal colors."""
    if environ.get("CLICOLOR_FORCE", "") not in ("", "0"):
        return False
    if environ.get("NO_COLOR"):
        return True
    if is_truthy(environ.get(env_key("no_color"), "")):
        return True
    return environ.get("TERM") == "dumb"


def apply_env(cfg: Config, environ: Optional[Mapping[str, str]] = None) -> Config:
    """Fill fields still at their default from PKGDMP_* variables.

    Does nothing when cfg.no_env is set. Returns cfg for chaining.
    """
    if cfg.no_env:
        return cfg

    environ = os.environ if environ is None else environ
    defaults = Config()

    for f in fields(cfg):
        if f.name in _ENV_SKIP:
            continue
        raw = environ.get(env_key(f.name))
        if raw is None:
            continue
        if getattr(cfg, f.name) != getattr(defaults, f.name):
            continue
        if isinstance(getattr(defaults, f.name), bool):
            setattr(cfg, f.name, is_truthy(raw))
        else:
            setattr(cfg, f.name, raw)

    if color_disabled(environ):
        cfg.no_highlight = True

    return cfg


def split_list(value: str) -> list[str]:
    """Split a comma separated flag value, dropping blanks."""
    return [part.strip() for part in value.split(",") if part.strip()]


def parse_symbol_kinds(value: str) -> list[SymbolKind]:
    """Map comma separated kind names to SymbolKinds.

    Raises FilterError on an unknown name.
    """
    kinds = []
    for name in split_list(value):
        kind = KIND_NAMES.get(name.lower())
        if kind is None:
            raise FilterError(
                f"unknown symbol kind {name!r}; expected one of {', '.join(KIND_FLAG_NAMES)}"
            )
        kinds.append(kind)
    return kinds


def build_filters(cfg: Config) -> list:
    """Build the ordered filter list a config asks for."""
    filters = []

    if not cfg.unexported:
        filters.append(filter_unexported(FilterAction.EXCLUDE))

    if cfg.exclude:
        filters.append(filter_symbol_kinds(FilterAction.EXCLUDE, *parse_symbol_kinds(cfg.exclude)))
    if cfg.only:
        filters.append(filter_symbol_kinds(FilterAction.INCLUDE, *parse_symbol_kinds(cfg.only)))

    if cfg.matching:
        filters.append(filter_matching_idents(FilterAction.INCLUDE, cfg.matching))
    if cfg.exclude_matching:
        filters.append(filter_matching_idents(FilterAction.EXCLUDE, cfg.exclude_matching))

    if cfg.only_packages:
        filters.append(filter_packages(FilterAction.INCLUDE, *split_list(cfg.only_packages)))
    if cfg.exclude_packages:
        filters.append(filter_packages(FilterAction.EXCLUDE, *split_list(cfg.exclude_packages)))

    return filters


def parser_options_from_config(cfg: Config) -> ParserOptions:
    return ParserOptions(
        exclude_docs=cfg.no_docs,
        full_docs=cfg.full_docs,
        exclude_tags=cfg.no_tags,
        symbol_filters=tuple(build_filters(cfg)),
    )
