"""Parser package for extracting filtered declarations from Go source."""

from .symbols import Symbol, SymbolKind, UNFILTERABLE_KINDS, is_exported_ident
from .filters import (
    FilterAction,
    SymbolFilter,
    all_of,
    filter_matching_idents,
    filter_packages,
    filter_symbol_kinds,
    filter_unexported,
    filters_fingerprint,
)
from .entities import Const, ConstGroup, Field, Func, Package, TypeDef, Value
from .goast import GoPackage, build_package, load_packages, package_from_source, parse_source
from .extractor import Parser, ParserOptions, new_parser

__all__ = [
    "Symbol",
    "SymbolKind",
    "UNFILTERABLE_KINDS",
    "is_exported_ident",
    "FilterAction",
    "SymbolFilter",
    "all_of",
    "filter_matching_idents",
    "filter_packages",
    "filter_symbol_kinds",
    "filter_unexported",
    "filters_fingerprint",
    "Const",
    "ConstGroup",
    "Field",
    "Func",
    "Package",
    "TypeDef",
    "Value",
    "GoPackage",
    "build_package",
    "load_packages",
    "package_from_source",
    "parse_source",
    "Parser",
    "ParserOptions",
    "new_parser",
]
