"""pkgdmp - dump the declarations of Go packages without their bodies."""

from .errors import ExtractionError, FilterError, FormatError, LoadError, PkgdmpError
from .parser import Package, Parser, ParserOptions, SymbolKind, load_packages, new_parser

__version__ = "0.1.0"

__all__ = [
    "ExtractionError",
    "FilterError",
    "FormatError",
    "LoadError",
    "PkgdmpError",
    "Package",
    "Parser",
    "ParserOptions",
    "SymbolKind",
    "load_packages",
    "new_parser",
]
