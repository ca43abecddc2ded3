"""Tools shared by the CLI and the MCP server."""

from .dump_package import dump_package, extract_packages, package_source
from .list_symbol_kinds import list_symbol_kinds

__all__ = [
    "dump_package",
    "extract_packages",
    "package_source",
    "list_symbol_kinds",
]
