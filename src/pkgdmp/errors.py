"""Domain-specific errors for pkgdmp.

Usage:
    from pkgdmp.errors import ExtractionError

    try:
        pkg = parser.package(go_pkg)
    except ExtractionError as e:
        print(f"Failed in {e.context}: {e.details}")
"""


class PkgdmpError(Exception):
    """Base error for pkgdmp."""


class ExtractionError(PkgdmpError):
    """Raised when a package cannot be extracted.

    This is fatal for the whole package: no partial Package is produced.

    Attributes:
        context: Declaration being processed when the failure occurred
        details: Specific error details
    """

    def __init__(self, context: str, details: str):
        self.context = context
        self.details = details
        super().__init__(f"{context}: {details}")


class FilterError(PkgdmpError):
    """Raised when a symbol filter cannot be built from its criteria."""


class FormatError(PkgdmpError):
    """Raised when rendered source cannot be passed through gofmt."""


class LoadError(PkgdmpError):
    """Raised when a directory cannot be loaded as Go packages."""
