"""Dump package tool - load, filter, extract, render."""

import logging
from pathlib import Path
from typing import Iterable, Optional

from ..config import Config, parser_options_from_config, split_list
from ..errors import FormatError, PkgdmpError
from ..parser import Package, Parser, ParserOptions, load_packages

logger = logging.getLogger(__name__)


def extract_packages(
    dirs: Iterable[str],
    options: ParserOptions,
    exclude_files: Iterable[str] = (),
) -> list[Package]:
    """Extract every package found in dirs, in directory order.

    Packages rejected by a package filter are skipped before extraction.
    Raises PkgdmpError subclasses on load or extraction failure.
    """
    parser = Parser(options)
    exclude_files = list(exclude_files)
    packages = []

    for directory in dirs:
        for go_pkg in load_packages(directory, exclude_files):
            if not parser.include_package(go_pkg.name):
                logger.debug("package %s filtered out", go_pkg.name)
                continue
            packages.append(parser.package(go_pkg))

    return packages


def package_source(pkg: Package, warnings: Optional[list] = None) -> str:
    """gofmt-formatted source, or the raw text when gofmt fails."""
    try:
        return pkg.source()
    except FormatError as e:
        logger.warning("package %s: %s; using unformatted output", pkg.name, e)
        if warnings is not None:
            warnings.append(f"package {pkg.name}: {e}")
        return str(pkg)


def dump_package(
    path: str,
    matching: str = "",
    exclude_matching: str = "",
    only: str = "",
    exclude: str = "",
    unexported: bool = False,
    no_docs: bool = False,
    full_docs: bool = False,
    no_tags: bool = False,
    exclude_files: str = "",
    format: str = "text",
) -> dict:
    """Dump the declarations of the Go package(s) in a folder.

    Args:
        path: Path to a folder of Go files (supports ~ for home directory)
        matching: Regexp identifiers must match
        exclude_matching: Regexp identifiers must not match
        only: Comma separated symbol kinds to keep
        exclude: Comma separated symbol kinds to drop
        unexported: Keep unexported symbols
        no_docs: Drop doc comments
        full_docs: Keep full doc comments instead of a synopsis
        no_tags: Drop struct field tags
        exclude_files: Comma separated gitignore-style file patterns
        format: "text" for Go source, "json" for structured output

    Returns:
        Dict with the dumped packages, or an error
    """
    if format not in ("text", "json"):
        return {"success": False, "error": f"Unknown format: {format}"}

    cfg = Config(
        dirs=[path],
        matching=matching,
        exclude_matching=exclude_matching,
        only=only,
        exclude=exclude,
        unexported=unexported,
        no_docs=no_docs,
        full_docs=full_docs,
        no_tags=no_tags,
        exclude_files=exclude_files,
    )

    try:
        options = parser_options_from_config(cfg)
        packages = extract_packages(
            [str(Path(path).expanduser())],
            options,
            split_list(exclude_files),
        )
    except PkgdmpError as e:
        return {"success": False, "error": str(e)}

    result = {
        "success": True,
        "path": path,
        "package_count": len(packages),
    }

    if format == "json":
        result["packages"] = [p.to_dict() for p in packages]
        return result

    warnings: list[str] = []
    result["sources"] = [
        {"name": p.name, "source": package_source(p, warnings)}
        for p in packages
    ]
    if warnings:
        result["warnings"] = warnings

    return result
