"""Command line interface: dump Go package declarations to stdout."""

import argparse
import importlib.metadata
import json
import logging
import sys
from typing import Optional, Sequence

from rich.console import Console
from rich.syntax import Syntax

from .config import KIND_FLAG_NAMES, Config, apply_env, parser_options_from_config, split_list
from .errors import PkgdmpError
from .tools.dump_package import extract_packages, package_source

logger = logging.getLogger(__name__)


def version() -> str:
    try:
        return importlib.metadata.version("pkgdmp")
    except importlib.metadata.PackageNotFoundError:
        from . import __version__
        return __version__


def build_arg_parser() -> argparse.ArgumentParser:
    kinds = ", ".join(KIND_FLAG_NAMES)

    parser = argparse.ArgumentParser(
        prog="pkgdmp",
        description="Print the declarations of Go packages without function bodies.",
    )
    parser.add_argument("dirs", nargs="+", metavar="DIRECTORY", help="Directory holding a Go package.")
    parser.add_argument("--matching", default="", help="Only include identifiers matching this regexp.")
    parser.add_argument("--exclude-matching", default="", help="Exclude identifiers matching this regexp.")
    parser.add_argument("--unexported", action="store_true", help="Include unexported symbols.")
    parser.add_argument("--only", default="", help=f"Comma separated symbol kinds to include ({kinds}).")
    parser.add_argument("--exclude", default="", help=f"Comma separated symbol kinds to exclude ({kinds}).")
    parser.add_argument("--only-packages", default="", help="Comma separated package names to include.")
    parser.add_argument("--exclude-packages", default="", help="Comma separated package names to exclude.")
    parser.add_argument(
        "--exclude-files",
        default="",
        help="Comma separated gitignore-style patterns of files to skip (test files are always skipped).",
    )
    parser.add_argument("--no-docs", action="store_true", help="Omit doc comments.")
    parser.add_argument("--full-docs", action="store_true", help="Keep full doc comments instead of the first sentence.")
    parser.add_argument("--no-tags", action="store_true", help="Omit struct field tags.")
    parser.add_argument("--theme", default=None, help="Syntax highlighting theme.")
    parser.add_argument("--no-highlight", action="store_true", help="Print plain text.")
    parser.add_argument("--json", action="store_true", help="Print packages as JSON.")
    parser.add_argument("--no-env", action="store_true", help="Ignore PKGDMP_* environment variables.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug messages to stderr.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {version()}")
    return parser


def parse_config(argv: Optional[Sequence[str]] = None, environ=None) -> Config:
    """Parse flags into a Config, then fill the rest from the environment."""
    args = build_arg_parser().parse_args(argv)

    cfg = Config(
        dirs=list(args.dirs),
        matching=args.matching,
        exclude_matching=args.exclude_matching,
        only=args.only,
        exclude=args.exclude,
        only_packages=args.only_packages,
        exclude_packages=args.exclude_packages,
        exclude_files=args.exclude_files,
        unexported=args.unexported,
        no_docs=args.no_docs,
        full_docs=args.full_docs,
        no_tags=args.no_tags,
        no_highlight=args.no_highlight,
        json=args.json,
        no_env=args.no_env,
        verbose=args.verbose,
    )
    if args.theme:
        cfg.theme = args.theme

    return apply_env(cfg, environ)


def write_packages(cfg: Config, packages: list, out=None) -> None:
    out = out or sys.stdout

    if cfg.json:
        out.write(json.dumps([p.to_dict() for p in packages], indent=2))
        out.write("\n")
        return

    console = None if cfg.no_highlight else Console(file=out)

    for pkg in packages:
        source = package_source(pkg)
        if console is None:
            out.write(source)
            out.write("\n")
        else:
            console.print(Syntax(source, "go", theme=cfg.theme, background_color="default"))
            console.print()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point. Returns the process exit code."""
    cfg = parse_config(argv)

    logging.basicConfig(
        level=logging.DEBUG if cfg.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        packages = extract_packages(
            cfg.dirs,
            parser_options_from_config(cfg),
            split_list(cfg.exclude_files),
        )
    except PkgdmpError as e:
        logger.error("%s", e)
        return 1

    write_packages(cfg, packages)
    return 0


if __name__ == "__main__":
    sys.exit(main())
