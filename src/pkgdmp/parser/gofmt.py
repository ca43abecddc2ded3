"""Canonical formatting of rendered package source through gofmt."""

import logging
import os
import shutil
import subprocess

from ..errors import FormatError

logger = logging.getLogger(__name__)


def gofmt_path() -> str:
    """Locate gofmt, honouring the PKGDMP_GOFMT override."""
    override = os.environ.get("PKGDMP_GOFMT")
    if override:
        return override
    found = shutil.which("gofmt")
    if not found:
        raise FormatError("gofmt executable not found (install Go or set PKGDMP_GOFMT)")
    return found


def format_source(source: str) -> str:
    """Return source formatted by gofmt.

    Raises FormatError when gofmt is missing or rejects the source.
    """
    cmd = [gofmt_path()]
    logger.debug("formatting %d bytes with %s", len(source), cmd[0])

    try:
        proc = subprocess.run(
            cmd,
            input=source,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            check=False,
        )
    except OSError as e:
        raise FormatError(f"running {cmd[0]}: {e}") from e

    if proc.returncode != 0:
        raise FormatError(f"formatting source: {proc.stderr.strip()}")

    return proc.stdout
