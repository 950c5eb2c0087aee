"""Read the commit head and version tag recorded in a version file."""

from __future__ import annotations

import csv
import io
from pathlib import Path

DEFAULT_VERSION_FILE = "./version"


def git(path: str | Path = DEFAULT_VERSION_FILE) -> tuple[str, str]:
    """Return (version, commit_head) read from a CSV version file.

    The first record holds the commit head, the second the version. A missing
    or malformed file yields empty strings.
    """
    try:
        text = Path(path).read_text()
    except OSError:
        return "", ""

    try:
        rows = [row for row in csv.reader(io.StringIO(text), strict=True) if row]
    except csv.Error:
        return "", ""
    if rows and any(len(row) != len(rows[0]) for row in rows):
        return "", ""

    commit_head = rows[0][0].strip() if len(rows) > 0 else ""
    version = rows[1][0].strip() if len(rows) > 1 else ""
    return version, commit_head