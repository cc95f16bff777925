"""Utility functions for services."""

import logging
import sys
from importlib import metadata
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

import click

from direkcli.constants import direk_constants
from direkcli.exceptions.errors import LocalError


def read_local_file(path: Union[str, Path]) -> bytes:
    """Read a file the user pointed us at, before anything is sent.

    Raises:
        LocalError: the file is missing or unreadable. The message carries the
            operating system's description of the failure.
    """
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        reason = e.strerror if e.strerror is not None else str(e)
        raise LocalError(f"unable to read {path}: {reason}", path=str(path)) from e


def read_optional_file(path: Optional[Union[str, Path]]) -> bytes:
    """Like `read_local_file`, but an absent or empty path means no payload."""
    if path is None or str(path) == "":
        return b""
    return read_local_file(path)


def decode_payload(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


def format_table(header: Sequence[str], rows: Iterable[Sequence[str]]) -> List[str]:
    """Align `rows` under `header`, one string per output line.

    >>> format_table(["ID", "Status"], [["a1", "complete"], ["b22", "failed"]])
    ['ID   Status', '---  --------', 'a1   complete', 'b22  failed']
    """
    rows = [[str(x) for x in row] for row in rows]

    widths = [len(x) for x in header]
    for row in rows:
        for i, x in enumerate(row):
            widths[i] = max(widths[i], len(x))

    def _line(cells: Sequence[str]) -> str:
        return "  ".join(x.ljust(w) for x, w in zip(cells, widths)).rstrip()

    res = [_line(header), _line(["-" * w for w in widths])]
    res.extend(_line(row) for row in rows)
    return res


def print_table(header: Sequence[str], rows: Iterable[Sequence[str]]):
    lines = format_table(header, rows)
    click.secho(lines[0], bold=True)
    for line in lines[1:]:
        click.echo(line)


def get_local_package_version() -> str:
    try:
        return metadata.version(direk_constants.pkg_name)
    except metadata.PackageNotFoundError:
        return "unknown"


class _StderrHandler(logging.StreamHandler):
    """Writes to whatever `sys.stderr` is when a record is emitted."""

    def __init__(self):
        logging.Handler.__init__(self)

    @property
    def stream(self):
        return sys.stderr


_log_handler = _StderrHandler()
_log_handler.setFormatter(
    logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
)


def configure_logging(verbose: bool = False):
    """Send `direkcli` log records to stderr.

    Command output never goes through the logger, so this only controls
    diagnostics. Safe to call once per invocation in the same process.
    """
    root = logging.getLogger(direk_constants.pkg_name)
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)

    if _log_handler not in root.handlers:
        root.addHandler(_log_handler)
