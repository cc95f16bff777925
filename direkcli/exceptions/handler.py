import logging
import os
import platform
import sys
from dataclasses import dataclass, field
from traceback import print_exception
from types import TracebackType
from typing import Optional, Type

import click

from direkcli.utils import get_local_package_version

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Metadata:
    os_name: str = os.name
    direkcli_version: str = field(default_factory=get_local_package_version)
    py_version: str = sys.version
    platform: str = platform.platform()

    def print(self):
        click.secho("Crash info:", fg="red", bold=True, err=True)
        for label, value in [
            ("direkcli version:", self.direkcli_version),
            ("Python version:", self.py_version.replace("\n", ";")),
            ("Platform:", self.platform),
            ("OS:", self.os_name),
        ]:
            click.echo(" ".join([click.style(label, fg="red"), value]), err=True)


class CrashHandler:
    """Display useful information when a command fails unexpectedly

    Expected failures (`DirekError`) are reported by click and never reach
    this handler. Anything else is shown with the message of the command that
    was running, the traceback and environment metadata.
    """

    def __init__(self):
        self.message: Optional[str] = None
        self._metadata: Optional[_Metadata] = None

    @property
    def metadata(self) -> _Metadata:
        if self._metadata is None:
            self._metadata = _Metadata()
        return self._metadata

    def report(
        self,
        type_: Type[BaseException],
        value: BaseException,
        traceback: Optional[TracebackType],
    ):
        message = self.message if self.message is not None else "Unexpected error"
        logger.debug("unhandled %s: %s", type_.__name__, value)

        click.secho(f"\n{message}:\n", fg="red", bold=True, err=True)
        print_exception(type_, value, traceback, file=sys.stderr)
        click.echo(err=True)
        self.metadata.print()

    def init(self):
        """Install `report` as the interpreter's excepthook.

        Keyboard interrupts keep the default behaviour.
        """

        def _excepthook(
            type_: Type[BaseException],
            value: BaseException,
            traceback: Optional[TracebackType],
        ) -> None:
            if issubclass(type_, KeyboardInterrupt):
                sys.__excepthook__(type_, value, traceback)
                return

            self.report(type_, value, traceback)

        sys.excepthook = _excepthook
