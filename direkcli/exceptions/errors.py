from typing import Optional

import click


class DirekError(click.ClickException):
    """Expected failure of a command, shown to the user without a traceback."""

    exit_code = 1


class LocalError(DirekError):
    """The request could not be built, so nothing was sent to the server.

    Raised for unreadable local files and malformed arguments.
    """

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class RemoteError(DirekError):
    """The server answered an RPC with a non-OK status."""

    def __init__(self, code: str, message: str):
        self.code = code
        self.status_message = message
        super().__init__(f"[{code}] {message}")
