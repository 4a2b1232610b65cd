"""
Error Taxonomy

Every failure surfaced by globenv is an EnvError carrying one of three kinds,
so callers can handle shell detection, store I/O and variable access uniformly.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """The three failure kinds."""

    SHELL = "shell"
    IO = "io"
    VAR = "var"


_MESSAGES = {
    ErrorKind.SHELL: "unsupported shell",
    ErrorKind.IO: "failed to perform I/O operation",
    ErrorKind.VAR: "failed to get or set env variable",
}


class EnvError(Exception):
    """Base error for all globenv failures."""

    kind: ErrorKind = ErrorKind.IO

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail
        message = _MESSAGES[self.kind]
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EnvError):
            return NotImplemented
        return self.kind == other.kind

    def __hash__(self) -> int:
        return hash(self.kind)


class ShellError(EnvError):
    """The active shell could not be mapped to a known init file."""

    kind = ErrorKind.SHELL


class EnvIOError(EnvError):
    """Reading or writing the init file or registry key failed."""

    kind = ErrorKind.IO


class VarError(EnvError):
    """A process environment variable could not be read or written."""

    kind = ErrorKind.VAR
