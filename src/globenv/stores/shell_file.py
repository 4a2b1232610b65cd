"""
Shell File Store

Persists variables as `export KEY=VALUE` lines in the user's shell init file
(.zshenv or .bashrc). Every other line of the file is passed through untouched.
"""

import os
import shutil
import tempfile
from contextlib import suppress
from pathlib import Path
from typing import Callable, Mapping, Optional

from globenv.errors import EnvIOError
from globenv.logging import get_logger
from globenv.shell import resolve_init_file
from globenv.stores.base import PersistentStore

logger = get_logger(__name__)

EXPORT = "export"


def split_lines(text: str) -> list[str]:
    """Split file text on newlines, dropping the empty tail after a final newline."""
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def parse_export(line: str) -> Optional[tuple[str, str]]:
    """
    Tokenize an export line.

    Returns (key, value) when the line has the form `export KEY=VALUE`,
    otherwise None. The left-hand side is split on whitespace so that a
    `export KEY=` occurring inside another line's value never matches.
    """
    lhs, sep, value = line.partition("=")
    if not sep:
        return None
    words = lhs.split()
    if len(words) != 2 or words[0] != EXPORT:
        return None
    return words[1], value.rstrip("\r")


def is_export_of(line: str, key: str) -> bool:
    parsed = parse_export(line)
    return parsed is not None and parsed[0] == key


def find_export(text: str, key: str) -> Optional[str]:
    """Return the value exported for *key* in *text*, or None."""
    for line in split_lines(text):
        parsed = parse_export(line)
        if parsed is not None and parsed[0] == key:
            return parsed[1]
    return None


def rewrite_exports(text: str, key: str, value: str) -> str:
    """
    Drop every export line for *key* and, if *value* is non-empty, append
    a fresh `export KEY=VALUE` line at the end.
    """
    kept = [line for line in split_lines(text) if not is_export_of(line, key)]
    if value:
        kept.append(f"{EXPORT} {key}={value}")
    return "".join(f"{line}\n" for line in kept)


class ShellFileStore(PersistentStore):
    """
    POSIX store backed by the shell init file.

    The init file path is resolved from HOME and SHELL on each call.
    """

    name = "shell-file"
    inherit_path = "$PATH"

    def __init__(
        self,
        environ: Optional[Mapping[str, str]] = None,
        shell_files: Optional[Mapping[str, str]] = None,
        resolver: Callable[..., Path] = resolve_init_file,
    ):
        self._environ = environ
        self._shell_files = shell_files
        self._resolver = resolver

    def path(self) -> Path:
        environ = os.environ if self._environ is None else self._environ
        return self._resolver(environ, self._shell_files)

    def location(self) -> str:
        return str(self.path())

    def _read(self, path: Path) -> str:
        try:
            with open(path, encoding="utf-8", errors="surrogateescape", newline="") as f:
                return f.read()
        except OSError as e:
            raise EnvIOError(f"cannot read {path}: {e.strerror or e}") from e

    def _write(self, path: Path, text: str) -> None:
        """Replace the file through a sibling temp file so a failed write never truncates it."""
        try:
            data = text.encode("utf-8", "surrogateescape")
        except UnicodeError as e:
            raise EnvIOError(f"cannot encode {path}: {e.reason}") from e

        # Write through symlinks (dotfile managers link .bashrc elsewhere)
        target = path.resolve()
        try:
            fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.")
        except OSError as e:
            raise EnvIOError(f"cannot write {path}: {e.strerror or e}") from e

        try:
            try:
                f = open(fd, "wb")
            except OSError:
                os.close(fd)
                raise
            with f:
                f.write(data)
            shutil.copymode(target, tmp_name)
            os.replace(tmp_name, target)
        except OSError as e:
            with suppress(FileNotFoundError):
                os.unlink(tmp_name)
            raise EnvIOError(f"cannot write {path}: {e.strerror or e}") from e

    def read_entry(self, key: str) -> Optional[str]:
        path = self.path()
        value = find_export(self._read(path), key)
        logger.debug(f"Read {key} from {path}: {'found' if value is not None else 'absent'}")
        return value

    def write_entry(self, key: str, value: str) -> None:
        path = self.path()
        updated = rewrite_exports(self._read(path), key, value)
        self._write(path, updated)
        if value:
            logger.info(f"Exported {key} in {path}")
        else:
            logger.info(f"Removed {key} from {path}")
