"""
Shell Detection

Maps the active shell (from SHELL) to the init file under HOME that holds
persistent exports. Resolution is repeated on every call since a long-lived
host process may see HOME or SHELL change.
"""

import os
from pathlib import Path
from typing import Mapping, Optional

from globenv.config import DEFAULT_SHELL_FILES
from globenv.errors import ShellError, VarError
from globenv.logging import get_logger

logger = get_logger(__name__)


def _require(environ: Mapping[str, str], name: str) -> str:
    value = environ.get(name)
    if not value:
        raise VarError(f"{name} is not set")
    return value


def init_file_name(shell: str, shell_files: Optional[Mapping[str, str]] = None) -> str:
    """Return the init file name for a shell executable path.

    Raises:
        ShellError: If the shell is not a known one.
    """
    table = DEFAULT_SHELL_FILES if shell_files is None else shell_files
    try:
        return table[shell]
    except KeyError:
        raise ShellError(shell) from None


def resolve_init_file(
    environ: Optional[Mapping[str, str]] = None,
    shell_files: Optional[Mapping[str, str]] = None,
) -> Path:
    """
    Resolve the absolute path of the user's shell init file.

    Args:
        environ: Variable table to read HOME and SHELL from (defaults to os.environ)
        shell_files: Shell path -> init file name table

    Returns:
        HOME/<init file>

    Raises:
        VarError: HOME or SHELL is unset
        ShellError: SHELL is not a supported shell
    """
    if environ is None:
        environ = os.environ

    home = _require(environ, "HOME")
    shell = _require(environ, "SHELL")
    path = Path(home) / init_file_name(shell, shell_files)

    logger.debug(f"Shell {shell} -> {path}")
    return path
