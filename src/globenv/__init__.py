"""
globenv - Globally set & read environment variables

Persists user environment variables in the shell init file (POSIX) or the
per-user registry hive (Windows) and mirrors every change into the current
process.
"""

__version__ = "0.5.0"

from globenv.environment import (
    GlobalEnvironment,
    ProcessMirror,
    get_paths,
    get_var,
    remove_path,
    remove_var,
    set_path,
    set_var,
)
from globenv.errors import EnvError, EnvIOError, ErrorKind, ShellError, VarError

__all__ = [
    "EnvError",
    "EnvIOError",
    "ErrorKind",
    "GlobalEnvironment",
    "ProcessMirror",
    "ShellError",
    "VarError",
    "__version__",
    "get_paths",
    "get_var",
    "remove_path",
    "remove_var",
    "set_path",
    "set_var",
]
