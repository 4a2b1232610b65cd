"""
Global Environment

Bundles a persistent store with the process variable table. Writes go to the
store first and only then to the process, so a failed persistent write leaves
the process untouched. Reads prefer the process table and fall through to the
store only when the variable is absent there.
"""

import os
from typing import MutableMapping, Optional

import yaml

from globenv.config import Settings, get_settings
from globenv.errors import EnvIOError, VarError
from globenv.logging import get_logger
from globenv.stores import PersistentStore, PlatformStore, RegistryStore

logger = get_logger(__name__)

PATH_VAR = "PATH"


def validate_key(key: str) -> None:
    """Reject keys that cannot be exported or stored."""
    if not key:
        raise VarError("empty variable name")
    if "=" in key or "\0" in key or any(c.isspace() for c in key):
        raise VarError(f"invalid variable name {key!r}")


def validate_value(value: str) -> None:
    """Reject values that would not fit on a single export line."""
    if any(c in value for c in "\n\r\0"):
        raise VarError("value contains a line break or NUL")


class ProcessMirror:
    """The current process's variable table (os.environ by default)."""

    def __init__(self, table: Optional[MutableMapping[str, str]] = None):
        self.table = os.environ if table is None else table

    def get(self, key: str) -> Optional[str]:
        value = self.table.get(key)
        return value or None

    def set(self, key: str, value: str) -> None:
        """Set *key*, or unset it entirely when *value* is empty."""
        try:
            if value:
                self.table[key] = value
            else:
                self.table.pop(key, None)
        except (OSError, ValueError) as e:
            raise VarError(f"cannot update {key}: {e}") from e


class GlobalEnvironment:
    """
    Persistent environment accessor.

    Args:
        store: Backend persisting the variables
        mirror: Process variable table mirrored on every write
        pathsep: Separator between PATH segments
    """

    def __init__(
        self,
        store: PersistentStore,
        mirror: Optional[ProcessMirror] = None,
        pathsep: str = os.pathsep,
    ):
        self.store = store
        self.mirror = mirror or ProcessMirror()
        self.pathsep = pathsep

    def get(self, key: str) -> Optional[str]:
        """Return the process value of *key*, else the persisted one, else None."""
        validate_key(key)
        value = self.mirror.get(key)
        if value is not None:
            return value
        return self.store.read_entry(key) or None

    def set(self, key: str, value: str) -> None:
        """Persist *value* for *key* and mirror it; an empty value removes."""
        validate_key(key)
        validate_value(value)
        self.store.write_entry(key, value)
        self.mirror.set(key, value)

    def remove(self, key: str) -> None:
        self.set(key, "")

    # ── PATH helpers ──────────────────────────────────────────────

    def _segments(self, value: Optional[str]) -> list[str]:
        if not value:
            return []
        return [s for s in value.split(self.pathsep) if s]

    def _check_path(self, path: str) -> None:
        if not path or self.pathsep in path or any(c in path for c in "\n\r\0"):
            raise VarError(f"invalid path segment {path!r}")

    def paths(self) -> Optional[str]:
        """Return the process PATH value.

        The persisted entry is not consulted: on POSIX it holds the unexpanded
        `$PATH:...` text rather than a usable search path.
        """
        return self.mirror.get(PATH_VAR)

    def add_path(self, path: str) -> None:
        """Append *path* to PATH, persistently and in the process, unless present."""
        self._check_path(path)

        stored = self._segments(self.store.read_entry(PATH_VAR))
        if not stored and self.store.inherit_path:
            stored = [self.store.inherit_path]
        if path not in stored:
            self.store.write_entry(PATH_VAR, self.pathsep.join(stored + [path]))
            logger.info(f"Added {path} to persistent {PATH_VAR}")

        current = self._segments(self.mirror.get(PATH_VAR))
        if path not in current:
            self.mirror.set(PATH_VAR, self.pathsep.join(current + [path]))

    def remove_path(self, path: str) -> None:
        """Drop every occurrence of *path* from PATH, persistently and in the process."""
        self._check_path(path)

        stored = self._segments(self.store.read_entry(PATH_VAR))
        if path in stored:
            remaining = [s for s in stored if s != path]
            if remaining == [self.store.inherit_path]:
                remaining = []
            self.store.write_entry(PATH_VAR, self.pathsep.join(remaining))
            logger.info(f"Removed {path} from persistent {PATH_VAR}")

        current = self._segments(self.mirror.get(PATH_VAR))
        if path in current:
            self.mirror.set(PATH_VAR, self.pathsep.join(s for s in current if s != path))


def load_settings() -> Settings:
    """Load settings, reporting bad configuration as EnvError."""
    try:
        return get_settings()
    except (ValueError, yaml.YAMLError) as e:
        # pydantic ValidationError and SettingsError are ValueErrors
        raise VarError(f"invalid globenv configuration: {e}") from e
    except OSError as e:
        raise EnvIOError(f"cannot load globenv configuration: {e}") from e


def platform_store(settings: Optional[Settings] = None) -> PersistentStore:
    """Build the store for this platform from settings."""
    settings = settings or load_settings()
    if PlatformStore is RegistryStore:
        return RegistryStore(subkey=settings.registry_key)
    return PlatformStore(shell_files=settings.shell_files)


def default_environment() -> GlobalEnvironment:
    return GlobalEnvironment(platform_store())


def get_var(key: str) -> Optional[str]:
    """Get a variable from the current process or the persistent store."""
    return default_environment().get(key)


def set_var(key: str, value: str) -> None:
    """Set a variable persistently and in the current process."""
    default_environment().set(key, value)


def remove_var(key: str) -> None:
    """Remove a variable persistently and from the current process."""
    default_environment().remove(key)


def get_paths() -> Optional[str]:
    """Get the PATH value."""
    return default_environment().paths()


def set_path(path: str) -> None:
    """Add a PATH segment persistently and in the current process."""
    default_environment().add_path(path)


def remove_path(path: str) -> None:
    """Remove a PATH segment persistently and from the current process."""
    default_environment().remove_path(path)
