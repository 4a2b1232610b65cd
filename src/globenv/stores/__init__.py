"""Persistent variable stores, one per platform."""

import sys

from globenv.stores.base import PersistentStore
from globenv.stores.registry import RegistryStore
from globenv.stores.shell_file import ShellFileStore

if sys.platform == "win32":
    PlatformStore = RegistryStore
else:
    PlatformStore = ShellFileStore

__all__ = ["PersistentStore", "PlatformStore", "RegistryStore", "ShellFileStore"]
