"""
Registry Store

Persists variables as string values under HKEY_CURRENT_USER\\Environment.
Values are set and deleted with single registry calls, no text parsing.
"""

from types import ModuleType
from typing import Any, Optional

from globenv.errors import EnvIOError
from globenv.logging import get_logger
from globenv.stores.base import PersistentStore

logger = get_logger(__name__)


def _load_winreg() -> ModuleType:
    import winreg
    return winreg


class RegistryStore(PersistentStore):
    """
    Windows store backed by the per-user Environment registry key.

    Args:
        subkey: Key under HKEY_CURRENT_USER holding the variables
        api: Module exposing the winreg functions (defaults to winreg)
    """

    name = "registry"

    def __init__(self, subkey: str = "Environment", api: Optional[Any] = None):
        self.subkey = subkey
        self._api = api

    @property
    def api(self) -> Any:
        if self._api is None:
            self._api = _load_winreg()
        return self._api

    def location(self) -> str:
        return f"HKEY_CURRENT_USER\\{self.subkey}"

    def _open(self, access: int) -> Any:
        try:
            return self.api.OpenKey(self.api.HKEY_CURRENT_USER, self.subkey, 0, access)
        except OSError as e:
            raise EnvIOError(f"cannot open {self.location()}: {e}") from e

    def read_entry(self, key: str) -> Optional[str]:
        with self._open(self.api.KEY_READ) as handle:
            try:
                value, _ = self.api.QueryValueEx(handle, key)
            except FileNotFoundError:
                logger.debug(f"{key} not in {self.location()}")
                return None
            except OSError as e:
                raise EnvIOError(f"cannot query {key}: {e}") from e
        return str(value)

    def write_entry(self, key: str, value: str) -> None:
        with self._open(self.api.KEY_SET_VALUE) as handle:
            if value:
                value_type = self.api.REG_EXPAND_SZ if "%" in value else self.api.REG_SZ
                try:
                    self.api.SetValueEx(handle, key, 0, value_type, value)
                except OSError as e:
                    raise EnvIOError(f"cannot set {key}: {e}") from e
                logger.info(f"Set {key} in {self.location()}")
                return

            try:
                self.api.DeleteValue(handle, key)
            except FileNotFoundError:
                # Removing an absent value keeps removal idempotent
                logger.debug(f"{key} already absent from {self.location()}")
                return
            except OSError as e:
                raise EnvIOError(f"cannot delete {key}: {e}") from e
            logger.info(f"Removed {key} from {self.location()}")
