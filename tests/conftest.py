"""
Shared test fixtures for globenv.

Provides an isolated data directory, a fake HOME with a shell init file,
and an in-memory stand-in for the winreg API.
"""

import pytest
from pathlib import Path

from globenv import config


@pytest.fixture(autouse=True)
def isolated_data_dir(tmp_path: Path, monkeypatch) -> Path:
    """Keep settings, config.yaml and logs inside tmp_path."""
    data_dir = tmp_path / "globenv_data"
    data_dir.mkdir()
    monkeypatch.setenv("GLOBENV_DATA", str(data_dir))
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(config, "_settings", None)
    return data_dir


@pytest.fixture
def home(tmp_path: Path, monkeypatch) -> Path:
    """A fake HOME for a bash user, with an existing .bashrc."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    (home_dir / ".bashrc").write_text("# ~/.bashrc\nalias ll='ls -l'\n")
    monkeypatch.setenv("HOME", str(home_dir))
    monkeypatch.setenv("SHELL", "/bin/bash")
    return home_dir


@pytest.fixture
def bashrc(home: Path) -> Path:
    return home / ".bashrc"


@pytest.fixture
def clean_vars(monkeypatch):
    """Make sure the variables used by tests start absent and are restored after."""
    for key in ("test", "GLOBENV_TEST_KEY", "GLOBENV_OTHER_KEY"):
        monkeypatch.delenv(key, raising=False)


class FakeRegistryKey:
    def __init__(self, values: dict, access: int):
        self.values = values
        self.access = access
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.closed = True
        return False


class FakeWinreg:
    """In-memory implementation of the winreg calls RegistryStore uses."""

    HKEY_CURRENT_USER = 0x80000001
    KEY_READ = 0x20019
    KEY_SET_VALUE = 0x0002
    REG_SZ = 1
    REG_EXPAND_SZ = 2

    def __init__(self, subkeys=("Environment",)):
        self.keys: dict[str, dict[str, tuple[str, int]]] = {name: {} for name in subkeys}
        self.opened: list[FakeRegistryKey] = []
        self.fail_with: OSError | None = None

    def OpenKey(self, hive, subkey, reserved=0, access=KEY_READ):
        assert hive == self.HKEY_CURRENT_USER
        if self.fail_with is not None:
            raise self.fail_with
        if subkey not in self.keys:
            raise FileNotFoundError(2, "The system cannot find the file specified")
        handle = FakeRegistryKey(self.keys[subkey], access)
        self.opened.append(handle)
        return handle

    def QueryValueEx(self, handle, name):
        if name not in handle.values:
            raise FileNotFoundError(2, "The system cannot find the file specified")
        return handle.values[name]

    def SetValueEx(self, handle, name, reserved, value_type, value):
        if handle.access != self.KEY_SET_VALUE:
            raise PermissionError(5, "Access is denied")
        handle.values[name] = (value, value_type)

    def DeleteValue(self, handle, name):
        if handle.access != self.KEY_SET_VALUE:
            raise PermissionError(5, "Access is denied")
        if name not in handle.values:
            raise FileNotFoundError(2, "The system cannot find the file specified")
        del handle.values[name]


@pytest.fixture
def fake_winreg() -> FakeWinreg:
    return FakeWinreg()
