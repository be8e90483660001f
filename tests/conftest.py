"""Shared fixtures for the hostplan test suite."""

from pathlib import Path

import pytest

SAMPLE_SSH_CONFIG = """\
Host myhost
    HostName 10.0.0.5
    Port 2222
    User bob

Host web web-new !web-old
    HostName web.example.com

Host !blocked
    HostName nowhere.example.com

Host bare

Host *
    User fallback
"""


@pytest.fixture()
def ssh_config_file(tmp_path: Path) -> Path:
    """Write a small SSH client config and return its path."""
    path = tmp_path / "ssh_config"
    path.write_text(SAMPLE_SSH_CONFIG, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep tests away from the real home directory and hostplan variables."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("HOSTPLAN_CONFIG", raising=False)
    monkeypatch.delenv("HOSTPLAN_SSH_CONFIG", raising=False)
    return home
