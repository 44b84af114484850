from __future__ import annotations

"""
Shared pytest fixtures for the wrapper test suite.

Every test runs with an empty config file and no target-directory override
in the environment, so a real /etc/mipspro-suppress.yaml on the machine
running the suite cannot change which target gets resolved.
"""

import signal
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    config_path = tmp_path / "mipspro-suppress.yaml"
    config_path.write_text("", encoding="utf-8")
    monkeypatch.setenv("MIPSPRO_SUPPRESS_CONFIG", str(config_path))
    monkeypatch.delenv("MIPSPRO_SUPPRESS_TARGET_DIR", raising=False)
    return config_path


@pytest.fixture
def target_dir(tmp_path: Path) -> Path:
    path = tmp_path / "bin"
    path.mkdir()
    return path


@pytest.fixture(autouse=True)
def restore_sigint():
    # cli.main() resets SIGINT to SIG_DFL; keep pytest's ^C handling intact.
    previous = signal.getsignal(signal.SIGINT)
    yield
    signal.signal(signal.SIGINT, previous)
