"""Root test configuration: isolate every test from the caller's config and env"""

import os

import pytest

from blogbuild.config import Settings


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Run from a clean tmp directory with no BLOGBUILD_* overrides set."""
    for name in list(os.environ):
        if name.startswith("BLOGBUILD_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(name="settings")
def settings_fixture():
    return Settings()
