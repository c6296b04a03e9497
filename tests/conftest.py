import os

import pytest

from tests.fakes import FakeTransport
from tests.fakes import make_settings


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep CONVERTKIT_API_* variables and a local .env out of the tests."""
    for key in list(os.environ):
        if key.startswith("CONVERTKIT_API_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def transport():
    return FakeTransport()
