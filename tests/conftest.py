"""
tests/conftest.py -- Shared fixtures.

The LDAP_* variables are set before any ad_auth import so that
get_settings() can be built without a real environment.
"""

from __future__ import annotations

import os

os.environ.setdefault("LDAP_HOST", "dc01.corp.example")
os.environ.setdefault("LDAP_DN_USER", "svc-auth")
os.environ.setdefault("LDAP_DN_PASS", "svc-secret")
os.environ.setdefault("LDAP_DOMAIN", "corp.example")

import pytest

from ad_auth.ad import DirectoryConfig
from tests.fakes import PASSWORDS, FakeDirectory, make_config, sample_entries


@pytest.fixture
def directory_factory():
    def _make(cfg: DirectoryConfig | None = None, entries: dict | None = None) -> FakeDirectory:
        return FakeDirectory(cfg or make_config(), sample_entries() if entries is None else entries, dict(PASSWORDS))

    return _make


@pytest.fixture
def directory(directory_factory) -> FakeDirectory:
    return directory_factory()


@pytest.fixture
def config_factory():
    return make_config
