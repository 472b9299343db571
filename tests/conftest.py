"""Shared pytest fixtures for the Melon Client test suite."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from melon_client.launching.versions import VersionRegistry
from melon_client.utils.config_store import ConfigStore
from melon_client.utils.data_model import AuthenticatedProfile, SessionIdentity
from melon_client.utils.resources import reset_resource_budget

STEVE_UUID = "e4270dab-5764-390b-8cc6-0cf94d9aeee9"


@pytest.fixture(autouse=True)
def _fresh_resource_budget():
    reset_resource_budget()
    yield
    reset_resource_budget()


@pytest.fixture(autouse=True)
def _quiet_package_logger():
    yield
    package_logger = logging.getLogger("melon_client")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture()
def config_store(tmp_path: Path) -> ConfigStore:
    return ConfigStore(tmp_path / "melonclient.json")


@pytest.fixture()
def registry() -> VersionRegistry:
    return VersionRegistry()


@pytest.fixture()
def install_root(tmp_path: Path) -> Path:
    root = tmp_path / ".minecraft"
    root.mkdir()
    return root


@pytest.fixture()
def steve_identity() -> SessionIdentity:
    return SessionIdentity(
        display_name="Steve_01",
        unique_id=STEVE_UUID,
        credential_token="null",
    )


@pytest.fixture()
def ms_profile() -> AuthenticatedProfile:
    return AuthenticatedProfile(
        name="Alex",
        id="00000000-0000-0000-0000-000000000042",
        token="ms-token-123",
    )
