"""Test configuration and fixtures."""

from typing import Optional

import pytest
from fakes import FakeRepository

from mavenrepo.connectors import RepositoryConnector
from mavenrepo.models import PackageCoordinate, RepositoryConfig


@pytest.fixture
def repo_config() -> RepositoryConfig:
    """Plain repository configuration without proxy or credentials."""
    return RepositoryConfig(repo_url="https://repo.example/maven2/")


@pytest.fixture
def coordinate() -> PackageCoordinate:
    """Package coordinate used across tests."""
    return PackageCoordinate(group_id="com.example", artifact_id="foo")


@pytest.fixture
def make_connector(repo_config):
    """Factory building a RepositoryConnector on top of a FakeRepository."""

    def _make(
        repository: FakeRepository,
        config: Optional[RepositoryConfig] = None,
        **kwargs,
    ) -> RepositoryConnector:
        return RepositoryConnector(
            config or repo_config,
            transport=repository.transport(),
            **kwargs,
        )

    return _make
