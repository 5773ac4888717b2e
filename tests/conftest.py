"""Shared test fixtures for gitorg."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from gitorg.github.client import GitHubClient
from gitorg.github.operations import Operations


@pytest.fixture
def client() -> GitHubClient:
    gh = GitHubClient(token="", organization="acme")
    gh.github = MagicMock()
    return gh


@pytest.fixture
def repo(client: GitHubClient) -> MagicMock:
    """The repository every client.repo() call resolves to."""
    return client.github.get_repo.return_value


@pytest.fixture
def ops(client: GitHubClient) -> Operations:
    return Operations(client)
