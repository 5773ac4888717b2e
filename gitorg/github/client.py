"""Thin wrapper around PyGithub scoped to a single organization."""

from __future__ import annotations

from typing import TypeVar

from github import Auth, Github
from github.Organization import Organization
from github.PaginatedList import PaginatedList
from github.Repository import Repository

from gitorg.config import DEFAULT_BASE_URL, DEFAULT_PER_PAGE, Config

T = TypeVar("T")


class GitHubClient:
    """Authenticated GitHub client bound to an organization.

    Usage:
        client = GitHubClient(token="ghp_...", organization="acme")
        repo = client.repo("webapp")  # PyGithub Repository for acme/webapp

    An empty token gives anonymous access, which works for public data
    within GitHub's unauthenticated rate limit.
    """

    def __init__(
        self,
        token: str,
        organization: str = "",
        all_pages: bool = False,
        per_page: int = DEFAULT_PER_PAGE,
        base_url: str = DEFAULT_BASE_URL,
    ) -> None:
        self.organization = organization
        self.all_pages = all_pages
        auth = Auth.Token(token) if token else None
        # Objects are built unfetched; their first attribute read or
        # sub-resource call is the request.
        self.github = Github(auth=auth, base_url=base_url, per_page=per_page, lazy=True)

    @classmethod
    def from_config(cls, config: Config) -> GitHubClient:
        return cls(
            token=config.github_token,
            organization=config.organization,
            all_pages=config.all_pages,
            per_page=config.per_page,
            base_url=config.base_url,
        )

    def full_name(self, repo_name: str) -> str:
        """Qualify a bare repository name with the organization."""
        if not self.organization or "/" in repo_name:
            return repo_name
        return f"{self.organization}/{repo_name}"

    def repo(self, repo_name: str) -> Repository:
        """Resolve a repository of the organization without fetching it."""
        return self.github.get_repo(self.full_name(repo_name))

    def organization_handle(self) -> Organization:
        return self.github.get_organization(self.organization)

    def collect(self, paginated: PaginatedList[T]) -> list[T]:
        """Accumulate a paginated listing.

        Only the first page is fetched unless all_pages is set, in which case
        PyGithub follows the next-page links until the API reports no more.
        """
        if not self.all_pages:
            return list(paginated.get_page(0))
        return list(paginated)

    def close(self) -> None:
        self.github.close()
