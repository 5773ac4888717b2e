"""Convenience operations over an organization's GitHub repositories.

Each method maps onto one GitHub REST resource. Lookup failures are logged
and turned into None (or an empty list for listings) so callers can treat
"missing" and "unreachable" alike. create_pull_request and download are the
exceptions: they raise.
"""

from __future__ import annotations

import base64
import logging
import posixpath
from pathlib import Path
from typing import IO, TypeVar

import requests
from github.Branch import Branch
from github.Commit import Commit
from github.Comparison import Comparison
from github.GitCommit import GitCommit
from github.GithubException import GithubException
from github.GithubObject import NotSet
from github.GitRef import GitRef
from github.GitTree import GitTree
from github.InputGitTreeElement import InputGitTreeElement
from github.NamedUser import NamedUser
from github.PullRequest import PullRequest
from github.Repository import Repository
from github.Tag import Tag

from gitorg.github.client import GitHubClient

logger = logging.getLogger(__name__)

T = TypeVar("T")

BLOB_MODE = "100644"
DOWNLOAD_TIMEOUT = 60  # seconds

# PyGithub raises GithubException for API errors but lets transport errors
# from requests through unchanged.
LOOKUP_ERRORS = (GithubException, requests.RequestException)


class Operations:
    """Organization-scoped GitHub operations on top of a GitHubClient."""

    def __init__(self, client: GitHubClient) -> None:
        self._client = client

    def commit(self, repo_name: str, commit_sha: str) -> GitCommit | None:
        try:
            return self._client.repo(repo_name).get_git_commit(commit_sha)
        except LOOKUP_ERRORS as e:
            _log_failure("commit", repo_name, e)
            return None

    def compare(self, repo_name: str, base: str, head: str) -> Comparison | None:
        try:
            return self._client.repo(repo_name).compare(base, head)
        except LOOKUP_ERRORS as e:
            _log_failure("compare", repo_name, e)
            return None

    def merge(
        self, repo_name: str, base: str, head: str, message: str
    ) -> Commit | None:
        """Merge head into base. Returns None when there was nothing to merge."""
        try:
            return self._client.repo(repo_name).merge(
                base, head, commit_message=message
            )
        except LOOKUP_ERRORS as e:
            _log_failure("merge", repo_name, e)
            return None

    def repositories(
        self, repo_type: str = "all", sort: str = "full_name"
    ) -> list[Repository]:
        """List the organization's repositories."""
        try:
            org = self._client.organization_handle()
            return self._client.collect(org.get_repos(type=repo_type, sort=sort))
        except LOOKUP_ERRORS as e:
            _log_failure("repositories", self._client.organization, e)
            return []

    def repository(self, repo_name: str) -> Repository | None:
        try:
            return _fetched(self._client.repo(repo_name))
        except LOOKUP_ERRORS as e:
            _log_failure("repository", repo_name, e)
            return None

    def branches(self, repo_name: str) -> list[Branch]:
        try:
            return self._client.collect(self._client.repo(repo_name).get_branches())
        except LOOKUP_ERRORS as e:
            _log_failure("branches", repo_name, e)
            return []

    def branch(self, repo_name: str, branch_name: str) -> Branch | None:
        try:
            return self._client.repo(repo_name).get_branch(branch_name)
        except LOOKUP_ERRORS as e:
            _log_failure("branch", repo_name, e)
            return None

    def tags(self, repo_name: str) -> list[Tag]:
        try:
            return self._client.collect(self._client.repo(repo_name).get_tags())
        except LOOKUP_ERRORS as e:
            _log_failure("tags", repo_name, e)
            return []

    def tag_by_name(self, repo_name: str, tag_name: str) -> Tag | None:
        """Find a tag by name.

        Walks every page regardless of all_pages, stopping as soon as the tag
        turns up so later pages are never requested.
        """
        try:
            for tag in self._client.repo(repo_name).get_tags():
                if tag.name == tag_name:
                    return tag
        except LOOKUP_ERRORS as e:
            _log_failure("tag_by_name", repo_name, e)
        return None

    def reference_by_branch(self, repo_name: str, branch_name: str) -> GitRef | None:
        return self._reference(repo_name, f"branch/{branch_name}")

    def reference_by_heads(self, repo_name: str, branch_name: str) -> GitRef | None:
        return self._reference(repo_name, f"heads/{branch_name}")

    def reference_by_tag(self, repo_name: str, tag_name: str) -> GitRef | None:
        return self._reference(repo_name, f"tags/{tag_name}")

    def _reference(self, repo_name: str, ref: str) -> GitRef | None:
        try:
            return self._client.repo(repo_name).get_git_ref(ref)
        except LOOKUP_ERRORS as e:
            _log_failure(f"reference {ref}", repo_name, e)
            return None

    def create_ref(self, repo_name: str, branch_name: str, sha: str) -> GitRef | None:
        """Create refs/heads/<branch_name> pointing at sha."""
        try:
            return self._client.repo(repo_name).create_git_ref(
                ref=f"refs/heads/{branch_name}", sha=sha
            )
        except LOOKUP_ERRORS as e:
            _log_failure("create_ref", repo_name, e)
            return None

    def tree(
        self, repo_name: str, source_files: str, reference: GitRef
    ) -> GitTree | None:
        """Create a tree holding local files on top of the reference's tree.

        source_files is a comma-separated list of local paths. Each file is
        committed as a regular blob under the same path it was read from.
        UTF-8 text goes inline in the tree; anything else is uploaded as a
        base64 blob first.
        """
        files: list[tuple[str, bytes]] = []
        for file_arg in source_files.split(","):
            try:
                files.append((file_arg, Path(file_arg).read_bytes()))
            except OSError as e:
                logger.warning(f"Cannot read {file_arg} for tree in {repo_name}: {e}")
                return None

        try:
            repo = self._client.repo(repo_name)
            entries = [_tree_entry(repo, path, data) for path, data in files]
            base_tree = repo.get_git_tree(reference.object.sha)
            return repo.create_git_tree(entries, base_tree)
        except LOOKUP_ERRORS as e:
            _log_failure("tree", repo_name, e)
            return None

    def users(self) -> list[NamedUser]:
        """List organization members, or every GitHub user without an organization."""
        try:
            if self._client.organization:
                listing = self._client.organization_handle().get_members()
            else:
                listing = self._client.github.get_users()
            return self._client.collect(listing)
        except LOOKUP_ERRORS as e:
            _log_failure("users", self._client.organization, e)
            return []

    def user(self, user_name: str = "") -> NamedUser | None:
        """Look up a user by login. An empty login means the authenticated user."""
        try:
            if not user_name:
                return _fetched(self._client.github.get_user())
            return _fetched(self._client.github.get_user(user_name))
        except LOOKUP_ERRORS as e:
            _log_failure("user", user_name or "<authenticated>", e)
            return None

    def create_pull_request(
        self,
        repo_name: str,
        src_branch: str,
        dst_branch: str,
        subject: str,
        description: str,
    ) -> PullRequest | None:
        """Open a pull request from src_branch into dst_branch.

        Returns None without calling the API when repo_name, src_branch or
        subject is empty. API failures are raised, not swallowed.
        """
        if not repo_name or not src_branch or not subject:
            return None

        try:
            return self._client.repo(repo_name).create_pull(
                base=dst_branch,
                head=src_branch,
                title=subject,
                body=description,
                maintainer_can_modify=True,
            )
        except GithubException as e:
            logger.error(
                f"Failed to create pull request {src_branch} -> {dst_branch} "
                f"in {repo_name}: {e}"
            )
            raise

    def assign_reviewers(
        self, number: int, repo_name: str, reviewers: list[str]
    ) -> PullRequest | None:
        """Request reviews from users on pull request #number."""
        if not reviewers:
            return None

        try:
            pull = self._client.repo(repo_name).get_pull(number)
            pull.create_review_request(reviewers=reviewers)
            pull.update()
            return pull
        except LOOKUP_ERRORS as e:
            _log_failure(f"assign_reviewers #{number}", repo_name, e)
            return None

    def download(self, repo_name: str, ref_name: str, file_path: str) -> IO[bytes]:
        """Stream a file's raw content at ref_name (default branch when empty).

        The caller owns the returned stream and must close it.
        """
        if not repo_name:
            raise ValueError("repo cannot be null nor empty")
        if not file_path:
            raise ValueError("file_path cannot be null nor empty")

        dir_path = posixpath.dirname(file_path)
        file_name = posixpath.basename(file_path)
        ref = ref_name if ref_name else NotSet

        contents = self._client.repo(repo_name).get_contents(dir_path, ref=ref)
        if not isinstance(contents, list):
            contents = [contents]

        for item in contents:
            if item.type == "file" and item.name == file_name:
                logger.debug(f"Downloading {item.path} from {item.download_url}")
                response = requests.get(
                    item.download_url, stream=True, timeout=DOWNLOAD_TIMEOUT
                )
                response.raise_for_status()
                response.raw.decode_content = True
                return response.raw

        raise FileNotFoundError(f"filename {file_name} not found")


def _fetched(obj: T) -> T:
    """Load a lazily built PyGithub object so a missing one raises here."""
    obj.id  # any unset attribute triggers the GET
    return obj


def _tree_entry(repo: Repository, path: str, data: bytes) -> InputGitTreeElement:
    try:
        content = data.decode("utf-8")
    except UnicodeDecodeError:
        blob = repo.create_git_blob(base64.b64encode(data).decode("ascii"), "base64")
        return InputGitTreeElement(path=path, mode=BLOB_MODE, type="blob", sha=blob.sha)
    return InputGitTreeElement(path=path, mode=BLOB_MODE, type="blob", content=content)


def _log_failure(operation: str, target: str, error: Exception) -> None:
    if isinstance(error, GithubException):
        detail = f"{error.status} {error.data}"
    else:
        detail = f"{type(error).__name__}: {error}"
    logger.warning(f"GitHub {operation} failed for {target}: {detail}")
