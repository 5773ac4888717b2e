"""Manual verification: exercise the read-only operations against a real org.

Usage:
    GITORG_GITHUB_TOKEN=ghp_... uv run python scripts/check_org_access.py org [repo]

Without a repo argument the first repository of the organization is used.
"""

from __future__ import annotations

import sys

from gitorg.config import Config
from gitorg.github.client import GitHubClient
from gitorg.github.operations import Operations


def main() -> None:
    config = Config.load()

    # Allow org override from CLI arg
    if len(sys.argv) > 1:
        config.organization = sys.argv[1]
    repo_name = sys.argv[2] if len(sys.argv) > 2 else ""

    if not config.organization:
        print("ERROR: Provide org as argument or set GITORG_ORGANIZATION")
        sys.exit(1)
    if not config.github_token:
        print("WARNING: GITORG_GITHUB_TOKEN not set, using anonymous access")

    print(f"Connecting to {config.organization}...")
    client = GitHubClient.from_config(config)

    try:
        ops = Operations(client)

        print("\n--- Repositories (first page) ---")
        repos = ops.repositories()
        for repo in repos[:10]:
            print(f"  {repo.name}")
        if not repos:
            print("  No repositories visible")
            sys.exit(1)

        repo_name = repo_name or repos[0].name
        repo = ops.repository(repo_name)
        if repo is None:
            print(f"ERROR: {repo_name} not accessible")
            sys.exit(1)
        print(f"\n--- {repo.full_name} (default branch {repo.default_branch}) ---")

        branches = ops.branches(repo_name)
        print(f"  Branches (first page): {', '.join(b.name for b in branches)}")

        ref = ops.reference_by_heads(repo_name, repo.default_branch)
        print(f"  Head ref: {ref.ref} -> {ref.object.sha}" if ref else "  Head ref: (none)")

        tags = ops.tags(repo_name)
        print(f"  Tags (first page): {', '.join(t.name for t in tags) or '(none)'}")

        try:
            body = ops.download(repo_name, "", "README.md")
        except FileNotFoundError:
            print("  README.md: (missing)")
        else:
            with body:
                print(f"  README.md: {len(body.read())} bytes")

        me = ops.user()
        print(f"\nAuthenticated as: {me.login if me else '(anonymous)'}")

    finally:
        client.close()


if __name__ == "__main__":
    main()
