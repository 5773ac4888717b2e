"""Configuration loading for gitorg.

Config sources (in priority order):
1. Explicit arguments passed to GitHubClient / CLI options
2. Environment variables (GITORG_GITHUB_TOKEN, etc.)
3. .env file in current directory
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

DEFAULT_PER_PAGE = 30
DEFAULT_BASE_URL = "https://api.github.com"
TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in TRUTHY


@dataclass
class Config:
    github_token: str = ""
    organization: str = ""  # GitHub org or user that owns the repositories
    all_pages: bool = False
    per_page: int = DEFAULT_PER_PAGE
    base_url: str = DEFAULT_BASE_URL  # GitHub Enterprise: https://<host>/api/v3

    @classmethod
    def load(cls) -> Config:
        per_page = os.getenv("GITORG_PER_PAGE", "").strip()
        return cls(
            github_token=os.getenv("GITORG_GITHUB_TOKEN", ""),
            organization=os.getenv("GITORG_ORGANIZATION", ""),
            all_pages=_env_flag("GITORG_ALL_PAGES"),
            per_page=int(per_page) if per_page.isdigit() and int(per_page) > 0 else DEFAULT_PER_PAGE,
            base_url=os.getenv("GITORG_BASE_URL", "").strip() or DEFAULT_BASE_URL,
        )

    def validate(self) -> list[str]:
        """Return a list of missing config issues."""
        issues = []
        if not self.github_token:
            issues.append("GitHub token not set (GITORG_GITHUB_TOKEN)")
        if not self.organization:
            issues.append("Organization not set (GITORG_ORGANIZATION)")
        return issues
