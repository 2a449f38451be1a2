"""Central configuration constants for the repository sweep workflow."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Tuple

from src.secrets import load_github_token

USER_AGENT = "repo-sweeper/1.0"
BASE_URL = os.getenv("GITHUB_API_URL", "https://api.github.com").rstrip("/")
PER_PAGE = int(os.getenv("PER_PAGE", "100"))
REQUEST_TIMEOUT = int(os.getenv("REQUEST_TIMEOUT", "90"))
MAX_RETRIES = int(os.getenv("MAX_RETRIES", "6"))
BACKOFF_BASE_SEC = 2
MAX_WAIT_ON_403 = int(os.getenv("MAX_WAIT_ON_403", "180"))
RATE_LIMIT_RESET_WAIT_SEC = int(os.getenv("RATE_LIMIT_RESET_WAIT_SEC", str(60 * 60)))
CONCURRENCY_LIMIT = int(os.getenv("SWEEPER_CONCURRENCY", "3"))
# Fixed batches (wait for the whole group) unless SWEEPER_STRICT_BATCHES=0 opts into a sliding window.
STRICT_BATCHES = os.getenv("SWEEPER_STRICT_BATCHES", "1").lower() not in {"0", "false", "no"}

# Repository features switched off by the sweep.
DISABLED_FEATURES: Tuple[str, ...] = ("has_issues", "has_projects", "has_wiki")
SQUASH_MERGE_METHOD = "squash"
FORCE_MERGE_MESSAGE = "Force-merge PR #{number}"


@dataclass(frozen=True)
class SweepSettings:
    """Resolved runtime settings for one sweep."""

    token: str
    concurrency: int
    strict_batches: bool


def resolve_settings(token: Optional[str] = None) -> SweepSettings:
    """Return immutable settings; raise RuntimeError when no token is configured."""

    token = (token if token is not None else load_github_token()).strip()
    if not token:
        raise RuntimeError(
            "GitHub token is not configured; set GITHUB_TOKEN or add github_token to local_secrets.json"
        )
    return SweepSettings(
        token=token,
        concurrency=max(1, CONCURRENCY_LIMIT),
        strict_batches=STRICT_BATCHES,
    )


__all__ = [
    "USER_AGENT",
    "BASE_URL",
    "PER_PAGE",
    "REQUEST_TIMEOUT",
    "MAX_RETRIES",
    "BACKOFF_BASE_SEC",
    "MAX_WAIT_ON_403",
    "RATE_LIMIT_RESET_WAIT_SEC",
    "CONCURRENCY_LIMIT",
    "STRICT_BATCHES",
    "DISABLED_FEATURES",
    "SQUASH_MERGE_METHOD",
    "FORCE_MERGE_MESSAGE",
    "SweepSettings",
    "resolve_settings",
]
