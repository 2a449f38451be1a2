"""Repository feature switch-off step."""

from __future__ import annotations

import requests

from .config import DISABLED_FEATURES
from .github_api import get_repo, update_repo
from .http_client import GitHubAPIError


def disable_repo_features(owner: str, repo: str) -> bool:
    """Turn off issues, projects, and wiki when all three are currently on.

    Returns True when an update was sent. Errors are logged, never raised.
    """
    try:
        current = get_repo(owner, repo)
        if not current.features_enabled():
            print(f"  features already disabled in '{owner}/{repo}'")
            return False

        update_repo(owner, repo, **{flag: False for flag in DISABLED_FEATURES})
        print(f"  disabled {', '.join(DISABLED_FEATURES)} in '{owner}/{repo}'")
        return True
    except (GitHubAPIError, requests.RequestException) as exc:
        print(f"[error] disabling features in '{owner}/{repo}': {exc}")
        return False


__all__ = ["disable_repo_features"]
