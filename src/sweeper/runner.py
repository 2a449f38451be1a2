"""Entry points for sweeping every repository owned by the authenticated user."""

from __future__ import annotations

import sys
from typing import Callable, List, Optional, Sequence, TypeVar

import requests

from .batching import bounded_map, run_in_batches
from .cascade import Resolution, resolve_pull_request
from .config import SweepSettings, resolve_settings
from .features import disable_repo_features
from .github_api import list_open_pulls, list_user_repos
from .http_client import GitHubAPIError, set_auth_token
from .models import Repository

T = TypeVar("T")
R = TypeVar("R")


def fan_out(func: Callable[[T], R], items: Sequence[T], settings: SweepSettings) -> List[R]:
    """Run `func` over `items` with the configured concurrency mode."""
    if settings.strict_batches:
        return run_in_batches(func, items, settings.concurrency)
    return bounded_map(func, items, settings.concurrency)


def process_repo(repo: Repository, settings: SweepSettings) -> List[Resolution]:
    """Disable features on `repo`, then resolve each of its open pull requests."""
    owner, name = repo.owner, repo.name
    print(f"\n=== {owner}/{name} ===")
    try:
        disable_repo_features(owner, name)

        print("  fetching open pull requests...")
        pulls = list_open_pulls(owner, name)
        print(f"  {len(pulls)} open pull requests")

        return fan_out(lambda pr: resolve_pull_request(owner, name, pr), pulls, settings)
    except Exception as exc:
        print(f"[error] processing repository '{owner}/{name}': {exc}")
        return []


def main(token: Optional[str] = None) -> None:
    """Sweep all owned repositories; exits 1 only when no credential is configured."""
    try:
        settings = resolve_settings(token)
    except RuntimeError as exc:
        print(f"[error] {exc}")
        sys.exit(1)

    set_auth_token(settings.token)

    try:
        repos = list_user_repos()
    except (GitHubAPIError, requests.RequestException) as exc:
        print(f"[error] listing repositories: {exc}")
        return

    print(f"Processing {len(repos)} repos...")
    fan_out(lambda repo: process_repo(repo, settings), repos, settings)
    print("\nAll open pull requests processed.")


if __name__ == "__main__":
    main()
