"""Pull request resolution cascade: squash-merge, then force-merge, then close.

Each stage returns a StageResult instead of raising, so the driver in
`resolve_pull_request` only decides which stage runs next. Stages only absorb
API and transport failures; anything else is a bug and propagates.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

import requests

from .config import FORCE_MERGE_MESSAGE, SQUASH_MERGE_METHOD
from .github_api import close_pull, merge_branch, merge_pull
from .http_client import GitHubAPIError
from .models import PullRequest


class Resolution(enum.Enum):
    """Terminal state of one pull request's cascade."""

    MERGED = "merged"
    FORCE_MERGED = "force-merged"
    CLOSED = "closed"
    UNRESOLVED = "unresolved"


@dataclass(frozen=True)
class StageResult:
    ok: bool
    error: Optional[str] = None

    @classmethod
    def success(cls) -> "StageResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, error: str) -> "StageResult":
        return cls(ok=False, error=error)


def _run_stage(call: Callable[[], object]) -> StageResult:
    try:
        call()
    except (GitHubAPIError, requests.RequestException) as exc:
        return StageResult.failure(str(exc) or exc.__class__.__name__)
    return StageResult.success()


def try_squash_merge(owner: str, repo: str, pr: PullRequest) -> StageResult:
    print(f"  merging PR {pr.label} in '{owner}/{repo}'")
    return _run_stage(lambda: merge_pull(owner, repo, pr.number, SQUASH_MERGE_METHOD))


def try_force_merge(owner: str, repo: str, pr: PullRequest) -> StageResult:
    """Merge the PR head commit straight into its base branch, skipping the PR merge gate."""
    print(f"  attempting to force-merge PR #{pr.number} in '{owner}/{repo}'")
    message = FORCE_MERGE_MESSAGE.format(number=pr.number)
    return _run_stage(lambda: merge_branch(owner, repo, pr.base_ref, pr.head_sha, message))


def try_close(owner: str, repo: str, pr: PullRequest) -> StageResult:
    print(f"  closing PR #{pr.number} in '{owner}/{repo}'")
    return _run_stage(lambda: close_pull(owner, repo, pr.number))


Stage = Callable[[str, str, PullRequest], StageResult]

STAGES: List[Tuple[Stage, Resolution, str]] = [
    (try_squash_merge, Resolution.MERGED, "merging"),
    (try_force_merge, Resolution.FORCE_MERGED, "force-merging"),
    (try_close, Resolution.CLOSED, "closing"),
]


def resolve_pull_request(owner: str, repo: str, pr: PullRequest) -> Resolution:
    """Walk the stages in order and stop at the first one that succeeds."""
    for stage, resolution, verb in STAGES:
        result = stage(owner, repo, pr)
        if result.ok:
            print(f"  {resolution.value} PR #{pr.number} in '{owner}/{repo}'")
            return resolution
        print(f"[error] {verb} PR #{pr.number} in '{owner}/{repo}': {result.error}")

    print(f"[error] PR {pr.label} in '{owner}/{repo}' left open; every fallback failed")
    return Resolution.UNRESOLVED


__all__ = [
    "Resolution",
    "StageResult",
    "try_squash_merge",
    "try_force_merge",
    "try_close",
    "STAGES",
    "resolve_pull_request",
]
