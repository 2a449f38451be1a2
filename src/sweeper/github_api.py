"""REST endpoint wrappers for repositories, pull requests, and merges."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from .config import SQUASH_MERGE_METHOD
from .http_client import api_request, paged_get
from .models import PullRequest, Repository


def list_user_repos() -> List[Repository]:
    """Return every repository owned by the authenticated user, across all pages."""
    payload = paged_get("/user/repos", {"affiliation": "owner"})
    return [Repository.from_api(entry) for entry in payload]


def get_repo(owner: str, repo: str) -> Repository:
    """Fetch current settings for `owner/repo`."""
    return Repository.from_api(api_request("GET", f"/repos/{owner}/{repo}"))


def update_repo(owner: str, repo: str, **settings: Any) -> Dict[str, Any]:
    """PATCH repository settings such as has_issues/has_projects/has_wiki."""
    return api_request("PATCH", f"/repos/{owner}/{repo}", json=settings) or {}


def list_open_pulls(owner: str, repo: str) -> List[PullRequest]:
    """Return all open pull requests for `owner/repo`, across all pages."""
    payload = paged_get(f"/repos/{owner}/{repo}/pulls", {"state": "open"})
    return [PullRequest.from_api(entry) for entry in payload]


def merge_pull(owner: str, repo: str, number: int, merge_method: str = SQUASH_MERGE_METHOD) -> Dict[str, Any]:
    """Merge a pull request through the regular PR merge endpoint."""
    return api_request(
        "PUT",
        f"/repos/{owner}/{repo}/pulls/{number}/merge",
        json={"merge_method": merge_method},
    ) or {}


def merge_branch(owner: str, repo: str, base: str, head: str, commit_message: str) -> Optional[Dict[str, Any]]:
    """Merge `head` (branch or sha) straight into `base`; None when already merged (204)."""
    return api_request(
        "POST",
        f"/repos/{owner}/{repo}/merges",
        json={"base": base, "head": head, "commit_message": commit_message},
    )


def close_pull(owner: str, repo: str, number: int) -> Dict[str, Any]:
    """Close a pull request without merging it."""
    return api_request(
        "PATCH",
        f"/repos/{owner}/{repo}/pulls/{number}",
        json={"state": "closed"},
    ) or {}


__all__ = [
    "list_user_repos",
    "get_repo",
    "update_repo",
    "list_open_pulls",
    "merge_pull",
    "merge_branch",
    "close_pull",
]
