"""Value types for the GitHub resources the sweep reads."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from .config import DISABLED_FEATURES


@dataclass(frozen=True)
class Repository:
    """A repository owned by the authenticated user, with its feature flags."""

    owner: str
    name: str
    has_issues: bool = False
    has_projects: bool = False
    has_wiki: bool = False

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    def features_enabled(self) -> bool:
        """True when every sweep-managed feature is currently on."""
        return all(getattr(self, flag) for flag in DISABLED_FEATURES)

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "Repository":
        owner = (payload.get("owner") or {}).get("login") or ""
        return cls(
            owner=owner,
            name=payload.get("name") or "",
            has_issues=bool(payload.get("has_issues")),
            has_projects=bool(payload.get("has_projects")),
            has_wiki=bool(payload.get("has_wiki")),
        )


@dataclass(frozen=True)
class PullRequest:
    """An open pull request: its number, target branch, and source commit."""

    number: int
    base_ref: str
    head_sha: str
    title: str = ""

    @property
    def label(self) -> str:
        """Log-line reference such as #12 "Bump lodash"."""
        return f"#{self.number} \"{self.title}\"" if self.title else f"#{self.number}"

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "PullRequest":
        return cls(
            number=int(payload["number"]),
            base_ref=(payload.get("base") or {}).get("ref") or "",
            head_sha=(payload.get("head") or {}).get("sha") or "",
            title=payload.get("title") or "",
        )


__all__ = ["Repository", "PullRequest"]
