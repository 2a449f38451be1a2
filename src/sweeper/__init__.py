"""Repository sweep: disable repo features and resolve every open pull request."""

from .runner import main, process_repo

__all__ = ["main", "process_repo"]
