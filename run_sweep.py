"""Convenience shim to run the repository sweep."""

from __future__ import annotations

from src.sweeper.runner import main as run_sweep


if __name__ == "__main__":
    run_sweep()
