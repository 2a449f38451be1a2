"""Utilities for loading the GitHub credential from the environment or a local (gitignored) file."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

DEFAULT_SECRETS_FILENAME = "local_secrets.json"


def _default_secrets_path() -> Path:
    root = Path(__file__).resolve().parents[1]
    return root / DEFAULT_SECRETS_FILENAME


def load_local_secrets(path: Optional[str | Path] = None) -> Dict[str, Any]:
    """Load secrets from a JSON file; return {} when the file is absent or unreadable."""

    candidate = path or os.getenv("LOCAL_SECRETS_FILE") or _default_secrets_path()
    secrets_path = Path(candidate).expanduser()
    if not secrets_path.exists():
        return {}
    try:
        with secrets_path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except (OSError, ValueError) as exc:
        print(f"[warn] could not read {secrets_path}: {exc}")
        return {}
    return data if isinstance(data, dict) else {}


def load_github_token(path: Optional[str | Path] = None) -> str:
    """Return the configured token, preferring GITHUB_TOKEN over the secrets file.

    An empty string means no credential is configured.
    """

    token = os.getenv("GITHUB_TOKEN", "").strip()
    if token:
        return token
    value = load_local_secrets(path).get("github_token") or ""
    return str(value).strip()


__all__ = ["load_local_secrets", "load_github_token", "DEFAULT_SECRETS_FILENAME"]
