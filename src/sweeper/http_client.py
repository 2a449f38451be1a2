"""HTTP helpers with retry/backoff and rate-limit handling for the GitHub REST API."""

from __future__ import annotations

import os
import threading
import time
from typing import Any, Dict, Iterator, List, Optional, Tuple

import requests

from .config import (
    BACKOFF_BASE_SEC,
    BASE_URL,
    MAX_RETRIES,
    MAX_WAIT_ON_403,
    PER_PAGE,
    RATE_LIMIT_RESET_WAIT_SEC,
    REQUEST_TIMEOUT,
    USER_AGENT,
)

DEFAULT_HEADERS = {
    "Accept": "application/vnd.github.v3+json",
    "User-Agent": USER_AGENT,
}

# One session per worker thread; requests.Session is not guaranteed thread-safe.
_LOCAL = threading.local()
_AUTH_TOKEN: Optional[str] = None


class GitHubAPIError(RuntimeError):
    """Raised when GitHub answers a request with a non-success status."""

    def __init__(self, status_code: int, message: str, url: str) -> None:
        self.status_code = status_code
        self.message = message
        self.url = url
        super().__init__(message)


def sleep_with_jitter(base: float) -> None:
    """Pause execution with +/- 25% jitter to avoid synchronized retries."""
    jitter = base * 0.25 * (0.5 - (os.urandom(1)[0] / 255.0))
    time.sleep(max(0.0, base + jitter))


def error_message(resp: requests.Response) -> str:
    """Extract GitHub's error message from a response, falling back to the body text."""
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and (body.get("message") or body.get("error")):
        return str(body.get("message") or body.get("error"))
    return (resp.text or "")[:300] or f"HTTP {resp.status_code}"


def log_http_error(resp: requests.Response, url: str) -> None:
    """Print a short, human-readable message when GitHub returns an error."""
    print(f"[error] HTTP {resp.status_code} for {url}\n  -> {error_message(resp)}")


def set_auth_token(token: Optional[str]) -> None:
    """Set or clear the token sent as the Authorization header by every thread's session."""
    global _AUTH_TOKEN
    _AUTH_TOKEN = token or None


def get_session() -> requests.Session:
    """Return the calling thread's session, rebuilding it when the token changed."""
    session = getattr(_LOCAL, "session", None)
    if session is None or getattr(_LOCAL, "token", None) != _AUTH_TOKEN:
        session = requests.Session()
        session.headers.update(DEFAULT_HEADERS)
        if _AUTH_TOKEN:
            session.headers["Authorization"] = f"token {_AUTH_TOKEN}"
        _LOCAL.session = session
        _LOCAL.token = _AUTH_TOKEN
    return session


def rate_limit_wait(resp: requests.Response, method: str, url: str) -> Optional[Tuple[int, bool]]:
    """Classify a 403/429 answer as a rate limit.

    Returns (seconds_to_wait, is_primary) or None when `resp` is not a rate limit.
    Primary (quota) waits run until X-RateLimit-Reset; secondary (abuse) waits are
    capped by MAX_WAIT_ON_403.
    """
    headers = resp.headers or {}
    remaining = headers.get("X-RateLimit-Remaining")
    reset = headers.get("X-RateLimit-Reset")
    retry_after = headers.get("Retry-After")

    if remaining == "0":
        print(f"[rate-limit] Request quota exhausted for request {method} {url}")
        if reset and str(reset).isdigit():
            return max(0, int(reset) - int(time.time())) + 1, True
        return RATE_LIMIT_RESET_WAIT_SEC, True

    if retry_after and str(retry_after).isdigit():
        print(f"[rate-limit] Abuse detection mechanism triggered for request {method} {url}")
        return min(int(retry_after), MAX_WAIT_ON_403), False

    if resp.status_code == 429:
        print(f"[rate-limit] Abuse detection mechanism triggered for request {method} {url}")
        return min(60, MAX_WAIT_ON_403), False

    return None


def request_with_backoff(method: str, url: str, **kwargs) -> requests.Response:
    """Perform a REST call with retry, exponential backoff, and rate-limit waits.

    Quota waits do not use up retry attempts, so a request is only given up on for
    transport errors, server errors, or repeated secondary limits. Client errors
    other than rate limits are returned immediately; callers decide whether a
    non-2xx response is fatal.
    """
    timeout = kwargs.pop("timeout", REQUEST_TIMEOUT)
    last_exc: Optional[requests.RequestException] = None
    resp: Optional[requests.Response] = None

    attempt = 0
    while attempt < MAX_RETRIES:
        attempt += 1
        try:
            resp = get_session().request(method, url, timeout=timeout, **kwargs)
        except requests.RequestException as exc:
            last_exc = exc
            resp = None
            if attempt < MAX_RETRIES:
                delay = BACKOFF_BASE_SEC * (2 ** (attempt - 1))
                print(f"[retry {attempt}/{MAX_RETRIES}] {exc} -> sleep {delay:.1f}s")
                sleep_with_jitter(delay)
            continue

        if 200 <= resp.status_code < 300:
            return resp

        if resp.status_code in (403, 429):
            limit = rate_limit_wait(resp, method, url)
            if limit is not None:
                wait_sec, primary = limit
                if primary:
                    attempt -= 1
                    print(f"[rate-limit] Retrying after {wait_sec} seconds!")
                    time.sleep(wait_sec)
                    continue
                if attempt < MAX_RETRIES:
                    print(f"[backoff {resp.status_code}] waiting {wait_sec}s for {url}")
                    sleep_with_jitter(wait_sec)
                    continue
                break

        if resp.status_code < 500:
            log_http_error(resp, url)
            return resp

        if attempt < MAX_RETRIES:
            delay = BACKOFF_BASE_SEC * (2 ** (attempt - 1))
            print(f"[retry {attempt}/{MAX_RETRIES}] HTTP {resp.status_code} -> sleep {delay:.1f}s")
            sleep_with_jitter(delay)

    if resp is not None:
        log_http_error(resp, url)
        return resp
    if last_exc:
        raise last_exc
    raise RuntimeError("Request failed after retries.")


def api_url(path: str) -> str:
    """Join an API path onto BASE_URL; absolute URLs pass through untouched."""
    if path.startswith("http://") or path.startswith("https://"):
        return path
    return f"{BASE_URL}/{path.lstrip('/')}"


def api_request(method: str, path: str, **kwargs) -> Any:
    """Issue a request and return the decoded JSON body (None for empty bodies).

    Raises GitHubAPIError for any non-2xx response.
    """
    url = api_url(path)
    resp = request_with_backoff(method, url, **kwargs)
    if not 200 <= resp.status_code < 300:
        raise GitHubAPIError(resp.status_code, error_message(resp), url)
    if resp.status_code == 204 or not resp.content:
        return None
    return resp.json()


def iter_pages(path: str, params: Optional[Dict[str, Any]] = None) -> Iterator[List[Dict[str, Any]]]:
    """Yield one list per page, following the Link rel="next" header until exhausted."""
    url = api_url(path)
    page_params: Optional[Dict[str, Any]] = {**(params or {}), "per_page": PER_PAGE}
    while url:
        resp = request_with_backoff("GET", url, params=page_params)
        if resp.status_code != 200:
            raise GitHubAPIError(resp.status_code, error_message(resp), url)

        batch = resp.json()
        if not isinstance(batch, list):
            raise GitHubAPIError(resp.status_code, f"expected a list page, got {type(batch).__name__}", url)
        if not batch:
            break
        yield batch

        # The next link already carries the query string.
        url = ((resp.links or {}).get("next") or {}).get("url")
        page_params = None


def paged_get(path: str, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
    """Collect every page of a listing endpoint into one list."""
    results: List[Dict[str, Any]] = []
    for batch in iter_pages(path, params):
        results.extend(batch)
    return results


__all__ = [
    "DEFAULT_HEADERS",
    "GitHubAPIError",
    "sleep_with_jitter",
    "error_message",
    "log_http_error",
    "set_auth_token",
    "get_session",
    "rate_limit_wait",
    "request_with_backoff",
    "api_url",
    "api_request",
    "iter_pages",
    "paged_get",
]
