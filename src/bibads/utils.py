"""Shared helpers for bibads.

Includes the ADS endpoint constants, progress-line padding, and the HTTP
infrastructure (rate limiting and retries on top of httpx) used by the
fetcher.
"""

from __future__ import annotations

import threading
import time

import httpx

from bibads._version import __version__
from bibads.errors import NetworkError

# ------------- Constants -------------

ADS_BIBTEX_QUERY_URL = "http://adsabs.harvard.edu/cgi-bin/nph-bib_query?data_type=BIBTEX&bibcode="

USER_AGENT = f"bibads/{__version__}"

BIBCODE_COLUMN_WIDTH = 19
ALIAS_COLUMN_WIDTH = 15


# ------------- Text Helpers -------------


def pad_right(text: str | None, width: int) -> str:
    """Pad ``text`` with spaces to exactly ``width`` characters, truncating longer input."""
    return (text or "")[:width].ljust(width)


# ------------- Rate Limiting -------------


class RateLimiter:
    """Thread-safe sliding-window rate limiter for API requests."""

    def __init__(self, req_per_min: int) -> None:
        self.req_per_min = max(req_per_min, 1)
        self.lock = threading.Lock()
        self.timestamps: list[float] = []

    def wait(self) -> None:
        """Block until a request can be made within the rate limit."""
        with self.lock:
            now = time.time()
            window = 60.0
            self.timestamps = [t for t in self.timestamps if now - t < window]
            if len(self.timestamps) >= self.req_per_min:
                earliest = min(self.timestamps)
                sleep_for = window - (now - earliest) + 0.01
                if sleep_for > 0:
                    time.sleep(sleep_for)
                    now = time.time()
                    self.timestamps = [t for t in self.timestamps if now - t < window]
            self.timestamps.append(time.time())


# ------------- HTTP -------------


class HttpClient:
    """Thread-safe HTTP client with optional rate limiting and retries."""

    RETRYABLE_STATUS = {429, 500, 502, 503, 504}

    def __init__(
        self,
        timeout: float | None = None,
        user_agent: str = USER_AGENT,
        rate_limiter: RateLimiter | None = None,
        retries: int = 0,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize HTTP client.

        Args:
            timeout: Request timeout in seconds, None for no timeout
            user_agent: User-Agent header value
            rate_limiter: Optional RateLimiter shared by all requests
            retries: Extra attempts after a transport failure or retryable status
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.client = httpx.Client(
            timeout=httpx.Timeout(timeout),
            headers={"User-Agent": user_agent},
            follow_redirects=True,
            transport=transport,
        )
        self.rate_limiter = rate_limiter
        self.retries = max(retries, 0)

    def get(self, url: str) -> httpx.Response:
        """GET ``url``, retrying transient failures up to ``self.retries`` times.

        A retryable status on the last attempt is returned as is, so the
        caller sees the real status code. Transport failures on the last
        attempt raise NetworkError.
        """
        backoff = 1.0
        attempts = self.retries + 1
        for attempt in range(1, attempts + 1):
            if self.rate_limiter is not None:
                self.rate_limiter.wait()
            try:
                resp = self.client.get(url)
            except (httpx.HTTPError, httpx.InvalidURL) as e:
                if attempt == attempts:
                    raise NetworkError(str(e) or type(e).__name__) from e
            else:
                if resp.status_code not in self.RETRYABLE_STATUS or attempt == attempts:
                    return resp
            time.sleep(backoff)
            backoff = min(backoff * 2, 16.0)
        raise NetworkError(f"Network failure after retries for {url}")  # pragma: no cover

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> HttpClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
