"""Fetch BibTeX entries for bibcodes from the NASA Astrophysics Data System."""

from __future__ import annotations

import threading
import urllib.parse
from collections.abc import Mapping
from typing import Protocol

from bibads.errors import HttpStatusError, MalformedResponse
from bibads.utils import ADS_BIBTEX_QUERY_URL, HttpClient


class Fetcher(Protocol):
    """Anything that can turn a bibcode into BibTeX text."""

    def fetch(self, bibcode: str) -> str:
        """Return the BibTeX entry for ``bibcode`` or raise FetchError."""
        ...


def first_entry(body: str) -> str:
    """Return the first ``@``-delimited entry of a response body.

    Raises:
        MalformedResponse: if the body contains no ``@``
    """
    parts = body.split("@")
    if len(parts) < 2:
        raise MalformedResponse("No BibTeX entry in response")
    return "@" + parts[1]


class AdsFetcher:
    """Query the ADS BibTeX export for a single bibcode per request."""

    def __init__(
        self,
        http: HttpClient,
        base_url: str = ADS_BIBTEX_QUERY_URL,
        quote_bibcodes: bool = False,
    ) -> None:
        self.http = http
        self.base_url = base_url
        self.quote_bibcodes = quote_bibcodes

    def url_for(self, bibcode: str) -> str:
        if self.quote_bibcodes:
            bibcode = urllib.parse.quote(bibcode, safe="")
        return self.base_url + bibcode

    def fetch(self, bibcode: str) -> str:
        resp = self.http.get(self.url_for(bibcode))
        if not resp.is_success:
            raise HttpStatusError(resp.status_code, resp.reason_phrase)
        return first_entry(resp.text)


class DictFetcher:
    """In-memory fetcher backed by a bibcode → entry mapping.

    Unknown bibcodes answer like ADS does for an unknown record: with a
    404 status. Calls are counted per bibcode.
    """

    def __init__(self, entries: Mapping[str, str]) -> None:
        self.entries = dict(entries)
        self.calls: dict[str, int] = {}
        self._lock = threading.Lock()

    def fetch(self, bibcode: str) -> str:
        with self._lock:
            self.calls[bibcode] = self.calls.get(bibcode, 0) + 1
        if bibcode not in self.entries:
            raise HttpStatusError(404, "Not Found")
        return first_entry(self.entries[bibcode])
