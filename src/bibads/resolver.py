"""Resolve one citation key to a BibTeX entry, from the cache or from ADS."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from bibads.errors import FetchError
from bibads.fetcher import Fetcher
from bibads.utils import ALIAS_COLUMN_WIDTH, BIBCODE_COLUMN_WIDTH, pad_right


@dataclass
class Resolution:
    """Outcome of resolving a single citation key."""

    key: str
    bibcode: str
    alias: str | None = None
    entry: str = ""
    cached: bool = False
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def outcome(self) -> str:
        if self.error is not None:
            return self.error
        return "OK (cached)" if self.cached else "OK"


def rewrite_key(entry: str, bibcode: str, alias: str) -> str:
    """Replace the first ``{BIBCODE`` in ``entry`` with ``{ALIAS``.

    The ``{`` anchor keeps bibcodes elsewhere in the entry body (adsurl,
    notes) untouched.
    """
    return entry.replace("{" + bibcode, "{" + alias, 1)


def resolve_key(
    key: str,
    aliases: Mapping[str, str],
    cache: Mapping[str, str],
    fetcher: Fetcher,
) -> Resolution:
    """
    Resolve a citation key to its BibTeX entry.

    The cache is looked up with the key as cited (alias or bibcode); only a
    miss reaches the fetcher. Fetch failures are recorded on the result, never
    raised.

    Args:
        key: Citation key as written in the LaTeX source
        aliases: Alias to bibcode mapping
        cache: Citation key to previously written entry
        fetcher: Remote fetcher used on cache misses

    Returns:
        Resolution with the entry text, or with ``error`` set and an empty entry
    """
    if key in aliases:
        res = Resolution(key=key, bibcode=aliases[key], alias=key)
    else:
        res = Resolution(key=key, bibcode=key)

    cached = cache.get(key)
    if cached is not None:
        entry = cached
        res.cached = True
    else:
        try:
            entry = fetcher.fetch(res.bibcode)
        except FetchError as e:
            res.error = str(e) or type(e).__name__
            return res

    if res.alias is not None:
        entry = rewrite_key(entry, res.bibcode, res.alias)
    res.entry = entry
    return res


def format_progress(res: Resolution) -> str:
    """Render the one-line progress report for a resolution."""
    return "%s   %s   ...   %s" % (
        pad_right(res.bibcode, BIBCODE_COLUMN_WIDTH),
        pad_right(res.alias, ALIAS_COLUMN_WIDTH),
        res.outcome,
    )
