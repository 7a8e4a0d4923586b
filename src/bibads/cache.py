"""Load previously written bibliography entries so they need not be fetched again."""

from __future__ import annotations

import logging

from bibads.errors import CacheUnavailable

LOG = logging.getLogger(__name__)


def entry_key(entry: str) -> str | None:
    """Return the key token of a raw ``@TYPE{KEY, ...}`` entry, or None if malformed."""
    open_idx = entry.find("{")
    if open_idx == -1:
        return None
    comma_idx = entry.find(",", open_idx + 1)
    if comma_idx == -1:
        return None
    return entry[open_idx + 1 : comma_idx].strip() or None


def parse_bib_text(text: str) -> dict[str, str]:
    """
    Split raw BibTeX text into entries keyed by their citation key.

    Entries are kept verbatim apart from trailing whitespace. Text before the
    first ``@`` and segments without a ``{KEY,`` token are skipped.

    Args:
        text: Contents of a .bib file

    Returns:
        Mapping of citation key to entry text (starting with ``@``)
    """
    cache: dict[str, str] = {}
    for segment in text.split("@")[1:]:
        entry = ("@" + segment).rstrip()
        key = entry_key(entry)
        if key is None:
            continue
        cache[key] = entry
    return cache


def read_cache_file(path: str) -> dict[str, str]:
    """Parse the bibliography at ``path``.

    Raises:
        CacheUnavailable: if the file is missing or unreadable
    """
    try:
        with open(path, encoding="utf-8", errors="replace") as f:
            text = f.read()
    except OSError as e:
        raise CacheUnavailable(f"Could not read {path}: {e}") from e
    return parse_bib_text(text)


def load_cache(path: str, logger: logging.Logger | None = None) -> dict[str, str]:
    """Load the cache from ``path``, falling back to an empty cache."""
    logger = logger or LOG
    try:
        cache = read_cache_file(path)
    except CacheUnavailable as e:
        logger.debug("No usable cache: %s", e)
        return {}
    logger.debug("Loaded %d cached entries from %s", len(cache), path)
    return cache
