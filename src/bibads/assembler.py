"""Resolve all citation keys concurrently and write the bibliography file."""

from __future__ import annotations

import concurrent.futures
import logging
import os
import tempfile
from collections.abc import Iterable, Mapping

from bibads.cache import load_cache
from bibads.errors import OutputWriteError
from bibads.fetcher import Fetcher
from bibads.resolver import Resolution, format_progress, resolve_key
from bibads.scanner import SourceDocument

ENTRY_SEPARATOR = "\n\n"
OUTPUT_MODE = 0o644


def resolve_all(
    keys: Iterable[str],
    aliases: Mapping[str, str],
    cache: Mapping[str, str],
    fetcher: Fetcher,
    logger: logging.Logger,
    max_workers: int = 8,
) -> list[Resolution]:
    """Resolve every key in parallel.

    Each key is resolved exactly once. Results are returned in completion
    order and a progress line is logged as each one arrives.

    Args:
        keys: Distinct citation keys
        aliases: Alias to bibcode mapping
        cache: Citation key to previously written entry
        fetcher: Remote fetcher for cache misses
        logger: Logger instance
        max_workers: Maximum concurrent workers

    Returns:
        One Resolution per key (order may differ from input)
    """
    results: list[Resolution] = []
    with concurrent.futures.ThreadPoolExecutor(max_workers=max(max_workers, 1)) as ex:
        future_to_key = {ex.submit(resolve_key, key, aliases, cache, fetcher): key for key in set(keys)}
        for future in concurrent.futures.as_completed(future_to_key):
            key = future_to_key[future]
            try:
                res = future.result()
            except Exception as e:
                logger.error("Processing failed for %s: %s", key, e)
                res = Resolution(key=key, bibcode=aliases.get(key, key), alias=key if key in aliases else None)
                res.error = str(e) or type(e).__name__
            logger.info(format_progress(res))
            results.append(res)
    return results


def assemble(resolutions: Iterable[Resolution]) -> str:
    """Concatenate entries, each preceded by a blank-line separator."""
    return "".join(ENTRY_SEPARATOR + res.entry for res in resolutions)


def write_bibliography(text: str, path: str) -> None:
    """Write ``text`` to ``path`` in one atomic replace.

    Raises:
        OutputWriteError: if the file cannot be written
    """
    directory = os.path.dirname(path) or "."
    try:
        tmp = tempfile.NamedTemporaryFile(
            "w", delete=False, encoding="utf-8", dir=directory, suffix=".bib", prefix=".tmp_bib_"
        )
    except OSError as e:
        raise OutputWriteError(f"Failed to write {path}: {e}") from e
    try:
        try:
            tmp.write(text)
            tmp.flush()
            os.fsync(tmp.fileno())
        finally:
            tmp.close()
        os.chmod(tmp.name, OUTPUT_MODE)
        os.replace(tmp.name, path)
    except OSError as e:
        if os.path.exists(tmp.name):
            os.unlink(tmp.name)
        raise OutputWriteError(f"Failed to write {path}: {e}") from e


def build_bibliography(
    document: SourceDocument,
    fetcher: Fetcher,
    logger: logging.Logger,
    use_cache: bool = True,
    max_workers: int = 8,
) -> tuple[str, list[Resolution]]:
    """Resolve every key of ``document`` and return the bibliography text with the per-key results."""
    cache = load_cache(document.bib_file, logger) if use_cache else {}
    results = resolve_all(document.keys, document.aliases, cache, fetcher, logger, max_workers=max_workers)
    return assemble(results), results
