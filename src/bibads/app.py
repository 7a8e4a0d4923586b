#!/usr/bin/env python3
"""
bibads: build the BibTeX file of a LaTeX document from NASA ADS.

The name of the generated file is taken from the document itself: a source
containing ``\\bibliography{KN16.bib}`` produces ``KN16.bib``. Any existing
file with that name is overwritten; its entries are reused as a cache unless
``--nocache`` is given.

Every citation must be an ADS bibcode, e.g. ``\\cite{2009MNRAS.399..683J}``,
or an alias declared in a comment::

    % bibalias colles2DF 2001MNRAS.328.1039C
    % bibalias peeb80    1980lssu.book.....P

    \\citep{peeb80, colles2DF}

Examples
--------
$ bibads paper.tex
$ bibads paper.tex --nocache --max-workers 4 --timeout 30
$ bibads paper.tex --dry-run --verbose
"""

from __future__ import annotations

import argparse
import logging

from bibads.assembler import build_bibliography, write_bibliography
from bibads.errors import BibadsError
from bibads.fetcher import AdsFetcher
from bibads.resolver import Resolution
from bibads.scanner import scan_file
from bibads.utils import HttpClient, RateLimiter


# ------------- CLI -------------
def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="bibads",
        description="Generate the bibliography of a LaTeX file from NASA ADS bibcodes.",
    )
    p.add_argument("texfile", help="LaTeX source file")
    p.add_argument("--nocache", action="store_true", help="Ignore the existing bib file and fetch every entry")
    p.add_argument("--max-workers", type=int, default=8, help="Max concurrent fetches (default 8)")
    p.add_argument("--timeout", type=float, default=None, help="HTTP timeout seconds (default: none)")
    p.add_argument("--retries", type=int, default=0, help="Retries on network errors and 429/5xx (default 0)")
    p.add_argument("--rate-limit", type=int, default=0, help="Requests per minute, 0 for unlimited (default 0)")
    p.add_argument("--quote-bibcodes", action="store_true", help="Percent-encode bibcodes in the query URL")
    p.add_argument("--dry-run", action="store_true", help="Print the bibliography instead of writing it")
    p.add_argument("--verbose", action="store_true", help="Verbose logging")
    return p


class ProgressFormatter(logging.Formatter):
    """Plain messages at INFO so progress lines read as-is; other levels keep their prefix."""

    def __init__(self) -> None:
        super().__init__("%(levelname)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        if record.levelno == logging.INFO:
            return record.getMessage()
        return super().format(record)


def init_logging(verbose: bool) -> logging.Logger:
    level = logging.DEBUG if verbose else logging.INFO
    handler = logging.StreamHandler()
    handler.setFormatter(ProgressFormatter())
    logging.basicConfig(level=level, handlers=[handler])
    logger = logging.getLogger("bibads")
    logger.setLevel(level)
    return logger


def setup_http_client(args: argparse.Namespace) -> HttpClient:
    """Create the HTTP client from command-line options."""
    rate_limiter = RateLimiter(args.rate_limit) if args.rate_limit > 0 else None
    return HttpClient(timeout=args.timeout, rate_limiter=rate_limiter, retries=args.retries)


def summarize(results: list[Resolution], logger: logging.Logger) -> dict[str, int]:
    fetched = sum(1 for r in results if r.ok and not r.cached)
    cached = sum(1 for r in results if r.cached)
    failed = [r for r in results if not r.ok]
    logger.info("Resolved %d key(s): %d fetched, %d cached, %d failed", len(results), fetched, cached, len(failed))
    for r in sorted(failed, key=lambda r: r.key):
        logger.warning("  - %s: %s", r.key, r.error)
    return {"total": len(results), "fetched": fetched, "cached": cached, "failed": len(failed)}


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Args:
        argv: Command-line arguments. If None, uses sys.argv.

    Returns:
        Exit code: 0 when the bibliography was written (even if some keys
        failed), 1 when the source or output file could not be handled.
    """
    args = build_arg_parser().parse_args(argv)
    logger = init_logging(args.verbose)

    try:
        document = scan_file(args.texfile)
    except BibadsError as e:
        logger.error("%s", e)
        return 1

    logger.info("bib file name: %s", document.bib_file)
    logger.debug("Found %d citation key(s) and %d alias(es)", len(document.keys), len(document.aliases))

    with setup_http_client(args) as http:
        fetcher = AdsFetcher(http, quote_bibcodes=args.quote_bibcodes)
        text, results = build_bibliography(
            document, fetcher, logger, use_cache=not args.nocache, max_workers=args.max_workers
        )
    summarize(results, logger)

    if args.dry_run:
        print(text)
        return 0

    try:
        write_bibliography(text, document.bib_file)
    except BibadsError as e:
        logger.error("%s", e)
        return 1
    logger.info("Wrote %d entries to %s", sum(1 for r in results if r.ok), document.bib_file)
    return 0
