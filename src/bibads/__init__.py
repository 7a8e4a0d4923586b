"""bibads - Build BibTeX bibliographies for LaTeX documents from NASA ADS.

This package provides tools for:
- Scanning a LaTeX source for its bibliography file, citations and aliases
- Reusing entries from a previously generated bibliography
- Fetching missing entries from ADS concurrently
- Writing the assembled bibliography file

Example usage:
    from bibads import AdsFetcher, HttpClient, build_bibliography, scan_file

    document = scan_file("paper.tex")
    with HttpClient(timeout=30) as http:
        text, results = build_bibliography(document, AdsFetcher(http), logger)
    write_bibliography(text, document.bib_file)
"""

from bibads._version import __version__
from bibads.assembler import assemble, build_bibliography, resolve_all, write_bibliography
from bibads.cache import entry_key, load_cache, parse_bib_text
from bibads.errors import (
    BibadsError,
    CacheUnavailable,
    FetchError,
    HttpStatusError,
    MalformedResponse,
    MissingBibliographyDirective,
    NetworkError,
    OutputWriteError,
    SourceReadError,
)
from bibads.fetcher import AdsFetcher, DictFetcher, Fetcher, first_entry
from bibads.resolver import Resolution, format_progress, resolve_key, rewrite_key
from bibads.scanner import (
    SourceDocument,
    extract_aliases,
    extract_citation_keys,
    find_bib_file_name,
    read_source,
    scan_file,
    scan_source,
)
from bibads.utils import ADS_BIBTEX_QUERY_URL, HttpClient, RateLimiter, pad_right

__all__ = [
    # Version
    "__version__",
    # Scanning
    "SourceDocument",
    "extract_aliases",
    "extract_citation_keys",
    "find_bib_file_name",
    "read_source",
    "scan_file",
    "scan_source",
    # Cache
    "entry_key",
    "load_cache",
    "parse_bib_text",
    # Fetching
    "ADS_BIBTEX_QUERY_URL",
    "AdsFetcher",
    "DictFetcher",
    "Fetcher",
    "HttpClient",
    "RateLimiter",
    "first_entry",
    # Resolution and assembly
    "Resolution",
    "assemble",
    "build_bibliography",
    "format_progress",
    "pad_right",
    "resolve_all",
    "resolve_key",
    "rewrite_key",
    "write_bibliography",
    # Errors
    "BibadsError",
    "CacheUnavailable",
    "FetchError",
    "HttpStatusError",
    "MalformedResponse",
    "MissingBibliographyDirective",
    "NetworkError",
    "OutputWriteError",
    "SourceReadError",
]
