"""Exception hierarchy for bibads.

Fatal errors (source, directive, output) abort a run; ``FetchError`` and its
subclasses are recorded per citation key and never stop the other keys.
"""

from __future__ import annotations


class BibadsError(Exception):
    """Base class for all bibads errors."""


class SourceReadError(BibadsError):
    """The LaTeX source file cannot be read."""


class MissingBibliographyDirective(BibadsError):
    """The LaTeX source has no ``\\bibliography{...}`` directive."""


class CacheUnavailable(BibadsError):
    """The previous bibliography file is absent or unreadable."""


class OutputWriteError(BibadsError):
    """The bibliography file cannot be written."""


class FetchError(BibadsError):
    """A single bibcode could not be fetched from ADS."""


class NetworkError(FetchError):
    """Transport failure or timeout while talking to ADS."""


class HttpStatusError(FetchError):
    """ADS answered with a non-success HTTP status."""

    def __init__(self, status: int, reason: str = "") -> None:
        self.status = status
        self.reason = reason
        message = f"{status} {reason}".strip()
        super().__init__(message)


class MalformedResponse(FetchError):
    """The ADS response body holds no BibTeX entry."""
