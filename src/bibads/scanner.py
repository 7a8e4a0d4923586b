"""Scan a LaTeX source for the bibliography file name, citation keys and aliases.

The scanner is tolerant: unknown macros and comment lines that are not alias
directives are ignored. Only a missing ``\\bibliography{...}`` is an error,
because without it there is nowhere to write the result.

Alias directives live in LaTeX comments, one per line::

    % bibalias colles2DF 2001MNRAS.328.1039C
    %bibalias peeb80    1980lssu.book.....P
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from bibads.errors import MissingBibliographyDirective, SourceReadError

# ------------- Patterns -------------

BIBLIOGRAPHY_DIRECTIVE = "\\bibliography{"

# \cite{...} and \citep{...} only; an unterminated argument stops at the next
# citation macro or at the end of the text.
CITE_KEYS_PATTERN = re.compile(r"\\(?:cite|citep)\{((?:(?!\\citep?\{)[^}])*)")

ALIAS_MARKER = "bibalias"


@dataclass(frozen=True)
class SourceDocument:
    """Everything the bibliography builder needs from a LaTeX source."""

    bib_file: str
    keys: set[str] = field(default_factory=set)
    aliases: dict[str, str] = field(default_factory=dict)


# ------------- Reading -------------


def read_source(path: str) -> str:
    """Read a LaTeX file as text.

    Raises:
        SourceReadError: if the file cannot be opened or read
    """
    try:
        with open(path, encoding="utf-8", errors="replace") as f:
            return f.read()
    except OSError as e:
        raise SourceReadError(f"Could not read {path}: {e}") from e


# ------------- Extraction -------------


def find_bib_file_name(text: str) -> str:
    """Return the argument of the first ``\\bibliography{...}`` directive."""
    start = text.find(BIBLIOGRAPHY_DIRECTIVE)
    if start == -1:
        raise MissingBibliographyDirective("No \\bibliography{...} directive found")
    rest = text[start + len(BIBLIOGRAPHY_DIRECTIVE) :]
    return rest.split("}", 1)[0]


def extract_citation_keys(text: str) -> set[str]:
    """
    Extract all citation keys used by ``\\cite`` and ``\\citep``.

    Args:
        text: LaTeX source text

    Returns:
        Set of unique, whitespace-stripped, non-empty keys
    """
    keys: set[str] = set()
    for match in CITE_KEYS_PATTERN.finditer(text):
        keys.update(k.strip() for k in match.group(1).split(","))
    keys.discard("")
    return keys


def parse_alias_line(line: str) -> tuple[str, str] | None:
    """Return ``(alias, bibcode)`` if ``line`` is a bibalias directive."""
    tokens = line.split()
    if not tokens or not tokens[0].startswith("%"):
        return None
    if tokens[0] == "%" and len(tokens) >= 4 and tokens[1] == ALIAS_MARKER:
        return tokens[2], tokens[3]
    if tokens[0] == "%" + ALIAS_MARKER and len(tokens) >= 3:
        return tokens[1], tokens[2]
    return None


def extract_aliases(text: str) -> dict[str, str]:
    """Map every alias declared in ``text`` to its bibcode; later directives win."""
    aliases: dict[str, str] = {}
    for line in text.splitlines():
        parsed = parse_alias_line(line)
        if parsed is not None:
            alias, bibcode = parsed
            aliases[alias] = bibcode
    return aliases


def scan_source(text: str) -> SourceDocument:
    """Extract bibliography file name, citation keys and aliases from LaTeX text."""
    return SourceDocument(
        bib_file=find_bib_file_name(text),
        keys=extract_citation_keys(text),
        aliases=extract_aliases(text),
    )


def scan_file(path: str) -> SourceDocument:
    return scan_source(read_source(path))
