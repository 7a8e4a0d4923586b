"""Shared fixtures for bibads tests."""

from __future__ import annotations

import logging

import pytest

from bibads import DictFetcher

JONES_BIBCODE = "2009MNRAS.399..683J"
PEEBLES_BIBCODE = "1980lssu.book.....P"
COLLESS_BIBCODE = "2001MNRAS.328.1039C"

JONES_ENTRY = """@ARTICLE{2009MNRAS.399..683J,
   author = {{Jones}, A. and {Smith}, B.},
    title = "{A Study of Galaxy Clustering}",
  journal = {\\mnras},
     year = 2009,
   volume = 399,
    pages = {683-694},
   adsurl = {http://adsabs.harvard.edu/abs/2009MNRAS.399..683J},
}"""

PEEBLES_ENTRY = """@BOOK{1980lssu.book.....P,
   author = {{Peebles}, P.~J.~E.},
    title = "{The large-scale structure of the universe}",
     year = 1980,
   adsurl = {http://adsabs.harvard.edu/abs/1980lssu.book.....P},
}"""

COLLESS_ENTRY = """@ARTICLE{2001MNRAS.328.1039C,
   author = {{Colless}, M. and {Dalton}, G.},
    title = "{The 2dF Galaxy Redshift Survey}",
  journal = {\\mnras},
     year = 2001,
   adsurl = {http://adsabs.harvard.edu/abs/2001MNRAS.328.1039C},
}"""


@pytest.fixture
def logger():
    """Create a test logger."""
    return logging.getLogger("test")


@pytest.fixture
def ads_entries():
    """Bibcode to entry text, as the ADS export returns them."""
    return {
        JONES_BIBCODE: JONES_ENTRY,
        PEEBLES_BIBCODE: PEEBLES_ENTRY,
        COLLESS_BIBCODE: COLLESS_ENTRY,
    }


@pytest.fixture
def make_fetcher(ads_entries):
    """Factory fixture for in-memory fetchers; defaults to all sample entries."""

    def _make_fetcher(entries=None) -> DictFetcher:
        return DictFetcher(ads_entries if entries is None else entries)

    return _make_fetcher


@pytest.fixture
def write_tex(tmp_path):
    """Write a LaTeX source into tmp_path and return its path."""

    def _write_tex(body: str, name: str = "paper.tex") -> str:
        path = tmp_path / name
        path.write_text(body, encoding="utf-8")
        return str(path)

    return _write_tex
