"""Tests for single-key resolution."""

from __future__ import annotations

from unittest.mock import MagicMock

from bibads import NetworkError, Resolution, format_progress, pad_right, resolve_key, rewrite_key

JONES = "2009MNRAS.399..683J"
PEEBLES = "1980lssu.book.....P"


class TestRewriteKey:
    """Tests for alias key rewriting."""

    def test_rewrites_key_token(self):
        entry = "@BOOK{1980lssu.book.....P,\n title={x}}"
        assert rewrite_key(entry, PEEBLES, "peeb80") == "@BOOK{peeb80,\n title={x}}"

    def test_only_first_braced_occurrence(self):
        entry = "@BOOK{B,\n note={B and {B}},\n adsurl={http://x/abs/B}}"
        assert rewrite_key(entry, "B", "alias") == "@BOOK{alias,\n note={B and {B}},\n adsurl={http://x/abs/B}}"

    def test_unbraced_occurrences_untouched(self):
        entry = "@MISC{other,\n adsurl={http://x/abs/B}}"
        assert rewrite_key(entry, "B", "alias") == entry


class TestResolveKey:
    """Tests for resolve_key."""

    def test_fetches_plain_bibcode(self, make_fetcher, ads_entries):
        fetcher = make_fetcher()
        res = resolve_key(JONES, {}, {}, fetcher)
        assert res.ok
        assert not res.cached
        assert res.alias is None
        assert res.bibcode == JONES
        assert res.entry == ads_entries[JONES]
        assert fetcher.calls == {JONES: 1}

    def test_alias_fetches_bibcode_and_rewrites(self, make_fetcher):
        fetcher = make_fetcher()
        res = resolve_key("peeb80", {"peeb80": PEEBLES}, {}, fetcher)
        assert res.ok
        assert res.bibcode == PEEBLES
        assert res.alias == "peeb80"
        assert res.entry.startswith("@BOOK{peeb80,")
        # adsurl still carries the real bibcode
        assert "abs/" + PEEBLES in res.entry
        assert fetcher.calls == {PEEBLES: 1}

    def test_cache_hit_skips_fetch(self):
        fetcher = MagicMock()
        cache = {JONES: "@ARTICLE{2009MNRAS.399..683J, cached={yes}}"}
        res = resolve_key(JONES, {}, cache, fetcher)
        assert res.cached
        assert res.entry == cache[JONES]
        fetcher.fetch.assert_not_called()

    def test_alias_cache_uses_alias_key(self):
        fetcher = MagicMock()
        cache = {"peeb80": "@BOOK{peeb80, cached={yes}}"}
        res = resolve_key("peeb80", {"peeb80": PEEBLES}, cache, fetcher)
        assert res.cached
        assert res.entry == cache["peeb80"]
        fetcher.fetch.assert_not_called()

    def test_alias_not_found_under_bibcode(self, make_fetcher):
        fetcher = make_fetcher()
        cache = {PEEBLES: "@BOOK{1980lssu.book.....P, cached={yes}}"}
        res = resolve_key("peeb80", {"peeb80": PEEBLES}, cache, fetcher)
        assert not res.cached
        assert fetcher.calls == {PEEBLES: 1}

    def test_fetch_failure_recorded(self, make_fetcher):
        res = resolve_key("1999XXXX...1....1X", {}, {}, make_fetcher())
        assert not res.ok
        assert res.entry == ""
        assert "404" in res.error

    def test_network_error_recorded(self):
        fetcher = MagicMock()
        fetcher.fetch.side_effect = NetworkError("connection refused")
        res = resolve_key(JONES, {}, {}, fetcher)
        assert res.error == "connection refused"
        assert res.outcome == "connection refused"


class TestFormatProgress:
    """Tests for the progress line."""

    def test_pad_right(self):
        assert pad_right("abc", 5) == "abc  "
        assert pad_right("abcdefgh", 5) == "abcde"
        assert pad_right(None, 3) == "   "

    def test_fetched_line(self):
        res = Resolution(key=JONES, bibcode=JONES, entry="@A{x,}")
        assert format_progress(res) == JONES + "   " + " " * 15 + "   ...   OK"

    def test_cached_aliased_line(self):
        res = Resolution(key="peeb80", bibcode=PEEBLES, alias="peeb80", cached=True)
        assert format_progress(res) == PEEBLES + "   " + "peeb80" + " " * 9 + "   ...   OK (cached)"

    def test_error_line_truncates_long_columns(self):
        res = Resolution(key="k", bibcode="B" * 25, alias="A" * 20, error="404 Not Found")
        assert format_progress(res) == "B" * 19 + "   " + "A" * 15 + "   ...   404 Not Found"
