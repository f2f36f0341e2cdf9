"""Tests for indexization and comment stripping."""

import json

import pytest

from cellanim.errors import EmptyIndexError, InvalidIndexError
from cellanim.serialization import from_indexized, parse_index_keys, strip_comments, to_indexized


class TestIndexize:

    def test_dense_inverse(self):
        items = ["a", "b", "c"]
        assert from_indexized(to_indexized(items), str) == items

    def test_keys_follow_positions(self):
        assert list(to_indexized(["a", "b"]).items()) == [(0, "a"), (1, "b")]

    def test_gaps_use_default(self):
        assert from_indexized({2: "c", 0: "a"}, lambda: "-") == ["a", "-", "c"]

    def test_empty_mapping(self):
        with pytest.raises(EmptyIndexError):
            from_indexized({}, list)

    def test_negative_key(self):
        with pytest.raises(InvalidIndexError):
            from_indexized({-1: "a"}, str)

    def test_parse_keys(self):
        assert parse_index_keys({"0": "a", "12": "b"}) == {0: "a", 12: "b"}

    @pytest.mark.parametrize("tree", [{"-1": "a"}, {"x": "a"}, {"１": "a"}, {"1": "a", "01": "b"}, ["a"]])
    def test_parse_bad_keys(self, tree):
        with pytest.raises(InvalidIndexError):
            parse_index_keys(tree)


class TestStripComments:

    def test_line_comments(self):
        text = '{\n  "a": 1, // one\n  "b": 2\n}\n// done'
        assert json.loads(strip_comments(text)) == {"a": 1, "b": 2}

    def test_block_comments_keep_lines(self):
        text = '{/* first\nsecond */"a": 1}'
        stripped = strip_comments(text)
        assert stripped == '{\n"a": 1}'
        assert json.loads(stripped) == {"a": 1}

    def test_markers_in_strings(self):
        text = '{"url": "http://example.com", "glob": "/*.png", "q": "say \\"//hi\\""}'
        assert strip_comments(text) == text
        assert json.loads(strip_comments(text))["q"] == 'say "//hi"'

    def test_unterminated_block(self):
        assert strip_comments('[1] /* trailing') == '[1] '
