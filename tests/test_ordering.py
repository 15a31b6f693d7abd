"""Tests for document ordering."""

import pytest

from duoblog_pkg.ordering import order_documents, parse_order_key


class TestOrdering:
    """Test cases for order_documents."""

    def test_descending_by_timestamp(self):
        """Test descending by timestamp."""
        docs = [{'id': 'a', 'timestamp': 1}, {'id': 'b', 'timestamp': 3}, {'id': 'c', 'timestamp': 2}]
        ordered = order_documents(docs, ['-timestamp'])
        assert [d['id'] for d in ordered] == ['b', 'c', 'a']

    def test_ascending_by_field(self):
        """Test ascending by field."""
        docs = [{'id': 'a', 'title': 'b'}, {'id': 'b', 'title': 'a'}]
        ordered = order_documents(docs, ['title'])
        assert [d['id'] for d in ordered] == ['b', 'a']

    def test_stable_for_equal_keys(self):
        """Test stable for equal keys."""
        docs = [{'id': i, 'timestamp': 5} for i in range(6)]
        docs.insert(3, {'id': 'newest', 'timestamp': 9})
        ordered = order_documents(docs, ['-timestamp'])
        assert [d['id'] for d in ordered] == ['newest', 0, 1, 2, 3, 4, 5]

    def test_multiple_keys(self):
        """Test ordering by multiple keys."""
        docs = [
            {'id': 1, 'lang': 'ru', 'timestamp': 1},
            {'id': 2, 'lang': 'en', 'timestamp': 1},
            {'id': 3, 'lang': 'en', 'timestamp': 2},
            {'id': 4, 'lang': 'ru', 'timestamp': 3},
        ]
        ordered = order_documents(docs, ['lang', '-timestamp'])
        assert [d['id'] for d in ordered] == [3, 2, 4, 1]

    def test_does_not_mutate_input(self):
        """Test does not mutate input."""
        docs = [{'timestamp': 1}, {'timestamp': 2}]
        original = list(docs)
        ordered = order_documents(docs, ['-timestamp'])
        assert docs == original
        assert ordered is not docs

    def test_missing_values_sort_below_defined(self):
        """Test missing values sort below defined."""
        docs = [{'id': 'none', 'timestamp': None}, {'id': 'missing'}, {'id': 'set', 'timestamp': 0}]

        ascending = order_documents(docs, ['timestamp'])
        assert [d['id'] for d in ascending] == ['none', 'missing', 'set']

        descending = order_documents(docs, ['-timestamp'])
        assert [d['id'] for d in descending] == ['set', 'none', 'missing']

    def test_incomparable_values_raise(self):
        """Test incomparable values raise."""
        docs = [{'timestamp': 'yesterday'}, {'timestamp': 3}]
        with pytest.raises(TypeError):
            order_documents(docs, ['timestamp'])

    def test_empty_keys_raise(self):
        """Test empty keys raise."""
        with pytest.raises(ValueError):
            order_documents([{'timestamp': 1}], [])

    def test_parse_order_key(self):
        """Test parsing order directives."""
        assert parse_order_key('-timestamp') == ('timestamp', True)
        assert parse_order_key('title') == ('title', False)
        with pytest.raises(ValueError):
            parse_order_key('-')
        with pytest.raises(ValueError):
            parse_order_key('')
