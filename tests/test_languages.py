"""Tests for language partitioning and translation linking."""

import logging

import pytest

from duoblog_pkg.languages import TranslationMap, has_translation, link_translations, partition_by_language


class TestTranslationMap:
    """Test cases for TranslationMap."""

    def test_pair_is_symmetric(self):
        """Test pair is symmetric."""
        translations = TranslationMap.pair('en', 'ru')
        assert translations.counterparts('en') == ('ru',)
        assert translations.counterparts('ru') == ('en',)
        assert translations.languages == ['en', 'ru']

    def test_unknown_language_has_no_counterparts(self):
        """Test unknown language has no counterparts."""
        assert TranslationMap.pair('en', 'ru').counterparts('de') == ()

    def test_list_of_counterparts(self):
        """Test list of counterparts."""
        translations = TranslationMap({'en': ['ru', 'de']})
        assert translations.counterparts('en') == ('ru', 'de')
        assert 'en' in translations
        assert 'ru' not in translations

    def test_invalid_mappings_raise(self):
        """Test invalid mappings raise."""
        with pytest.raises(ValueError):
            TranslationMap({'en': 'en'})
        with pytest.raises(ValueError):
            TranslationMap({'en': ''})
        with pytest.raises(ValueError):
            TranslationMap({'en': [None]})


class TestTranslationLinking:
    """Test cases for partitioning and linking."""

    def test_partition_preserves_order(self, make_doc):
        """Test partition preserves order."""
        docs = [make_doc('a', 'en'), make_doc('b', 'ru'), make_doc('c', 'en')]
        partitions = partition_by_language(docs)
        assert list(partitions) == ['en', 'ru']
        assert [d['url'] for d in partitions['en']] == ['/a', '/c']

    def test_translation_is_symmetric(self, make_doc):
        """Test translation is symmetric."""
        en = make_doc('foo', 'en')
        ru = make_doc('foo', 'ru')
        linked = link_translations(partition_by_language([en, ru]), TranslationMap.pair('en', 'ru'))
        assert linked['en'][0]['translation'] is True
        assert linked['ru'][0]['translation'] is True

    def test_without_counterpart(self, make_doc):
        """Test linking a language without counterparts."""
        docs = [make_doc('foo', 'en'), make_doc('bar', 'ru')]
        linked = link_translations(partition_by_language(docs), TranslationMap.pair('en', 'ru'))
        assert linked['en'][0]['translation'] is False
        assert linked['ru'][0]['translation'] is False

    def test_missing_partition_counts_as_empty(self, make_doc):
        """Test missing partition counts as empty."""
        docs = [make_doc('foo', 'en')]
        linked = link_translations(partition_by_language(docs), TranslationMap.pair('en', 'ru'))
        assert linked['en'][0]['translation'] is False
        assert has_translation('/foo', ['ru'], {}) is False

    def test_originals_are_not_mutated(self, make_doc):
        """Test originals are not mutated."""
        en = make_doc('foo', 'en')
        partitions = partition_by_language([en, make_doc('foo', 'ru')])
        linked = link_translations(partitions, TranslationMap.pair('en', 'ru'))
        assert 'translation' not in en
        assert linked['en'][0] is not en
        assert partitions['en'][0] is en

    def test_unmapped_language_warns_and_is_not_linked(self, make_doc, caplog):
        """Test unmapped language warns and is not linked."""
        docs = [make_doc('foo', 'de'), make_doc('foo', 'en')]
        with caplog.at_level(logging.WARNING):
            linked = link_translations(partition_by_language(docs), TranslationMap.pair('en', 'ru'))
        assert linked['de'][0]['translation'] is False
        assert "'de'" in caplog.text
