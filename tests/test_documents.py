"""Tests for the document model."""

import copy

import pytest

from duoblog_pkg.documents import Document, as_document, virtual_document


class TestDocument:
    """Test cases for Document."""

    def test_attribute_access(self):
        """Test attribute access to document fields."""
        doc = Document(url='/a', lang='en')
        assert doc.url == '/a'
        assert doc['lang'] == 'en'
        with pytest.raises(AttributeError):
            doc.title

    def test_evolve_returns_copy(self):
        """Test evolve returns copy."""
        doc = Document(url='/a')
        evolved = doc.evolve(translation=True)
        assert evolved == {'url': '/a', 'translation': True}
        assert 'translation' not in doc
        assert isinstance(evolved, Document)

    def test_virtual_document(self):
        """Test virtual document creation."""
        doc = virtual_document('en/all', '/all', 'all', lang='en')
        assert doc.is_virtual
        assert doc.source_path == 'en/all'
        assert doc.layout == 'all'
        assert not Document(url='/a').is_virtual

    def test_as_document(self):
        """Test wrapping plain dicts as documents."""
        doc = Document(url='/a')
        assert as_document(doc) is doc
        assert isinstance(as_document({'url': '/a'}), Document)

    def test_copy(self):
        """Test deep copying a document."""
        doc = Document(url='/a', tags=['x'])
        assert copy.deepcopy(doc) == doc
