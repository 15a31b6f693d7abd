"""
Document model for Duoblog.

A document is a plain mapping of fields. Real documents come from the loader,
virtual documents (index pages, tag pages, archives, feeds) are assembled by
the page planner and never have a source file.
"""

from typing import Any, Dict


class Document(dict):
    """A source or virtual page.

    Fields are readable both as keys and as attributes so templates and
    pipeline code can use whichever reads better. Documents are treated as
    immutable once built: use ``evolve`` to derive a changed copy.
    """

    def __getattr__(self, name: str) -> Any:
        try:
            return self[name]
        except KeyError:
            raise AttributeError(name) from None

    @property
    def is_virtual(self) -> bool:
        return self.get('virtual', False)

    def evolve(self, **fields: Any) -> 'Document':
        """Return a shallow copy with ``fields`` merged in."""
        copy = Document(self)
        copy.update(fields)
        return copy

    def __repr__(self) -> str:
        return f"Document(source_path={self.get('source_path')!r}, url={self.get('url')!r}, lang={self.get('lang')!r})"


def virtual_document(source_path: str, url: str, layout: str, **fields: Any) -> Document:
    """Build a document that has no source file behind it."""
    document = Document(fields)
    document.update({
        'source_path': source_path,
        'url': url,
        'layout': layout,
        'virtual': True,
    })
    return document


def as_document(attrs: Dict[str, Any]) -> Document:
    if isinstance(attrs, Document):
        return attrs
    return Document(attrs)
