"""
Language partitioning and translation linking.

Each language is paired with one or more counterpart languages through an
explicit ``TranslationMap``. A document has a translation when a document
with the same URL exists in a counterpart language.
"""

import logging
from typing import Dict, Iterable, List, Mapping, Sequence, Tuple, Union

from .documents import as_document
from .grouping import group_documents

logger = logging.getLogger(__name__)


class TranslationMap:
    """Maps a language tag to the tags of its translation counterparts."""

    def __init__(self, mapping: Mapping[str, Union[str, Sequence[str]]]):
        self._counterparts: Dict[str, Tuple[str, ...]] = {}
        for lang, counterparts in mapping.items():
            if isinstance(counterparts, str):
                counterparts = [counterparts]
            counterparts = tuple(counterparts)
            for tag in (lang, *counterparts):
                if not isinstance(tag, str) or not tag:
                    raise ValueError(f"Language tags must be non-empty strings, got {tag!r}")
            if lang in counterparts:
                raise ValueError(f"Language {lang!r} cannot be its own translation")
            self._counterparts[lang] = counterparts

    @classmethod
    def pair(cls, first: str, second: str) -> 'TranslationMap':
        """Two languages, each the translation of the other."""
        return cls({first: second, second: first})

    def counterparts(self, lang: str) -> Tuple[str, ...]:
        return self._counterparts.get(lang, ())

    @property
    def languages(self) -> List[str]:
        langs = []
        for lang, counterparts in self._counterparts.items():
            for tag in (lang, *counterparts):
                if tag not in langs:
                    langs.append(tag)
        return langs

    def __contains__(self, lang: str) -> bool:
        return lang in self._counterparts

    def __eq__(self, other) -> bool:
        return isinstance(other, TranslationMap) and self._counterparts == other._counterparts

    def __repr__(self) -> str:
        return f"TranslationMap({self._counterparts!r})"


def partition_by_language(documents: Iterable, field: str = 'lang') -> Dict[str, List]:
    """Split ordered documents into per-language lists, preserving order."""
    return group_documents(documents, field)


def has_translation(url: str, counterparts: Iterable[str], partitions: Mapping[str, Sequence]) -> bool:
    """True if any counterpart partition holds a document at ``url``.

    A counterpart language without documents counts as an empty partition.
    """
    return any(
        doc.get('url') == url
        for lang in counterparts
        for doc in partitions.get(lang, ())
    )


def link_translations(partitions: Mapping[str, Sequence], translation_map: TranslationMap) -> Dict[str, List]:
    """Return copies of every partition with a ``translation`` flag on each document.

    The input partitions and their documents are left untouched.
    """
    linked = {}
    for lang, docs in partitions.items():
        counterparts = translation_map.counterparts(lang)
        if not counterparts:
            logger.warning(f"No translation language configured for '{lang}'; its documents are not cross-linked")
        linked[lang] = [
            as_document(doc).evolve(translation=has_translation(doc.get('url'), counterparts, partitions))
            for doc in docs
        ]
    return linked
