"""
Page plan assembly.

Turns the loaded documents into the flat list handed to rendering: for each
language, its documents (with translation flags) followed by the archive
page, the paginated home pages, the paginated tag pages and the Atom feed.
"""

import logging
from functools import reduce
from typing import Iterable, List, Sequence

from .documents import as_document, virtual_document
from .grouping import group_documents
from .languages import TranslationMap, link_translations, partition_by_language
from .ordering import order_documents
from .pagination import paginate, validate_page_size

logger = logging.getLogger(__name__)

DEFAULT_ORDER = ('-timestamp',)


def _year(document):
    date = document.get('date')
    return date.year if date is not None else None


def build_archive_page(lang: str, docs: Sequence):
    """All posts of a language grouped by year, newest year first."""
    posts_by_year = group_documents(docs, _year)
    years = sorted(posts_by_year)
    years.reverse()
    return virtual_document(
        f'{lang}/all',
        '/all',
        'all',
        translation=True,
        posts_total=len(docs),
        posts_by_year=posts_by_year,
        years=years,
        lang=lang,
    )


def build_index_pages(lang: str, docs: Sequence, posts_per_page: int) -> List:
    return paginate(
        docs,
        source_path_prefix=lang,
        url_prefix='/',
        documents_per_page=posts_per_page,
        layout='index',
        index=True,
        extra={'lang': lang},
    )


def build_tag_pages(lang: str, docs: Sequence, posts_per_page: int) -> List:
    posts_by_tag = group_documents(docs, 'tags')
    return reduce(
        lambda pages, tag: pages + paginate(
            posts_by_tag[tag],
            source_path_prefix=f'{lang}/tags/{tag}',
            url_prefix=f'/tags/{tag}',
            documents_per_page=posts_per_page,
            layout='tag',
            extra={'lang': lang, 'tag': tag},
        ),
        posts_by_tag,
        [],
    )


def build_feed(lang: str, docs: Sequence, posts_in_feed: int):
    # docs are already newest first
    return virtual_document(
        f'{lang}/atom.xml',
        '/atom.xml',
        'atom.xml',
        documents=list(docs[:posts_in_feed]),
        lang=lang,
    )


def assemble_language(lang: str, docs: Sequence, posts_per_page: int, posts_in_feed: int) -> List:
    """Real documents of one language followed by its virtual pages."""
    virtual_docs = [build_archive_page(lang, docs)]
    virtual_docs += build_index_pages(lang, docs, posts_per_page)
    virtual_docs += build_tag_pages(lang, docs, posts_per_page)
    virtual_docs.append(build_feed(lang, docs, posts_in_feed))
    logger.debug(f"Planned {len(docs)} documents and {len(virtual_docs)} virtual pages for '{lang}'")
    return [*docs, *virtual_docs]


def check_unique_source_paths(documents: Iterable) -> None:
    """Raise ``ValueError`` if two documents would be written to the same place.

    A post named like a generated page (``en/all.md``, ``en/page2.md``) collides
    with the archive or a home page.
    """
    seen = {}
    collisions = []
    for doc in documents:
        source_path = doc['source_path']
        if source_path in seen:
            collisions.append(f"{source_path} ({seen[source_path]} and {doc.get('layout')})")
        else:
            seen[source_path] = doc.get('layout')
    if collisions:
        raise ValueError(f"Duplicate source paths: {', '.join(collisions)}")


def build_page_plan(documents: Iterable, posts_per_page: int, posts_in_feed: int,
                    translation_map: TranslationMap, order_by: Sequence[str] = DEFAULT_ORDER,
                    lang_field: str = 'lang') -> List:
    """Build the flat list of real and virtual documents for rendering.

    Documents are ordered globally (newest first by default), partitioned
    by language and cross-linked with their translations before any page is
    assembled. Input documents are never modified.
    """
    validate_page_size(posts_per_page)
    if isinstance(posts_in_feed, bool) or not isinstance(posts_in_feed, int) or posts_in_feed < 0:
        raise ValueError(f"posts_in_feed must be a non-negative integer, got {posts_in_feed!r}")

    ordered = order_documents([as_document(doc) for doc in documents], order_by)
    partitions = link_translations(partition_by_language(ordered, lang_field), translation_map)

    plan = reduce(
        lambda result, lang: result + assemble_language(lang, partitions[lang], posts_per_page, posts_in_feed),
        partitions,
        [],
    )
    check_unique_source_paths(plan)
    return plan
