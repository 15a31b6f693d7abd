"""
Pagination of ordered documents into virtual listing pages.

Page 1 lives at the bare URL prefix, the following pages at
``<prefix>/page<N>``:

    /            /page2            /page3
    /tags/python /tags/python/page2
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from .documents import virtual_document

logger = logging.getLogger(__name__)


def validate_page_size(documents_per_page: Any) -> int:
    """Return ``documents_per_page`` or raise ``ValueError`` if it is not a positive int."""
    if isinstance(documents_per_page, bool) or not isinstance(documents_per_page, int):
        raise ValueError(f"documents_per_page must be a positive integer, got {documents_per_page!r}")
    if documents_per_page < 1:
        raise ValueError(f"documents_per_page must be a positive integer, got {documents_per_page}")
    return documents_per_page


def page_url(url_prefix: str, page: int) -> str:
    if page == 1:
        return url_prefix
    return f"{url_prefix.rstrip('/')}/page{page}"


def page_source_path(source_path_prefix: str, page: int) -> str:
    if page == 1:
        return source_path_prefix
    return f"{source_path_prefix}/page{page}"


def count_pages(total_documents: int, documents_per_page: int) -> int:
    # An empty listing still gets one page.
    return max(1, (total_documents + documents_per_page - 1) // documents_per_page)


def paginate(documents: Sequence, source_path_prefix: str, url_prefix: str, documents_per_page: int,
             layout: str, index: bool = False, extra: Optional[Dict[str, Any]] = None) -> List:
    """Split ``documents`` into pages of ``documents_per_page`` items.

    Every page is a virtual document carrying its slice in ``documents``,
    its 1-based ``page`` number, ``pages_total``, neighbour URLs and every
    key of ``extra``. When ``index`` is true the first page is flagged as
    the index of its URL prefix.
    """
    documents_per_page = validate_page_size(documents_per_page)
    documents = list(documents)
    extra = extra or {}
    pages_total = count_pages(len(documents), documents_per_page)

    pages = []
    for page in range(1, pages_total + 1):
        start = (page - 1) * documents_per_page
        fields = dict(extra)
        fields.update({
            'documents': documents[start:start + documents_per_page],
            'page': page,
            'pages_total': pages_total,
            'url_prefix': url_prefix,
            'previous_url': page_url(url_prefix, page - 1) if page > 1 else None,
            'next_url': page_url(url_prefix, page + 1) if page < pages_total else None,
            'is_index': index and page == 1,
        })
        pages.append(virtual_document(
            page_source_path(source_path_prefix, page),
            page_url(url_prefix, page),
            layout,
            **fields
        ))

    logger.debug(f"Paginated {len(documents)} documents under {url_prefix} into {pages_total} pages")
    return pages
