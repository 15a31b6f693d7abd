"""
Duoblog - a multilingual blog builder.

Duoblog loads Markdown posts with YAML front matter, derives archive, index,
tag and feed pages for every language, links posts to their translations and
renders the site with Jinja2 templates.
"""

__version__ = "1.0.0"

from .documents import Document, virtual_document
from .grouping import group_documents
from .languages import TranslationMap, link_translations, partition_by_language
from .ordering import order_documents
from .pagination import paginate
from .planner import build_page_plan
from .core import Duoblog

__all__ = [
    'Document',
    'Duoblog',
    'TranslationMap',
    'build_page_plan',
    'group_documents',
    'link_translations',
    'order_documents',
    'paginate',
    'partition_by_language',
    'virtual_document',
]
