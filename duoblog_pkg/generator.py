"""
Rendering of planned documents through Jinja2 templates and writing them out.
"""

import os
import posixpath
import logging
from collections import namedtuple

from jinja2 import Environment, FileSystemLoader, TemplateNotFound, TemplateSyntaxError, UndefinedError

from .settings import for_language

logger = logging.getLogger(__name__)

Page = namedtuple('Page', ['path', 'content'])


def create_template_renderer(root):
    """Return ``render(template_name, context)`` for templates under ``root``."""
    env = Environment(loader=FileSystemLoader(root))

    def render(template_name, context):
        template = env.get_template(template_name)
        return template.render(**context)

    return render


def template_name_for(layout):
    # Layouts carrying an extension (atom.xml) name their template directly
    if posixpath.splitext(layout)[1]:
        return layout
    return f'{layout}.html'


def output_path_for(document):
    source_path = document['source_path'].strip('/')
    if posixpath.splitext(document.get('layout', ''))[1]:
        return source_path
    return posixpath.join(source_path, 'index.html')


def generate_pages(documents, settings, helpers, render):
    """Render every document with the template named by its layout.

    Returns ``(pages, errors)``; a document whose template is missing or
    broken is logged and left out.
    """
    pages = []
    errors = 0
    for document in documents:
        context = dict(helpers)
        context.update({
            'page': document,
            'config': for_language(settings, document.get('lang', settings.get('default_lang'))),
        })
        try:
            content = render(template_name_for(document.get('layout', 'post')), context)
        except (TemplateNotFound, TemplateSyntaxError, UndefinedError) as e:
            logger.error(f"Template error for {document.get('source_path')}: {e}")
            errors += 1
            continue
        pages.append(Page(output_path_for(document), content))

    logger.debug(f"Rendered {len(pages)} pages, {errors} template errors")
    return pages, errors


def save_pages(pages, output_dir):
    """Write pages under ``output_dir``. Returns ``(written, failed)``."""
    written = 0
    failed = 0
    for page in pages:
        output_path = os.path.join(output_dir, *page.path.split('/'))
        try:
            os.makedirs(os.path.dirname(output_path), exist_ok=True)
            with open(output_path, 'w', encoding='utf-8') as f:
                f.write(page.content)
            written += 1
            logger.debug(f"Generated: {output_path}")
        except (IOError, OSError, PermissionError) as e:
            logger.error(f"Failed to write {output_path}: {e}")
            failed += 1
    return written, failed
