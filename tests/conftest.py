"""Test configuration and fixtures for Duoblog tests."""

import pytest
import tempfile
import shutil
from datetime import datetime, timedelta
from pathlib import Path

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from duoblog_pkg.documents import Document

@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_dir = tempfile.mkdtemp()
    yield temp_dir
    shutil.rmtree(temp_dir, ignore_errors=True)

@pytest.fixture
def make_doc():
    """Factory for real documents dated by a day offset from 2020-01-01."""
    def make(name, lang='en', day=0, tags=None, **fields):
        date = datetime(2020, 1, 1) + timedelta(days=day)
        attrs = {
            'source_path': f'{lang}/{name}',
            'url': f'/{name}',
            'lang': lang,
            'layout': 'post',
            'title': name,
            'date': date,
            'timestamp': (date - datetime(1970, 1, 1)).total_seconds(),
            'tags': tags if tags is not None else [],
        }
        attrs.update(fields)
        return Document(attrs)
    return make

@pytest.fixture
def english_posts(make_doc):
    """25 English posts with strictly decreasing timestamps (newest first)."""
    return [make_doc(f'post-{i:02d}', day=100 - i) for i in range(25)]

@pytest.fixture
def mock_source_dir(temp_dir):
    """Create a source directory with English and Russian posts."""
    source_dir = Path(temp_dir) / 'source'
    (source_dir / 'en').mkdir(parents=True)
    (source_dir / 'ru').mkdir(parents=True)

    (source_dir / 'en' / 'shipit.md').write_text("""---
title: Ship it
date: 2021-03-04
tags:
  - tools
  - mac
---

Intro paragraph.

<!-- cut -->

![](/images/mac__shipit.png "Ship it")
""", encoding='utf-8')

    (source_dir / 'en' / 'hello.md').write_text("""---
title: Hello
date: 2019-05-06
tags: [news]
---

Hello **world**.
""", encoding='utf-8')

    (source_dir / 'ru' / 'shipit.md').write_text("""---
title: Шипит
date: 2021-03-05
tags: [tools]
---

Текст.
""", encoding='utf-8')

    return str(source_dir)

@pytest.fixture
def mock_templates_dir(temp_dir):
    """Create a minimal templates directory, one template per layout."""
    templates_dir = Path(temp_dir) / 'templates'
    templates_dir.mkdir()

    (templates_dir / 'post.html').write_text(
        "<h1>{{ page.title }}</h1>{{ page.content }}{% if page.translation %}<a class=\"translation\"></a>{% endif %}",
        encoding='utf-8')
    (templates_dir / 'index.html').write_text(
        "{{ config.title }} page {{ page.page }}/{{ page.pages_total }}:{% for p in page.documents %} {{ p.title }}{% endfor %}",
        encoding='utf-8')
    (templates_dir / 'tag.html').write_text(
        "#{{ page.tag }}:{% for p in page.documents %} {{ p.title }}{% endfor %}",
        encoding='utf-8')
    (templates_dir / 'all.html').write_text(
        "{% for year in page.years %}{{ year }}:{{ page.posts_by_year[year] | length }};{% endfor %}",
        encoding='utf-8')
    (templates_dir / 'atom.xml').write_text(
        "<feed>{% for p in page.documents %}<entry>{{ p.title }}</entry>{% endfor %}</feed>",
        encoding='utf-8')

    return str(templates_dir)

@pytest.fixture
def build_settings(temp_dir, mock_source_dir, mock_templates_dir):
    """Settings for a full build inside the temporary directory."""
    return {
        'source': mock_source_dir,
        'templates': mock_templates_dir,
        'public': str(Path(temp_dir) / 'public'),
        'assets': None,
        'source_types': ['md'],
        'posts_per_page': 10,
        'posts_in_feed': 10,
        'cut_tag': '<!-- cut -->',
        'default_lang': 'en',
        'translations': {'en': 'ru', 'ru': 'en'},
        'languages': {'en': {'title': 'Blog'}, 'ru': {'title': 'Блог'}},
        'site_url': 'https://example.com',
        'title': None,
        'minify': False,
    }
