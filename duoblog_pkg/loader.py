"""
Loading of source documents.

Every source file is YAML front matter fenced by ``---`` followed by the body.
The body is rendered by the renderer registered for the file extension, and
front matter fields are post-processed by field parsers:

    field_parsers = {
        'timestamp': parse_timestamp,   # parser(raw_value, attrs)
        'date': parse_date,
        'url': strip_language(['en', 'ru']),
    }

Field parsers run in mapping order, after front matter has been merged over
the default fields.
"""

import os
import re
import logging
from datetime import datetime, date
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

import yaml

from .documents import Document
from .settings import ConfigError

logger = logging.getLogger(__name__)

DATE_FORMATS = ['%Y-%m-%dT%H:%M:%S', '%Y-%m-%d %H:%M:%S', '%Y-%m-%d %H:%M', '%Y-%m-%d', '%b %d, %Y']


def parse_date(value, attrs=None) -> Optional[datetime]:
    """Parse a front matter date into a ``datetime``; ``None`` if it is missing or unreadable."""
    if isinstance(value, datetime):
        return value
    elif isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        for fmt in DATE_FORMATS:
            try:
                return datetime.strptime(value.strip(), fmt)
            except ValueError:
                continue
        # ISO 8601 with an offset; fromisoformat only reads a trailing Z from 3.11
        iso_value = value.strip()
        if iso_value.endswith(('Z', 'z')):
            iso_value = iso_value[:-1] + '+00:00'
        try:
            return datetime.fromisoformat(iso_value)
        except ValueError:
            pass
        logger.warning(f"Unrecognized date {value!r}")
    return None


def parse_timestamp(value, attrs) -> Optional[float]:
    """Sort key derived from the document's ``date`` field."""
    parsed = parse_date(attrs.get('date'))
    if parsed is None:
        return None
    if parsed.tzinfo is None:
        # Naive dates are compared as UTC so the order does not depend on the host
        return (parsed - datetime(1970, 1, 1)).total_seconds()
    return parsed.timestamp()


def strip_language(languages: Iterable[str]) -> Callable:
    """Build a parser removing a leading language segment: ``/en/foo`` -> ``/foo``."""
    languages = sorted(languages, key=len, reverse=True)
    if not languages:
        return lambda url, attrs: url
    pattern = re.compile(r'^(/?)(?:{})(?:/|$)'.format('|'.join(re.escape(lang) for lang in languages)))

    def parse_url(url, attrs):
        if not isinstance(url, str):
            return url
        return pattern.sub(r'\1', url, count=1) or '/'

    return parse_url


def default_field_parsers(languages: Iterable[str]) -> Dict[str, Callable]:
    return {
        'timestamp': parse_timestamp,
        'date': parse_date,
        'url': strip_language(languages),
    }


def validate_field_parsers(field_parsers: Mapping[str, Callable]) -> Dict[str, Callable]:
    """Check the parser mapping once, before any file is read."""
    if not isinstance(field_parsers, Mapping):
        raise ConfigError("field_parsers must map field names to parser functions")
    for field, parser in field_parsers.items():
        if not isinstance(field, str) or not field:
            raise ConfigError(f"Field parser names must be non-empty strings, got {field!r}")
        if not callable(parser):
            raise ConfigError(f"Field parser for '{field}' is not callable: {parser!r}")
    return dict(field_parsers)


def parse_front_matter(text: str, filepath: str = '<string>'):
    """Split a source into its front matter mapping and body."""
    if not text.lstrip().startswith('---'):
        return {}, text
    parts = text.lstrip().split('---', 2)
    if len(parts) < 3:
        return {}, text
    try:
        metadata = yaml.safe_load(parts[1]) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML front matter in {filepath}: {e}")
    if not isinstance(metadata, dict):
        raise ValueError(f"Front matter in {filepath} must be a mapping")
    return metadata, parts[2].strip()


def find_source_files(source_dir: str, source_types: Iterable[str]) -> List[str]:
    extensions = tuple('.' + ext.lstrip('.') for ext in source_types)
    found = []
    for root, dirs, files in os.walk(source_dir):
        dirs.sort()
        for name in sorted(files):
            if name.endswith(extensions) and not name.startswith('.'):
                found.append(os.path.join(root, name))
    return found


def source_path_for(filepath: str, source_dir: str) -> str:
    relative = os.path.relpath(filepath, source_dir)
    return os.path.splitext(relative)[0].replace(os.sep, '/')


def language_for(source_path: str, languages: Iterable[str], default_lang: str) -> str:
    first_segment = source_path.split('/', 1)[0]
    if '/' in source_path and first_segment in languages:
        return first_segment
    return default_lang


def load_source_file(filepath: str, source_dir: str, renderers: Mapping[str, Callable],
                     field_parsers: Mapping[str, Callable], cut_tag: Optional[str] = None,
                     languages: Iterable[str] = (), default_lang: str = 'en') -> Document:
    with open(filepath, 'r', encoding='utf-8') as f:
        text = f.read()

    metadata, body = parse_front_matter(text, filepath)
    extension = os.path.splitext(filepath)[1].lstrip('.')
    render = renderers.get(extension)
    if render is None:
        raise ValueError(f"No renderer registered for '.{extension}' files ({filepath})")

    source_path = source_path_for(filepath, source_dir)
    attrs: Dict[str, Any] = {
        'source_path': source_path,
        'url': '/' + source_path,
        'lang': language_for(source_path, languages, default_lang),
        'layout': 'post',
        'tags': [],
    }
    attrs.update(metadata)
    if attrs['tags'] is None:
        attrs['tags'] = []
    elif isinstance(attrs['tags'], str):
        attrs['tags'] = [attrs['tags']]

    if cut_tag and cut_tag in body:
        excerpt, rest = body.split(cut_tag, 1)
        attrs['excerpt'] = render(excerpt.strip())
        attrs['more'] = True
        body = excerpt.rstrip() + '\n\n' + rest.lstrip()
    else:
        attrs['excerpt'] = None
        attrs['more'] = False
    attrs['content'] = render(body)

    for field, parser in field_parsers.items():
        attrs[field] = parser(attrs.get(field), attrs)

    return Document(attrs)


def load_source_files(source_dir: str, source_types: Iterable[str], renderers: Mapping[str, Callable],
                      field_parsers: Optional[Mapping[str, Callable]] = None, cut_tag: Optional[str] = None,
                      languages: Iterable[str] = (), default_lang: str = 'en') -> List[Document]:
    """Load and parse every source file under ``source_dir``."""
    field_parsers = validate_field_parsers(field_parsers or {})
    if not os.path.isdir(source_dir):
        raise FileNotFoundError(f"Source directory not found: {source_dir}")

    languages = list(languages)
    documents = [
        load_source_file(filepath, source_dir, renderers, field_parsers, cut_tag, languages, default_lang)
        for filepath in find_source_files(source_dir, source_types)
    ]
    logger.info(f"Loaded {len(documents)} source documents from {source_dir}")
    return documents
