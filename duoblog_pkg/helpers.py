"""
Functions exposed to templates.
"""

import re
from datetime import datetime, date, timezone

from .pagination import page_url


def format_date(value, fmt='%B %d, %Y'):
    """Format a date for display; empty string if there is none."""
    if value is None:
        return ''
    if isinstance(value, (int, float)):
        value = datetime.fromtimestamp(value, tz=timezone.utc)
    return value.strftime(fmt)


def iso_date(value):
    """RFC 3339 timestamp as used by Atom feeds."""
    if value is None:
        return ''
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.strftime('%Y-%m-%dT%H:%M:%SZ')
        return value.isoformat()
    if isinstance(value, date):
        return value.strftime('%Y-%m-%dT00:00:00Z')
    return str(value)


def absolute_url(site_url, url):
    if not site_url:
        return url
    return site_url.rstrip('/') + '/' + url.lstrip('/')


def strip_html(content):
    return re.sub(r'<[^>]+>', '', content or '')


def truncate_words(text, count=30):
    words = text.split()
    if len(words) > count:
        return ' '.join(words[:count]) + '...'
    return text


def pagination_links(current_page, total_pages):
    """
    Returns a list of page numbers (or ellipses) to display in pagination.
    Always shows page 1 and total_pages.
    Shows two pages before and after the current page.
    Inserts '...' when there is a gap.
    """
    delta = 2
    links = [1]

    start = max(current_page - delta, 2)
    end = min(current_page + delta, total_pages - 1)

    if start > 2:
        links.append('...')

    links.extend(range(start, end + 1))

    if end < total_pages - 1:
        links.append('...')

    if total_pages > 1:
        links.append(total_pages)

    return links


def default_helpers():
    return {
        'format_date': format_date,
        'iso_date': iso_date,
        'absolute_url': absolute_url,
        'strip_html': strip_html,
        'truncate_words': truncate_words,
        'pagination_links': pagination_links,
        'page_url': page_url,
    }
