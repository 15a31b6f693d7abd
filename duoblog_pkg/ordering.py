"""
Stable multi-key ordering of documents.

Keys are field names; a leading ``-`` sorts that field in descending order,
so ``['-timestamp']`` puts the newest documents first.
"""

from typing import Iterable, List, Tuple

DESCENDING_MARKER = '-'


def parse_order_key(directive: str) -> Tuple[str, bool]:
    """Split a directive like ``-timestamp`` into ``('timestamp', True)``."""
    if not isinstance(directive, str):
        raise ValueError(f"Order key must be a string, got {directive!r}")
    descending = directive.startswith(DESCENDING_MARKER)
    field = directive[1:] if descending else directive
    if not field:
        raise ValueError(f"Order key {directive!r} does not name a field")
    return field, descending


def _sort_value(document, field):
    # Missing and None values sort below any defined value.
    value = document.get(field)
    if value is None:
        return (0,)
    return (1, value)


def order_documents(documents: Iterable, keys: Iterable[str]) -> List:
    """Return a new list of documents ordered by ``keys``.

    Earlier keys take priority. The sort is stable, so documents that compare
    equal on every key keep their input order. Values that cannot be compared
    with each other raise ``TypeError``.
    """
    directives = [parse_order_key(key) for key in keys]
    if not directives:
        raise ValueError("At least one order key is required")

    ordered = list(documents)
    # Sorting by the least significant key first relies on sort stability.
    for field, descending in reversed(directives):
        ordered.sort(key=lambda doc: _sort_value(doc, field), reverse=descending)
    return ordered
