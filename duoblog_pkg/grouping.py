"""
Grouping of documents by a field or a key function.
"""

from typing import Callable, Dict, Iterable, List, Union

MULTI_VALUE_TYPES = (list, tuple, set, frozenset)


def _group_keys(document, key):
    if callable(key):
        value = key(document)
    else:
        value = document.get(key)

    if value is None:
        return []
    if isinstance(value, (set, frozenset)):
        # Sets have no stable order of their own.
        value = sorted(value, key=str)
    if isinstance(value, MULTI_VALUE_TYPES):
        return [item for item in value if item is not None]
    return [value]


def group_documents(documents: Iterable, key: Union[str, Callable]) -> Dict[str, List]:
    """Group documents by the value of ``key``.

    ``key`` is either a field name or a function of a document. A list-valued
    field (like ``tags``) puts the document into one group per element.
    Documents without the field, or for which the key is ``None``, belong to
    no group at all.

    Group keys are strings, ordered by first appearance; documents inside a
    group keep their input order.
    """
    groups: Dict[str, List] = {}
    for document in documents:
        seen = set()
        for value in _group_keys(document, key):
            group_key = str(value)
            if group_key in seen:
                continue
            seen.add(group_key)
            groups.setdefault(group_key, []).append(document)
    return groups
