# shoestore/repositories/common.py
from typing import Any, Dict, Iterable, List

from firebase_admin import firestore
from google.api_core.exceptions import FailedPrecondition


def snap_to_dict(snap) -> Dict[str, Any]:
    data = snap.to_dict() or {}
    data["id"] = snap.id
    return data


def sort_desc(docs: Iterable[Dict[str, Any]], field: str) -> List[Dict[str, Any]]:
    """Newest first; documents without `field` go last instead of breaking the comparison."""
    def _key(doc):
        value = doc.get(field)
        return (value is not None, value)

    return sorted(docs, key=_key, reverse=True)


def stream_desc(query, field: str) -> List[Dict[str, Any]]:
    """
    Streams `query` ordered by `field` descending.
    Filtered queries need a composite index; without one Firestore raises
    FailedPrecondition and we sort on the Python side instead.
    Only use this for fields every document carries: Firestore drops
    documents that lack the order_by field.
    """
    try:
        docs = list(query.order_by(field, direction=firestore.Query.DESCENDING).stream())
    except FailedPrecondition:
        return sort_desc((snap_to_dict(d) for d in query.stream()), field)
    return [snap_to_dict(d) for d in docs]


def stream_sorted_desc(query, field: str) -> List[Dict[str, Any]]:
    """Streams `query` unordered and sorts on the Python side, keeping documents without `field`."""
    return sort_desc((snap_to_dict(d) for d in query.stream()), field)
