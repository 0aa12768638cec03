"""
MongoDB document serialization utilities
"""
from typing import Dict, Any, Iterable, List, Optional
from bson import ObjectId


def serialize_doc(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """
    Convert the document ``_id`` to a string for JSON serialization

    Args:
        doc: MongoDB document dictionary

    Returns:
        Shallow copy with a string ``_id``, or None if input is None
    """
    if doc is None:
        return None

    serialized_doc = doc.copy()
    if isinstance(serialized_doc.get("_id"), ObjectId):
        serialized_doc["_id"] = str(serialized_doc["_id"])

    return serialized_doc


def serialize_docs(docs: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Serialize a sequence of MongoDB documents, skipping None entries"""
    return [serialize_doc(doc) for doc in docs if doc is not None]
