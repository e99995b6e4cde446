"""
MongoDB document serialization utilities
"""
from typing import Dict, Any, List, Optional
from bson import ObjectId


def serialize_doc(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """
    Convert ObjectIds to strings for JSON serialization

    Args:
        doc: MongoDB document dictionary

    Returns:
        Serialized copy of the document, or None if input is None
    """
    if doc is None:
        return None
    return convert_object_ids(doc)


def serialize_docs(docs: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Serialize a list of MongoDB documents, skipping missing ones."""
    return [serialize_doc(doc) for doc in docs if doc is not None]


def convert_object_ids(value: Any) -> Any:
    """
    Recursively convert ObjectId instances to strings.
    Cart documents nest product references, so a flat ``_id`` swap is not enough.
    """
    if isinstance(value, dict):
        return {key: convert_object_ids(item) for key, item in value.items()}
    if isinstance(value, list):
        return [convert_object_ids(item) for item in value]
    if isinstance(value, ObjectId):
        return str(value)
    return value
