"""
MongoDB helpers shared by the services.

- ObjectId parsing for ids that arrive as path/body strings
- Serialization of documents into JSON-friendly dicts
- "populate": replace a reference field with the referenced document
"""

from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional
from bson import ObjectId
from bson.errors import InvalidId
from pymongo.collection import Collection


# Fields exposed when a user reference is expanded
PUBLIC_USER_FIELDS = {"username": 1, "email": 1}


def utcnow() -> datetime:
    """Current UTC time at BSON date precision (milliseconds)."""
    now = datetime.utcnow()
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def to_object_id(value: Any) -> Optional[ObjectId]:
    """Parse an id; None when it is not a valid ObjectId."""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


# ============================================================
# HELPER: Convert ObjectId to string for JSON serialization
# ============================================================

def serialize_doc(doc: dict) -> Optional[dict]:
    """
    Convert MongoDB document to JSON-serializable dict.

    "_id" becomes "id"; top-level ObjectId references become strings.
    Nested dicts (already populated references) are left as they are.
    """
    if doc is None:
        return None
    out = {}
    for key, value in doc.items():
        if key == "_id":
            key = "id"
        if isinstance(value, ObjectId):
            value = str(value)
        out[key] = value
    return out


def serialize_docs(docs: Iterable[dict]) -> List[dict]:
    """Convert list of MongoDB documents to JSON-serializable list."""
    return [serialize_doc(doc) for doc in docs]


def populate(
    docs: List[dict],
    field: str,
    collection: Collection,
    projection: Optional[Dict[str, int]] = None
) -> List[dict]:
    """
    Expand docs[i][field] (an ObjectId) into the referenced document.

    One query per call regardless of len(docs). References that no longer
    resolve become None; callers decide on placeholders.
    """
    ids = list({doc[field] for doc in docs if doc.get(field) is not None})
    found = {}
    if ids:
        for ref in collection.find({"_id": {"$in": ids}}, projection):
            found[ref["_id"]] = serialize_doc(ref)
    for doc in docs:
        doc[field] = found.get(doc.get(field))
    return docs
