import uuid
from datetime import datetime, timezone


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def serialize_doc(doc):
    """Copy a stored document into its API shape: ``_id`` becomes ``id``."""
    if doc is None:
        return None
    out = {k: v for k, v in doc.items() if k != "_id"}
    out = {"id": doc.get("_id"), **out}
    return out


def serialize_user(user_doc):
    return {
        "id": user_doc.get("_id"),
        "name": user_doc.get("name"),
        "email": user_doc.get("email"),
        "avatar": user_doc.get("avatar"),
        "date": user_doc.get("date"),
    }
