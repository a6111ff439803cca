import logging

from pymongo import ReturnDocument, DESCENDING

from devconnector.db.mongo import get_posts_collection
from devconnector.schemas.schemas import PostRequest, CommentRequest
from .errors import (
    ValidationError,
    PostNotFound, CommentNotFound, AlreadyLiked, NotLiked, NotAuthorized,
)
from .utils import new_id, utcnow, serialize_doc
from .validation import validate_post_input

logger = logging.getLogger(__name__)

posts_collection = get_posts_collection()


def _require_post(post_id, collection):
    post = collection.find_one({"_id": post_id})
    if post is None:
        raise PostNotFound()
    return post


def create_post(user, data: PostRequest, collection=posts_collection):
    """Publish a post as ``user`` (the authenticated user document)."""
    errors, is_valid = validate_post_input(data.model_dump())
    if not is_valid:
        raise ValidationError(errors)

    post_doc = {
        "_id": new_id(),
        "user": user["_id"],
        "text": data.text.strip(),
        "name": user.get("name"),
        "avatar": user.get("avatar"),
        "likes": [],
        "comments": [],
        "date": utcnow(),
    }
    collection.insert_one(post_doc)
    logger.info(f"[✓] User {user['_id']} created post {post_doc['_id']}")
    return serialize_doc(post_doc)


def get_posts(collection=posts_collection):
    return [serialize_doc(p) for p in collection.find().sort("date", DESCENDING)]


def get_post(post_id: str, collection=posts_collection):
    return serialize_doc(_require_post(post_id, collection))


def delete_post(user_id: str, post_id: str, collection=posts_collection):
    # Scoped by owner: a post owned by someone else is indistinguishable from a missing one.
    result = collection.delete_one({"_id": post_id, "user": user_id})
    if result.deleted_count == 0:
        logger.warning(f"[✗] User {user_id} could not delete post {post_id}")
        raise PostNotFound()
    logger.info(f"[✓] User {user_id} deleted post {post_id}")
    return {"success": True}


def like_post(user_id: str, post_id: str, collection=posts_collection):
    post = collection.find_one_and_update(
        {"_id": post_id, "likes.user": {"$ne": user_id}},
        {"$push": {"likes": {"$each": [{"user": user_id}], "$position": 0}}},
        return_document=ReturnDocument.AFTER,
    )
    if post is None:
        _require_post(post_id, collection)
        raise AlreadyLiked()
    logger.info(f"[✓] User {user_id} liked post {post_id}")
    return serialize_doc(post)


def unlike_post(user_id: str, post_id: str, collection=posts_collection):
    post = collection.find_one_and_update(
        {"_id": post_id, "likes.user": user_id},
        {"$pull": {"likes": {"user": user_id}}},
        return_document=ReturnDocument.AFTER,
    )
    if post is None:
        _require_post(post_id, collection)
        raise NotLiked()
    logger.info(f"[✓] User {user_id} unliked post {post_id}")
    return serialize_doc(post)


def add_comment(user, post_id: str, data: CommentRequest, collection=posts_collection):
    errors, is_valid = validate_post_input(data.model_dump())
    if not is_valid:
        raise ValidationError(errors)

    comment = {
        "id": new_id(),
        "user": user["_id"],
        "text": data.text.strip(),
        "name": user.get("name"),
        "avatar": user.get("avatar"),
        "date": utcnow(),
    }
    post = collection.find_one_and_update(
        {"_id": post_id},
        {"$push": {"comments": {"$each": [comment], "$position": 0}}},
        return_document=ReturnDocument.AFTER,
    )
    if post is None:
        raise PostNotFound()
    logger.info(f"[✓] User {user['_id']} commented {comment['id']} on post {post_id}")
    return serialize_doc(post)


def remove_comment(user_id: str, post_id: str, comment_id: str, collection=posts_collection):
    """Remove a comment the caller wrote.

    The author check and the pull are one conditional update; the post is
    only re-read when nothing matched, to report why.
    """
    post = collection.find_one_and_update(
        {"_id": post_id, "comments": {"$elemMatch": {"id": comment_id, "user": user_id}}},
        {"$pull": {"comments": {"id": comment_id}}},
        return_document=ReturnDocument.AFTER,
    )
    if post is None:
        existing = _require_post(post_id, collection)
        if not any(c.get("id") == comment_id for c in existing.get("comments", [])):
            raise CommentNotFound()
        logger.warning(f"[✗] User {user_id} is not the author of comment {comment_id}")
        raise NotAuthorized()
    logger.info(f"[✓] User {user_id} removed comment {comment_id} from post {post_id}")
    return serialize_doc(post)
