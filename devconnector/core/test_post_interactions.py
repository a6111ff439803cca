from datetime import datetime, timedelta, timezone

import mongomock
import pytest

from devconnector.core import post_interactions
from devconnector.core.errors import (
    ValidationError, PostNotFound, CommentNotFound, AlreadyLiked, NotLiked, NotAuthorized,
)
from devconnector.schemas.schemas import PostRequest, CommentRequest

JANE = {"_id": "user-1", "name": "Jane Doe", "avatar": "https://avatar/1"}
JOHN = {"_id": "user-2", "name": "John Roe", "avatar": "https://avatar/2"}


@pytest.fixture
def posts():
    collection = mongomock.MongoClient()["devconnector_test"]["posts"]
    yield collection
    collection.drop()


@pytest.fixture
def post(posts):
    return post_interactions.create_post(JANE, PostRequest(text="Hello developers of the world"), collection=posts)


def test_create_post_copies_author(post):
    assert post["user"] == "user-1"
    assert post["name"] == "Jane Doe"
    assert post["avatar"] == "https://avatar/1"
    assert post["likes"] == [] and post["comments"] == []


def test_create_post_rejects_short_text(posts):
    with pytest.raises(ValidationError) as exc:
        post_interactions.create_post(JANE, PostRequest(text="x" * 9), collection=posts)
    assert exc.value.errors == {"text": "Text must be between 10 and 300 characters"}
    assert posts.count_documents({}) == 0


def test_padded_text_is_checked_as_stored(posts, post):
    with pytest.raises(ValidationError) as exc:
        post_interactions.create_post(JANE, PostRequest(text="    hi    "), collection=posts)
    assert exc.value.errors == {"text": "Text must be between 10 and 300 characters"}

    with pytest.raises(ValidationError):
        post_interactions.add_comment(JOHN, post["id"], CommentRequest(text="   short   "), collection=posts)
    assert posts.find_one({"_id": post["id"]})["comments"] == []

    padded = post_interactions.create_post(JANE, PostRequest(text="   long enough text   "), collection=posts)
    assert padded["text"] == "long enough text"
    assert len(padded["text"]) >= 10


def test_get_posts_newest_first(posts):
    now = datetime.now(timezone.utc)
    posts.insert_many([
        {"_id": "old", "user": "user-1", "text": "older post text", "date": now - timedelta(days=1)},
        {"_id": "new", "user": "user-2", "text": "newer post text", "date": now},
    ])
    assert [p["id"] for p in post_interactions.get_posts(collection=posts)] == ["new", "old"]


def test_get_missing_post(posts):
    with pytest.raises(PostNotFound):
        post_interactions.get_post("missing", collection=posts)


def test_like_twice_fails_and_keeps_likes(posts, post):
    liked = post_interactions.like_post("user-2", post["id"], collection=posts)
    assert liked["likes"] == [{"user": "user-2"}]

    with pytest.raises(AlreadyLiked):
        post_interactions.like_post("user-2", post["id"], collection=posts)
    assert len(posts.find_one({"_id": post["id"]})["likes"]) == 1


def test_likes_are_prepended(posts, post):
    post_interactions.like_post("user-1", post["id"], collection=posts)
    liked = post_interactions.like_post("user-2", post["id"], collection=posts)
    assert [like["user"] for like in liked["likes"]] == ["user-2", "user-1"]


def test_like_missing_post(posts):
    with pytest.raises(PostNotFound):
        post_interactions.like_post("user-2", "missing", collection=posts)


def test_unlike(posts, post):
    with pytest.raises(NotLiked):
        post_interactions.unlike_post("user-2", post["id"], collection=posts)

    post_interactions.like_post("user-1", post["id"], collection=posts)
    post_interactions.like_post("user-2", post["id"], collection=posts)
    unliked = post_interactions.unlike_post("user-2", post["id"], collection=posts)
    assert unliked["likes"] == [{"user": "user-1"}]


def test_add_comment_prepends(posts, post):
    post_interactions.add_comment(JANE, post["id"], CommentRequest(text="First comment here"), collection=posts)
    updated = post_interactions.add_comment(JOHN, post["id"], CommentRequest(text="Second comment here"), collection=posts)
    assert [c["text"] for c in updated["comments"]] == ["Second comment here", "First comment here"]
    assert updated["comments"][0]["user"] == "user-2"
    assert updated["comments"][0]["name"] == "John Roe"
    assert updated["comments"][0]["id"]


def test_add_comment_validation_and_missing_post(posts, post):
    with pytest.raises(ValidationError) as exc:
        post_interactions.add_comment(JOHN, post["id"], CommentRequest(text=""), collection=posts)
    assert exc.value.errors == {"text": "Text field is required"}

    with pytest.raises(PostNotFound):
        post_interactions.add_comment(JOHN, "missing", CommentRequest(text="A perfectly fine comment"), collection=posts)


def test_remove_comment_by_non_author(posts, post):
    updated = post_interactions.add_comment(JOHN, post["id"], CommentRequest(text="John's comment text"), collection=posts)
    comment_id = updated["comments"][0]["id"]

    with pytest.raises(NotAuthorized):
        post_interactions.remove_comment("user-1", post["id"], comment_id, collection=posts)
    assert [c["id"] for c in posts.find_one({"_id": post["id"]})["comments"]] == [comment_id]


def test_remove_comment_by_author(posts, post):
    post_interactions.add_comment(JANE, post["id"], CommentRequest(text="Jane keeps this one"), collection=posts)
    updated = post_interactions.add_comment(JOHN, post["id"], CommentRequest(text="John removes this one"), collection=posts)
    comment_id = updated["comments"][0]["id"]

    result = post_interactions.remove_comment("user-2", post["id"], comment_id, collection=posts)
    assert [c["text"] for c in result["comments"]] == ["Jane keeps this one"]


def test_remove_unknown_comment(posts, post):
    with pytest.raises(CommentNotFound):
        post_interactions.remove_comment("user-1", post["id"], "missing", collection=posts)
    with pytest.raises(PostNotFound):
        post_interactions.remove_comment("user-1", "missing", "missing", collection=posts)


def test_delete_post_is_scoped_by_owner(posts, post):
    with pytest.raises(PostNotFound):
        post_interactions.delete_post("user-2", post["id"], collection=posts)
    assert posts.count_documents({"_id": post["id"]}) == 1

    assert post_interactions.delete_post("user-1", post["id"], collection=posts) == {"success": True}
    assert posts.count_documents({}) == 0
