from fastapi import APIRouter, Depends

from devconnector.core import post_interactions
from devconnector.db.mongo import get_posts_collection
from devconnector.schemas.schemas import PostRequest, CommentRequest
from .auth import get_current_user

router = APIRouter(prefix="/api/posts", tags=["posts"])


@router.get("")
def list_posts(posts=Depends(get_posts_collection)):
    return post_interactions.get_posts(collection=posts)


@router.get("/{post_id}")
def get_post(post_id: str, posts=Depends(get_posts_collection)):
    return post_interactions.get_post(post_id, collection=posts)


@router.post("")
def create_post(data: PostRequest, user=Depends(get_current_user), posts=Depends(get_posts_collection)):
    return post_interactions.create_post(user, data, collection=posts)


@router.delete("/{post_id}")
def delete_post(post_id: str, user=Depends(get_current_user), posts=Depends(get_posts_collection)):
    return post_interactions.delete_post(user["_id"], post_id, collection=posts)


@router.post("/like/{post_id}")
def like(post_id: str, user=Depends(get_current_user), posts=Depends(get_posts_collection)):
    return post_interactions.like_post(user["_id"], post_id, collection=posts)


@router.post("/unlike/{post_id}")
def unlike(post_id: str, user=Depends(get_current_user), posts=Depends(get_posts_collection)):
    return post_interactions.unlike_post(user["_id"], post_id, collection=posts)


@router.post("/comment/{post_id}")
def add_comment(post_id: str, data: CommentRequest,
                user=Depends(get_current_user), posts=Depends(get_posts_collection)):
    return post_interactions.add_comment(user, post_id, data, collection=posts)


@router.delete("/comment/{post_id}/{comment_id}")
def remove_comment(post_id: str, comment_id: str,
                   user=Depends(get_current_user), posts=Depends(get_posts_collection)):
    return post_interactions.remove_comment(user["_id"], post_id, comment_id, collection=posts)
