from fastapi import APIRouter, Depends

from devconnector.core import profile_editor
from devconnector.core.github import fetch_github_repos, new_client
from devconnector.db.mongo import get_profiles_collection, get_users_collection, get_posts_collection
from devconnector.schemas.schemas import ProfileRequest, ExperienceRequest, EducationRequest
from .auth import get_current_user

router = APIRouter(prefix="/api/profile", tags=["profile"])


async def get_github_client():
    async with new_client() as client:
        yield client


@router.get("")
def current_profile(user=Depends(get_current_user),
                    profiles=Depends(get_profiles_collection),
                    users=Depends(get_users_collection)):
    return profile_editor.get_current_profile(user["_id"], collection=profiles, users=users)


@router.post("")
def upsert_profile(data: ProfileRequest,
                   user=Depends(get_current_user),
                   profiles=Depends(get_profiles_collection)):
    return profile_editor.upsert_profile(user["_id"], data, collection=profiles)


@router.delete("")
def delete_account(user=Depends(get_current_user),
                   profiles=Depends(get_profiles_collection),
                   users=Depends(get_users_collection),
                   posts=Depends(get_posts_collection)):
    return profile_editor.delete_account(user["_id"], collection=profiles, users=users, posts=posts)


@router.get("/all")
def all_profiles(profiles=Depends(get_profiles_collection), users=Depends(get_users_collection)):
    return profile_editor.get_all_profiles(collection=profiles, users=users)


@router.get("/handle/{handle}")
def profile_by_handle(handle: str,
                      profiles=Depends(get_profiles_collection),
                      users=Depends(get_users_collection)):
    return profile_editor.get_profile_by_handle(handle, collection=profiles, users=users)


@router.get("/user/{user_id}")
def profile_by_user(user_id: str,
                    profiles=Depends(get_profiles_collection),
                    users=Depends(get_users_collection)):
    return profile_editor.get_profile_by_user(user_id, collection=profiles, users=users)


@router.get("/github/{username}")
async def github_repos(username: str, client=Depends(get_github_client)):
    return await fetch_github_repos(username, client)


@router.post("/experience")
def add_experience(data: ExperienceRequest,
                   user=Depends(get_current_user),
                   profiles=Depends(get_profiles_collection)):
    return profile_editor.add_experience(user["_id"], data, collection=profiles)


@router.delete("/experience/{exp_id}")
def remove_experience(exp_id: str,
                      user=Depends(get_current_user),
                      profiles=Depends(get_profiles_collection)):
    return profile_editor.remove_experience(user["_id"], exp_id, collection=profiles)


@router.post("/education")
def add_education(data: EducationRequest,
                  user=Depends(get_current_user),
                  profiles=Depends(get_profiles_collection)):
    return profile_editor.add_education(user["_id"], data, collection=profiles)


@router.delete("/education/{edu_id}")
def remove_education(edu_id: str,
                     user=Depends(get_current_user),
                     profiles=Depends(get_profiles_collection)):
    return profile_editor.remove_education(user["_id"], edu_id, collection=profiles)
