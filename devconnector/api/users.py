from fastapi import APIRouter, Depends

from devconnector.core.accounts import register_user, login_user
from devconnector.core.utils import serialize_user
from devconnector.db.mongo import get_users_collection
from devconnector.schemas.schemas import RegisterRequest, LoginRequest
from .auth import get_current_user

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("/register")
def register(data: RegisterRequest, users=Depends(get_users_collection)):
    return register_user(data, collection=users)


@router.post("/login")
def login(data: LoginRequest, users=Depends(get_users_collection)):
    return login_user(data, collection=users)


@router.get("/current")
def current(user=Depends(get_current_user)):
    return serialize_user(user)
