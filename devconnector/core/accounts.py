import hashlib
import logging
from datetime import timedelta

import jwt
from passlib.context import CryptContext
from pymongo.errors import DuplicateKeyError

from devconnector.db.mongo import get_users_collection
from devconnector.schemas.schemas import RegisterRequest, LoginRequest
from .config import (
    SECRET_OR_KEY, JWT_ALGORITHM, TOKEN_EXPIRE_SECONDS,
    AVATAR_SIZE, AVATAR_RATING, AVATAR_DEFAULT,
)
from .errors import ValidationError, ConflictError, NotFoundError, AuthorizationError
from .utils import new_id, utcnow, serialize_user
from .validation import validate_register_input, validate_login_input

logger = logging.getLogger(__name__)

users_collection = get_users_collection()
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def gravatar_url(email: str) -> str:
    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
    return f"https://www.gravatar.com/avatar/{digest}?s={AVATAR_SIZE}&r={AVATAR_RATING}&d={AVATAR_DEFAULT}"


def register_user(data: RegisterRequest, collection=users_collection):
    """Create a user with a unique email and return it without the password hash."""
    errors, is_valid = validate_register_input(data.model_dump())
    if not is_valid:
        raise ValidationError(errors)

    email = data.email.strip().lower()
    if collection.find_one({"email": email}):
        raise ConflictError(email="Email already exists")

    user_doc = {
        "_id": new_id(),
        "name": data.name.strip(),
        "email": email,
        "avatar": gravatar_url(email),
        "password": pwd_context.hash(data.password),
        "date": utcnow(),
    }
    try:
        collection.insert_one(user_doc)
    except DuplicateKeyError:
        raise ConflictError(email="Email already exists")

    logger.info(f"[✓] Registered user {user_doc['_id']} with email {email}")
    return serialize_user(user_doc)


def issue_token(user_doc, now=None) -> str:
    now = now or utcnow()
    payload = {
        "id": user_doc["_id"],
        "name": user_doc["name"],
        "avatar": user_doc["avatar"],
        "iat": now,
        "exp": now + timedelta(seconds=TOKEN_EXPIRE_SECONDS),
    }
    return jwt.encode(payload, SECRET_OR_KEY, algorithm=JWT_ALGORITHM)


def verify_token(token: str) -> dict:
    """Decode a bearer token, raising ``AuthorizationError`` when it is invalid or expired."""
    try:
        return jwt.decode(token, SECRET_OR_KEY, algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise AuthorizationError(unauthorized="Token has expired")
    except jwt.PyJWTError:
        raise AuthorizationError(unauthorized="Invalid token")


def login_user(data: LoginRequest, collection=users_collection):
    errors, is_valid = validate_login_input(data.model_dump())
    if not is_valid:
        raise ValidationError(errors)

    email = data.email.strip().lower()
    user = collection.find_one({"email": email})
    if not user:
        raise NotFoundError(email="User not found")

    if not pwd_context.verify(data.password, user["password"]):
        logger.warning(f"[✗] Failed login for user {user['_id']}")
        raise ValidationError(password="Password incorrect")

    logger.info(f"[✓] User {user['_id']} logged in")
    return {"success": True, "token": f"Bearer {issue_token(user)}"}


def get_user(user_id: str, collection=users_collection):
    user = collection.find_one({"_id": user_id})
    if not user:
        raise AuthorizationError(unauthorized="User no longer exists")
    return user
