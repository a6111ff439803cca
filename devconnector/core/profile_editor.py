import logging

from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from devconnector.db.mongo import get_profiles_collection, get_users_collection, get_posts_collection
from devconnector.schemas.schemas import ProfileRequest, ExperienceRequest, EducationRequest
from .config import SOCIAL_PLATFORMS
from .errors import (
    ValidationError, NotFoundError, ConflictError,
    ProfileNotFound, EntryNotFound, HandleConflict,
)
from .utils import new_id, utcnow, serialize_doc
from .validation import (
    is_empty, split_skills,
    validate_profile_input, validate_experience_input, validate_education_input,
)

logger = logging.getLogger(__name__)

profiles_collection = get_profiles_collection()
users_collection = get_users_collection()
posts_collection = get_posts_collection()

PROFILE_FIELDS = ("handle", "company", "website", "location", "bio", "status", "githubusername")


# --- Reads ---

def _owners(user_ids, users):
    docs = users.find({"_id": {"$in": list(user_ids)}}, {"name": 1, "avatar": 1})
    return {doc["_id"]: doc for doc in docs}


def _with_owner(profile, owner):
    out = serialize_doc(profile)
    owner = owner or {}
    out["user"] = {"id": profile["user"], "name": owner.get("name"), "avatar": owner.get("avatar")}
    return out


def _populated(profile, users):
    owners = _owners([profile["user"]], users)
    return _with_owner(profile, owners.get(profile["user"]))


def get_current_profile(user_id: str, collection=profiles_collection, users=users_collection):
    profile = collection.find_one({"user": user_id})
    if not profile:
        raise ProfileNotFound()
    return _populated(profile, users)


def get_profile_by_handle(handle: str, collection=profiles_collection, users=users_collection):
    profile = collection.find_one({"handle": handle})
    if not profile:
        raise ProfileNotFound({"noprofile": "There is no profile for this handle"})
    return _populated(profile, users)


def get_profile_by_user(user_id: str, collection=profiles_collection, users=users_collection):
    profile = collection.find_one({"user": user_id})
    if not profile:
        raise ProfileNotFound()
    return _populated(profile, users)


def get_all_profiles(collection=profiles_collection, users=users_collection):
    profiles = list(collection.find())
    if not profiles:
        raise NotFoundError(noprofile="There are no profiles")
    owners = _owners({p["user"] for p in profiles}, users)
    return [_with_owner(p, owners.get(p["user"])) for p in profiles]


# --- Upsert ---

def build_profile_fields(data: ProfileRequest):
    """Collect the non-empty scalar fields and social links of an upsert request."""
    raw = data.model_dump()
    fields = {f: raw[f].strip() for f in PROFILE_FIELDS if not is_empty(raw[f])}
    if not is_empty(raw["skills"]):
        fields["skills"] = split_skills(raw["skills"])
    social = {p: raw[p].strip() for p in SOCIAL_PLATFORMS if not is_empty(raw[p])}
    return fields, social


def upsert_profile(user_id: str, data: ProfileRequest, collection=profiles_collection):
    """Create the caller's profile, or partially update it if one exists.

    A new profile gets full validation; an update validates and overwrites only
    the fields present in the request, so nothing is ever cleared. In both
    cases a handle held by another user's profile is a ``HandleConflict``.
    """
    existing = collection.find_one({"user": user_id})

    errors, is_valid = validate_profile_input(data.model_dump(), partial=existing is not None)
    if not is_valid:
        raise ValidationError(errors)

    fields, social = build_profile_fields(data)

    if "handle" in fields:
        holder = collection.find_one({"handle": fields["handle"]}, {"user": 1})
        if holder and holder["user"] != user_id:
            logger.warning(f"[✗] Handle {fields['handle']} requested by user {user_id} is taken")
            raise HandleConflict()

    if existing:
        updates = dict(fields)
        updates.update({f"social.{platform}": url for platform, url in social.items()})
        if not updates:
            return serialize_doc(existing)
        try:
            profile = collection.find_one_and_update(
                {"user": user_id},
                {"$set": updates},
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError:
            raise HandleConflict()
        logger.info(f"[✓] Updated profile {profile['_id']} for user {user_id}: {sorted(updates)}")
        return serialize_doc(profile)

    profile_doc = {
        "_id": new_id(),
        "user": user_id,
        **fields,
        "social": social,
        "experience": [],
        "education": [],
        "date": utcnow(),
    }
    try:
        collection.insert_one(profile_doc)
    except DuplicateKeyError as e:
        key_pattern = (e.details or {}).get("keyPattern", {})
        if "user" in key_pattern:
            raise ConflictError(profile="A profile already exists for this user")
        raise HandleConflict()

    logger.info(f"[✓] Created profile {profile_doc['_id']} with handle {fields.get('handle')} for user {user_id}")
    return serialize_doc(profile_doc)


# --- Embedded collections ---

def _entry_from(data):
    dumped = data.model_dump(by_alias=True)
    entry = {k: (v.strip() if isinstance(v, str) else v) for k, v in dumped.items() if v is not None}
    entry["current"] = bool(dumped.get("current"))
    return {"id": new_id(), **entry}


def _push_entry(user_id, array_field, entry, collection):
    profile = collection.find_one_and_update(
        {"user": user_id},
        {"$push": {array_field: {"$each": [entry], "$position": 0}}},
        return_document=ReturnDocument.AFTER,
    )
    if profile is None:
        raise ProfileNotFound()
    logger.info(f"[✓] Added {array_field} entry {entry['id']} to profile {profile['_id']}")
    return serialize_doc(profile)


def _pull_entry(user_id, array_field, entry_id, collection):
    profile = collection.find_one_and_update(
        {"user": user_id, f"{array_field}.id": entry_id},
        {"$pull": {array_field: {"id": entry_id}}},
        return_document=ReturnDocument.AFTER,
    )
    if profile is None:
        if collection.find_one({"user": user_id}, {"_id": 1}) is None:
            raise ProfileNotFound()
        logger.warning(f"[✗] No {array_field} entry {entry_id} on the profile of user {user_id}")
        raise EntryNotFound({f"no{array_field}": f"No {array_field} entry found with that ID"})
    logger.info(f"[✓] Removed {array_field} entry {entry_id} from profile {profile['_id']}")
    return serialize_doc(profile)


def add_experience(user_id: str, data: ExperienceRequest, collection=profiles_collection):
    errors, is_valid = validate_experience_input(data.model_dump(by_alias=True))
    if not is_valid:
        raise ValidationError(errors)
    return _push_entry(user_id, "experience", _entry_from(data), collection)


def remove_experience(user_id: str, exp_id: str, collection=profiles_collection):
    return _pull_entry(user_id, "experience", exp_id, collection)


def add_education(user_id: str, data: EducationRequest, collection=profiles_collection):
    errors, is_valid = validate_education_input(data.model_dump(by_alias=True))
    if not is_valid:
        raise ValidationError(errors)
    return _push_entry(user_id, "education", _entry_from(data), collection)


def remove_education(user_id: str, edu_id: str, collection=profiles_collection):
    return _pull_entry(user_id, "education", edu_id, collection)


# --- Account removal ---

def delete_account(user_id: str, collection=profiles_collection, users=users_collection, posts=posts_collection):
    """Remove the caller's profile, posts and user record."""
    profiles_deleted = collection.delete_one({"user": user_id}).deleted_count
    posts_deleted = posts.delete_many({"user": user_id}).deleted_count
    users.delete_one({"_id": user_id})
    logger.info(f"[✓] Deleted user {user_id} ({profiles_deleted} profile, {posts_deleted} posts)")
    return {"success": True}
