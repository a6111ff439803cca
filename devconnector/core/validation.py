"""Input validators.

Each validator takes the raw request mapping and returns a
``ValidationResult`` holding a field -> message map and a validity flag.
Missing, ``None`` and whitespace-only values are normalized to ``""``
first, so an absent field and an empty one produce the same message.
"""
from typing import Dict, Mapping, NamedTuple

from email_validator import validate_email, EmailNotValidError
from pydantic import HttpUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from .config import (
    POST_TEXT_MIN, POST_TEXT_MAX,
    NAME_MIN, NAME_MAX,
    PASSWORD_MIN, PASSWORD_MAX,
    HANDLE_MIN, HANDLE_MAX,
    SOCIAL_PLATFORMS,
)

_url_adapter = TypeAdapter(HttpUrl)


class ValidationResult(NamedTuple):
    errors: Dict[str, str]
    is_valid: bool


def is_empty(value) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0
    return False


UNTRIMMED_FIELDS = ("password", "password2")


def normalize(data: Mapping, *fields) -> Dict[str, str]:
    """Return the requested fields trimmed, with empty values replaced by ``""``.

    Values are trimmed the same way the handlers trim them before storing,
    so length checks run against the stored text. Passwords are kept as typed.
    """
    normalized = {}
    for field in fields:
        value = data.get(field)
        if is_empty(value):
            normalized[field] = ""
        elif isinstance(value, (list, tuple)):
            normalized[field] = ",".join(str(v) for v in value)
        elif field in UNTRIMMED_FIELDS:
            normalized[field] = str(value)
        else:
            normalized[field] = str(value).strip()
    return normalized


def split_skills(skills):
    """Turn a comma-delimited string (or a list) into an ordered list of trimmed skills."""
    if is_empty(skills):
        return []
    items = skills.split(",") if isinstance(skills, str) else skills
    return [s.strip() for s in items if s and s.strip()]


def is_length(value: str, minimum: int, maximum: int) -> bool:
    return minimum <= len(value) <= maximum


def is_email(value: str) -> bool:
    try:
        validate_email(value, check_deliverability=False)
        return True
    except EmailNotValidError:
        return False


def is_url(value: str) -> bool:
    candidate = value.strip()
    if "://" not in candidate:
        candidate = f"http://{candidate}"
    try:
        url = _url_adapter.validate_python(candidate)
    except PydanticValidationError:
        return False
    return url.host is not None and "." in url.host


def _result(errors):
    return ValidationResult(errors=errors, is_valid=not errors)


def validate_post_input(data: Mapping) -> ValidationResult:
    errors = {}
    data = normalize(data, "text")

    if not is_length(data["text"], POST_TEXT_MIN, POST_TEXT_MAX):
        errors["text"] = f"Text must be between {POST_TEXT_MIN} and {POST_TEXT_MAX} characters"
    if data["text"] == "":
        errors["text"] = "Text field is required"

    return _result(errors)


def validate_register_input(data: Mapping) -> ValidationResult:
    errors = {}
    data = normalize(data, "name", "email", "password", "password2")

    if not is_length(data["name"], NAME_MIN, NAME_MAX):
        errors["name"] = f"Name must be between {NAME_MIN} and {NAME_MAX} characters"
    if data["name"] == "":
        errors["name"] = "Name field is required"

    if not is_email(data["email"]):
        errors["email"] = "Email is invalid"
    if data["email"] == "":
        errors["email"] = "Email field is required"

    if data["password"] == "":
        errors["password"] = "Password field is required"
    if not is_length(data["password"], PASSWORD_MIN, PASSWORD_MAX):
        errors["password"] = f"Password must be between {PASSWORD_MIN} and {PASSWORD_MAX} characters"

    if data["password2"] == "":
        errors["password2"] = "Confirm password field is required"
    if data["password"] != data["password2"]:
        errors["password2"] = "Passwords must match"

    return _result(errors)


def validate_login_input(data: Mapping) -> ValidationResult:
    errors = {}
    data = normalize(data, "email", "password")

    if not is_email(data["email"]):
        errors["email"] = "Email is invalid"
    if data["email"] == "":
        errors["email"] = "Email field is required"
    if data["password"] == "":
        errors["password"] = "Password field is required"

    return _result(errors)


def validate_experience_input(data: Mapping) -> ValidationResult:
    errors = {}
    data = normalize(data, "title", "company", "from")

    if data["title"] == "":
        errors["title"] = "Job title field is required"
    if data["company"] == "":
        errors["company"] = "Company field is required"
    if data["from"] == "":
        errors["from"] = "From date field is required"

    return _result(errors)


def validate_education_input(data: Mapping) -> ValidationResult:
    errors = {}
    data = normalize(data, "school", "degree", "fieldofstudy", "from")

    if data["school"] == "":
        errors["school"] = "School field is required"
    if data["degree"] == "":
        errors["degree"] = "Degree field is required"
    if data["fieldofstudy"] == "":
        errors["fieldofstudy"] = "Field of study field is required"
    if data["from"] == "":
        errors["from"] = "From date field is required"

    return _result(errors)


def validate_profile_input(data: Mapping, partial: bool = False) -> ValidationResult:
    """Validate a profile upsert.

    With ``partial=True`` (an update of an existing profile) only the fields
    actually present in ``data`` are checked; required-ness is not enforced.
    """
    errors = {}
    present = {k for k, v in data.items() if not is_empty(v)}
    skills = split_skills(data.get("skills"))
    data = normalize(data, "handle", "status", "skills", "website", *SOCIAL_PLATFORMS)

    def checked(field):
        return not partial or field in present

    if checked("handle"):
        if not is_length(data["handle"], HANDLE_MIN, HANDLE_MAX):
            errors["handle"] = f"Handle needs to be between {HANDLE_MIN} and {HANDLE_MAX} characters"
        if data["handle"] == "":
            errors["handle"] = "Profile handle is required"

    if checked("status") and data["status"] == "":
        errors["status"] = "Status field is required"

    if checked("skills") and not skills:
        errors["skills"] = "Skills field is required"

    for field in ("website",) + tuple(SOCIAL_PLATFORMS):
        if data[field] != "" and not is_url(data[field]):
            errors[field] = "Not a valid URL"

    return _result(errors)
