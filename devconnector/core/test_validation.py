import pytest

from devconnector.core.validation import (
    validate_post_input, validate_register_input, validate_login_input,
    validate_experience_input, validate_education_input, validate_profile_input,
    is_url,
)

TEXT_LENGTH_MESSAGE = "Text must be between 10 and 300 characters"


@pytest.mark.parametrize("length, valid", [(9, False), (10, True), (300, True), (301, False)])
def test_post_text_length_bounds(length, valid):
    errors, is_valid = validate_post_input({"text": "x" * length})
    assert is_valid is valid
    if not valid:
        assert errors == {"text": TEXT_LENGTH_MESSAGE}


def test_post_text_missing_and_blank_collapse():
    missing = validate_post_input({})
    blank = validate_post_input({"text": "   "})
    assert not missing.is_valid
    assert missing.errors == blank.errors == {"text": "Text field is required"}


def test_post_text_length_ignores_padding():
    errors, is_valid = validate_post_input({"text": "    hi    "})
    assert not is_valid
    assert errors == {"text": TEXT_LENGTH_MESSAGE}


def test_register_valid_input():
    result = validate_register_input({
        "name": "Jane Doe",
        "email": "jane@devmail.io",
        "password": "secret123",
        "password2": "secret123",
    })
    assert result.is_valid
    assert result.errors == {}


def test_register_reports_every_bad_field():
    errors, is_valid = validate_register_input({
        "name": "J",
        "email": "not-an-email",
        "password": "123",
        "password2": "1234",
    })
    assert not is_valid
    assert errors["name"] == "Name must be between 2 and 30 characters"
    assert errors["email"] == "Email is invalid"
    assert errors["password"] == "Password must be between 6 and 30 characters"
    assert errors["password2"] == "Passwords must match"


def test_register_missing_fields():
    errors, is_valid = validate_register_input({})
    assert not is_valid
    assert errors["name"] == "Name field is required"
    assert errors["email"] == "Email field is required"
    assert errors["password2"] == "Confirm password field is required"


def test_login_requires_email_and_password():
    errors, is_valid = validate_login_input({"email": "", "password": None})
    assert not is_valid
    assert set(errors) == {"email", "password"}


def test_experience_required_fields():
    errors, is_valid = validate_experience_input({"title": " ", "location": "Berlin"})
    assert not is_valid
    assert set(errors) == {"title", "company", "from"}

    ok = validate_experience_input({"title": "Engineer", "company": "Acme", "from": "2020-01-01"})
    assert ok.is_valid


def test_education_required_fields():
    errors, is_valid = validate_education_input({"school": "MIT", "from": "2015-09-01"})
    assert not is_valid
    assert set(errors) == {"degree", "fieldofstudy"}


def test_profile_full_validation_on_create():
    errors, is_valid = validate_profile_input({"company": "Acme"})
    assert not is_valid
    assert set(errors) == {"handle", "status", "skills"}


def test_profile_handle_length():
    errors, _ = validate_profile_input({"handle": "j", "status": "Developer", "skills": "python"})
    assert errors == {"handle": "Handle needs to be between 2 and 40 characters"}


@pytest.mark.parametrize("skills", [" , ", ",,", [" ", ""]])
def test_profile_skills_blank_after_split(skills):
    errors, is_valid = validate_profile_input({"handle": "jdoe", "status": "Developer", "skills": skills})
    assert not is_valid
    assert errors == {"skills": "Skills field is required"}

    errors, _ = validate_profile_input({"skills": skills}, partial=True)
    assert errors == {"skills": "Skills field is required"}


def test_profile_partial_checks_only_present_fields():
    result = validate_profile_input({"handle": "jdoe"}, partial=True)
    assert result.is_valid

    errors, is_valid = validate_profile_input({"twitter": "not a url"}, partial=True)
    assert not is_valid
    assert errors == {"twitter": "Not a valid URL"}


@pytest.mark.parametrize("value, expected", [
    ("https://twitter.com/jdoe", True),
    ("www.janedoe.dev", True),
    ("janedoe.dev", True),
    ("not a url", False),
    ("localhost", False),
])
def test_is_url(value, expected):
    assert is_url(value) is expected
