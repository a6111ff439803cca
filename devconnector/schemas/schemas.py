from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# Request bodies. Every field is optional at this layer so that a missing
# field reaches the validators and comes back as a field-keyed message
# instead of a framework-level 422.


class RegisterRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    password2: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class ProfileRequest(BaseModel):
    handle: Optional[str] = None
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    status: Optional[str] = None
    githubusername: Optional[str] = None
    skills: Optional[Union[str, List[str]]] = None
    # social links, all independently optional
    youtube: Optional[str] = None
    twitter: Optional[str] = None
    facebook: Optional[str] = None
    linkedin: Optional[str] = None
    instagram: Optional[str] = None


class ExperienceRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    from_: Optional[str] = Field(default=None, alias="from")
    to: Optional[str] = None
    current: Optional[bool] = False
    description: Optional[str] = None


class EducationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    school: Optional[str] = None
    degree: Optional[str] = None
    fieldofstudy: Optional[str] = None
    from_: Optional[str] = Field(default=None, alias="from")
    to: Optional[str] = None
    current: Optional[bool] = False
    description: Optional[str] = None


class PostRequest(BaseModel):
    text: Optional[str] = None


class CommentRequest(BaseModel):
    text: Optional[str] = None
