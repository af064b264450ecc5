"""
Pydantic request schemas, one per JSON body the API accepts.
Every optional field is listed explicitly; anything else in the body is ignored.
"""
from typing import Optional
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from utils.errors import ValidationError


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=50)
    email: str = Field(..., min_length=3, max_length=150)
    password: str = Field(..., min_length=1)


class LoginRequest(BaseModel):
    # Either the username or the email address
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class CreatePostRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    code_image: str = Field(..., min_length=1, max_length=500)
    language: Optional[str] = Field(None, max_length=50)
    description: Optional[str] = None


class ProfileUpdateRequest(BaseModel):
    bio: Optional[str] = None
    profile_image: Optional[str] = Field(None, max_length=500)
    github_url: Optional[str] = Field(None, max_length=500)


def parse_body(schema, data):
    """Validate a decoded JSON body against ``schema``, raising ValidationError"""
    if not data:
        raise ValidationError("No data provided")
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")

    try:
        return schema.model_validate(data)
    except PydanticValidationError as e:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
        raise ValidationError(
            "Missing or invalid fields: " + ", ".join(fields),
            {"fields": fields}
        ) from e
