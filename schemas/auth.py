from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional


def _not_blank(v):
    if isinstance(v, str):
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
    return v


# ==========================================================
# [request schemas]
# ==========================================================
class RegisterRequest(BaseModel):
    name: str = Field(..., max_length=100)                  # full name
    registration_number: str = Field(..., max_length=50)    # university registration no.
    roll_number: str = Field(..., max_length=50)            # roll no. (unique, login key)

    @field_validator("name", "registration_number", "roll_number")
    @classmethod
    def strip_required(cls, v):
        return _not_blank(v)


class LoginRequest(BaseModel):
    registration_number: str
    roll_number: str

    @field_validator("registration_number", "roll_number")
    @classmethod
    def strip_required(cls, v):
        return _not_blank(v)


class ProfileUpdate(BaseModel):
    name: Optional[str] = Field(default=None, max_length=100)
    registration_number: Optional[str] = Field(default=None, max_length=50)
    roll_number: Optional[str] = Field(default=None, max_length=50)

    @field_validator("name", "registration_number", "roll_number")
    @classmethod
    def strip_given(cls, v):
        return _not_blank(v)


# ==========================================================
# [response schemas]
# ==========================================================
class StudentProfile(BaseModel):
    id: int
    name: str
    registration_number: str
    roll_number: str

    model_config = ConfigDict(from_attributes=True)
