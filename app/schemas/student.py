from pydantic import BaseModel, EmailStr, field_validator
from typing import Optional

from app.schemas.auth import validate_password_strength, validate_not_empty


# ─── Request ──────────────────────────────────────────────────────────────────
class StudentCreateRequest(BaseModel):
    name:         str
    email:        EmailStr
    registration: str
    password:     str

    @field_validator("password")
    @classmethod
    def check_password(cls, v): return validate_password_strength(v)

    @field_validator("name")
    @classmethod
    def check_name(cls, v): return validate_not_empty(v, "Name")

    @field_validator("registration")
    @classmethod
    def check_registration(cls, v): return validate_not_empty(v, "Registration")


class StudentUpdateRequest(BaseModel):
    name:         Optional[str] = None
    email:        Optional[EmailStr] = None
    registration: Optional[str] = None
    password:     Optional[str] = None
    isActive:     Optional[bool] = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        return validate_not_empty(v, "Name") if v is not None else v

    @field_validator("registration")
    @classmethod
    def check_registration(cls, v):
        return validate_not_empty(v, "Registration") if v is not None else v

    @field_validator("password")
    @classmethod
    def check_password(cls, v):
        return validate_password_strength(v) if v is not None else v


# ─── Response ─────────────────────────────────────────────────────────────────
class StudentOut(BaseModel):
    id:           int
    name:         str
    email:        str
    registration: str | None
    role:         str
    isActive:     bool
    createdAt:    str
    updatedAt:    str
