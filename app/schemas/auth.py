from pydantic import BaseModel, EmailStr, field_validator


# ─── Helpers ──────────────────────────────────────────────────────────────────
PASSWORD_MIN_LENGTH = 6


def validate_password_strength(v: str) -> str:
    if len(v) < PASSWORD_MIN_LENGTH:
        raise ValueError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")
    if not v.strip():
        raise ValueError("Password cannot be blank")
    return v


def validate_not_empty(v: str, label: str) -> str:
    if not v.strip():
        raise ValueError(f"{label} cannot be empty")
    return v.strip()


# ─── Request Schemas ──────────────────────────────────────────────────────────
class LoginRequest(BaseModel):
    email:    EmailStr
    password: str


class RegisterRequest(BaseModel):
    name:         str
    email:        EmailStr
    password:     str
    registration: str

    @field_validator("password")
    @classmethod
    def password_strength(cls, v: str) -> str:
        return validate_password_strength(v)

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        return validate_not_empty(v, "Name")

    @field_validator("registration")
    @classmethod
    def registration_not_empty(cls, v: str) -> str:
        return validate_not_empty(v, "Registration")


# ─── Response Schemas ─────────────────────────────────────────────────────────
class UserInToken(BaseModel):
    id:           int
    name:         str
    email:        str
    registration: str | None
    role:         str
    isActive:     bool


class LoginResponse(BaseModel):
    accessToken: str
    tokenType:   str = "Bearer"
    expiresIn:   int          # seconds
    user:        UserInToken
