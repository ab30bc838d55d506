from pydantic import BaseModel, field_validator
from typing import Optional

from app.models.environment import EnvironmentType
from app.schemas.auth import validate_not_empty


class EnvironmentCreateRequest(BaseModel):
    name:        str
    type:        EnvironmentType
    description: Optional[str] = None
    capacity:    int
    building:    Optional[str] = None
    floor:       Optional[str] = None

    @field_validator("capacity")
    @classmethod
    def check_capacity(cls, v):
        if v < 1: raise ValueError("Capacity must be at least 1")
        return v

    @field_validator("name")
    @classmethod
    def check_name(cls, v): return validate_not_empty(v, "Name")


class EnvironmentUpdateRequest(BaseModel):
    name:        Optional[str] = None
    type:        Optional[EnvironmentType] = None
    description: Optional[str] = None
    capacity:    Optional[int] = None
    building:    Optional[str] = None
    floor:       Optional[str] = None
    isActive:    Optional[bool] = None

    @field_validator("capacity")
    @classmethod
    def check_capacity(cls, v):
        if v is not None and v < 1: raise ValueError("Capacity must be at least 1")
        return v

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        return validate_not_empty(v, "Name") if v is not None else v


class EnvironmentOut(BaseModel):
    id:          int
    name:        str
    type:        EnvironmentType
    description: str | None
    capacity:    int
    building:    str | None
    floor:       str | None
    isActive:    bool
