"""Patient schemas for validation."""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field


class Gender(str, Enum):
    """Patient gender enumeration."""

    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class PatientBase(BaseModel):
    """Base schema for patient."""

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    date_of_birth: date | None = None
    gender: Gender = Gender.OTHER
    email: str | None = Field(None, max_length=150)
    phone: str | None = Field(None, max_length=30)
    address: str | None = Field(None, max_length=255)


class PatientCreate(PatientBase):
    """Schema for creating a patient."""


class PatientResponse(PatientBase):
    """Patient response schema."""

    id: int
    gender: Gender | None = None
    created_at: datetime | None = None

    model_config = {"from_attributes": True}
