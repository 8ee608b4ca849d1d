"""Schemas for specialties, medications and rooms."""

from pydantic import BaseModel, Field


class SpecialtyCreate(BaseModel):
    """Schema for creating a specialty."""

    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(None, max_length=255)


class SpecialtyResponse(SpecialtyCreate):
    """Specialty response schema."""

    id: int

    model_config = {"from_attributes": True}


class MedicationCreate(BaseModel):
    """Schema for creating a medication."""

    name: str = Field(..., min_length=1, max_length=150)
    manufacturer: str | None = Field(None, max_length=150)
    formulation: str | None = Field(None, max_length=100)


class MedicationResponse(MedicationCreate):
    """Medication response schema."""

    id: int

    model_config = {"from_attributes": True}


class RoomCreate(BaseModel):
    """Schema for creating a room."""

    room_number: str = Field(..., min_length=1, max_length=20)
    floor: str | None = Field(None, max_length=20)
    notes: str | None = Field(None, max_length=255)


class RoomResponse(RoomCreate):
    """Room response schema."""

    id: int

    model_config = {"from_attributes": True}
