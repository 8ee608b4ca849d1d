"""Doctor schemas for validation."""

from datetime import date

from pydantic import BaseModel, Field


class DoctorBase(BaseModel):
    """Base schema for doctor."""

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=150)
    phone: str | None = Field(None, max_length=30)
    license_no: str = Field(..., min_length=1, max_length=50)
    hired_date: date | None = None


class DoctorCreate(DoctorBase):
    """Schema for creating a doctor."""

    active: bool = True


class DoctorResponse(DoctorBase):
    """Doctor response schema."""

    id: int
    active: bool | None = None

    model_config = {"from_attributes": True}

    @property
    def full_name(self) -> str:
        """Doctor's display name."""
        return f"{self.first_name} {self.last_name}"


class DoctorSpecialtyLink(BaseModel):
    """A doctor/specialty pair from the join table."""

    doctor_id: int
    specialty_id: int

    model_config = {"from_attributes": True}
