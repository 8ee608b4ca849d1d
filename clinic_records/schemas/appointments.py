"""Appointment schemas for validation."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator


class AppointmentStatus(str, Enum):
    """Appointment status enumeration."""

    SCHEDULED = "Scheduled"
    CHECKED_IN = "CheckedIn"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"
    NO_SHOW = "NoShow"


class AppointmentBase(BaseModel):
    """Base appointment schema with common fields."""

    patient_id: int
    doctor_id: int
    room_id: int | None = None
    scheduled_start: datetime
    scheduled_end: datetime
    reason: str | None = Field(None, max_length=255)

    @field_validator("scheduled_end")
    @classmethod
    def validate_end_time(cls, v: datetime, info: Any) -> datetime:
        """Validate end time is after start time."""
        start = info.data.get("scheduled_start")
        if start is not None and v <= start:
            raise ValueError("End time must be after start time")
        return v


class AppointmentCreate(AppointmentBase):
    """Schema for creating a new appointment."""

    status: AppointmentStatus = AppointmentStatus.SCHEDULED


class AppointmentResponse(AppointmentBase):
    """Schema for appointment response."""

    id: int
    status: AppointmentStatus | None = None
    created_at: datetime | None = None

    model_config = {"from_attributes": True}


class AppointmentListResponse(BaseModel):
    """Schema for paginated appointment list response."""

    total: int
    page: int
    page_size: int
    items: list[AppointmentResponse]


class AppointmentFilters(BaseModel):
    """Schema for appointment filtering."""

    status: AppointmentStatus | None = None
    from_date: datetime | None = None
    to_date: datetime | None = None
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=20, ge=1, le=100)
