"""Services for the specialty, medication and room lookup tables."""

from sqlalchemy import select

from clinic_records.models.rooms import rooms
from clinic_records.models.specialties import medications, specialties
from clinic_records.schemas.catalog import (
    MedicationResponse,
    RoomResponse,
    SpecialtyResponse,
)
from clinic_records.services.base import CatalogService


class SpecialtyService(CatalogService):
    """Service for managing specialties."""

    table = specialties
    response_model = SpecialtyResponse
    entity_name = "specialty"

    async def get_by_name(self, name: str) -> SpecialtyResponse | None:
        """Get a specialty by its unique name."""
        result = await self.db.execute(select(specialties).where(specialties.c.name == name))
        row = result.mappings().first()
        return SpecialtyResponse.model_validate(dict(row)) if row else None


class MedicationService(CatalogService):
    """Service for managing the medication catalog.

    Medications referenced by a prescription item cannot be deleted.
    """

    table = medications
    response_model = MedicationResponse
    entity_name = "medication"

    async def get_by_name(self, name: str) -> MedicationResponse | None:
        """Get a medication by its unique name."""
        result = await self.db.execute(select(medications).where(medications.c.name == name))
        row = result.mappings().first()
        return MedicationResponse.model_validate(dict(row)) if row else None


class RoomService(CatalogService):
    """Service for managing rooms.

    Deleting a room clears the room reference on its appointments.
    """

    table = rooms
    response_model = RoomResponse
    entity_name = "room"

    async def get_by_number(self, room_number: str) -> RoomResponse | None:
        """Get a room by its unique number."""
        result = await self.db.execute(select(rooms).where(rooms.c.room_number == room_number))
        row = result.mappings().first()
        return RoomResponse.model_validate(dict(row)) if row else None
