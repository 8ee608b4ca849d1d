"""Doctor service for data access."""

import structlog
from sqlalchemy import and_, delete, insert, select, update

from clinic_records.core.exceptions import NotFoundException
from clinic_records.models.doctors import doctor_specialties, doctors
from clinic_records.models.specialties import specialties
from clinic_records.schemas.catalog import SpecialtyResponse
from clinic_records.schemas.doctors import DoctorCreate, DoctorResponse, DoctorSpecialtyLink
from clinic_records.services.base import CatalogService

logger = structlog.get_logger(__name__)


class DoctorService(CatalogService):
    """Service for doctor operations.

    Deleting a doctor removes their specialty links but is blocked while any
    appointment or prescription still references them.
    """

    table = doctors
    response_model = DoctorResponse
    entity_name = "doctor"

    async def create_doctor(self, data: DoctorCreate) -> DoctorResponse:
        """
        Create a new doctor.

        Args:
            data: Doctor creation data

        Returns:
            Created doctor

        Raises:
            ConflictException: If the email or license number is already taken
        """
        return await self.create(data)

    async def get_by_license(self, license_no: str) -> DoctorResponse | None:
        """Get doctor by license number."""
        result = await self.db.execute(select(doctors).where(doctors.c.license_no == license_no))
        row = result.mappings().first()
        return DoctorResponse.model_validate(dict(row)) if row else None

    async def list_doctors(
        self,
        active_only: bool = False,
        skip: int = 0,
        limit: int = 100,
    ) -> list[DoctorResponse]:
        """List doctors, optionally only the active ones."""
        stmt = select(doctors)
        if active_only:
            stmt = stmt.where(doctors.c.active.is_(True))

        stmt = stmt.order_by(doctors.c.last_name, doctors.c.first_name).offset(skip).limit(limit)
        result = await self.db.execute(stmt)
        return [DoctorResponse.model_validate(dict(row)) for row in result.mappings()]

    async def set_active(self, doctor_id: int, active: bool) -> DoctorResponse:
        """Flag a doctor as active or inactive."""
        stmt = (
            update(doctors)
            .where(doctors.c.id == doctor_id)
            .values(active=active)
            .returning(doctors)
        )
        async with self.writing(f"set doctor {doctor_id} active"):
            result = await self.db.execute(stmt)
            row = result.mappings().first()
            if not row:
                raise self.not_found(doctor_id)

        logger.info("doctor_active_changed", id=doctor_id, active=active)
        return DoctorResponse.model_validate(dict(row))

    async def assign_specialty(self, doctor_id: int, specialty_id: int) -> DoctorSpecialtyLink:
        """
        Link a doctor to a specialty.

        Raises:
            ConflictException: If the link already exists
            ReferenceViolationException: If the doctor or specialty does not exist
        """
        stmt = insert(doctor_specialties).values(doctor_id=doctor_id, specialty_id=specialty_id)
        async with self.writing(f"assign specialty {specialty_id} to doctor {doctor_id}"):
            await self.db.execute(stmt)

        logger.info("doctor_specialty_assigned", doctor_id=doctor_id, specialty_id=specialty_id)
        return DoctorSpecialtyLink(doctor_id=doctor_id, specialty_id=specialty_id)

    async def remove_specialty(self, doctor_id: int, specialty_id: int) -> None:
        """
        Unlink a doctor from a specialty.

        Raises:
            NotFoundException: If the link does not exist
        """
        stmt = delete(doctor_specialties).where(
            and_(
                doctor_specialties.c.doctor_id == doctor_id,
                doctor_specialties.c.specialty_id == specialty_id,
            )
        )
        async with self.writing(f"remove specialty {specialty_id} from doctor {doctor_id}"):
            result = await self.db.execute(stmt)
            if result.rowcount == 0:
                raise NotFoundException(
                    f"Doctor {doctor_id} has no specialty {specialty_id}"
                )

    async def list_specialties(self, doctor_id: int) -> list[SpecialtyResponse]:
        """List the specialties held by a doctor, ordered by name."""
        stmt = (
            select(specialties)
            .join(doctor_specialties, doctor_specialties.c.specialty_id == specialties.c.id)
            .where(doctor_specialties.c.doctor_id == doctor_id)
            .order_by(specialties.c.name)
        )
        result = await self.db.execute(stmt)
        return [SpecialtyResponse.model_validate(dict(row)) for row in result.mappings()]
