"""Appointment service for data access."""

from typing import Any

import structlog
from sqlalchemy import and_, func, select, update

from clinic_records.models.appointments import appointments
from clinic_records.schemas.appointments import (
    AppointmentCreate,
    AppointmentFilters,
    AppointmentListResponse,
    AppointmentResponse,
    AppointmentStatus,
)
from clinic_records.services.base import CatalogService

logger = structlog.get_logger(__name__)


class AppointmentService(CatalogService):
    """Service for managing appointments.

    Status is stored as given; no transition rules are enforced.
    """

    table = appointments
    response_model = AppointmentResponse
    entity_name = "appointment"

    async def create_appointment(self, data: AppointmentCreate) -> AppointmentResponse:
        """
        Create a new appointment.

        Args:
            data: Appointment creation data

        Returns:
            Created appointment

        Raises:
            ReferenceViolationException: If the patient, doctor or room does not exist
            ValidationException: If the store rejects the schedule
        """
        return await self.create(data)

    async def _list(
        self,
        conditions: list[Any],
        filters: AppointmentFilters,
    ) -> AppointmentListResponse:
        if filters.status:
            conditions.append(appointments.c.status == filters.status.value)

        if filters.from_date:
            conditions.append(appointments.c.scheduled_start >= filters.from_date)

        if filters.to_date:
            conditions.append(appointments.c.scheduled_start <= filters.to_date)

        # Count total
        count_stmt = select(func.count()).select_from(appointments).where(and_(*conditions))
        total_result = await self.db.execute(count_stmt)
        total = total_result.scalar() or 0

        # Get paginated results
        offset = (filters.page - 1) * filters.page_size

        stmt = (
            select(appointments)
            .where(and_(*conditions))
            .order_by(appointments.c.scheduled_start, appointments.c.id)
            .limit(filters.page_size)
            .offset(offset)
        )

        result = await self.db.execute(stmt)
        items = [AppointmentResponse.model_validate(dict(row)) for row in result.mappings()]

        return AppointmentListResponse(
            total=total,
            page=filters.page,
            page_size=filters.page_size,
            items=items,
        )

    async def list_for_doctor(
        self,
        doctor_id: int,
        filters: AppointmentFilters | None = None,
    ) -> AppointmentListResponse:
        """List a doctor's appointments ordered by start time."""
        return await self._list(
            [appointments.c.doctor_id == doctor_id],
            filters or AppointmentFilters(),
        )

    async def list_for_patient(
        self,
        patient_id: int,
        filters: AppointmentFilters | None = None,
    ) -> AppointmentListResponse:
        """List a patient's appointments ordered by start time."""
        return await self._list(
            [appointments.c.patient_id == patient_id],
            filters or AppointmentFilters(),
        )

    async def set_status(
        self,
        appointment_id: int,
        status: AppointmentStatus,
    ) -> AppointmentResponse:
        """
        Update appointment status.

        Raises:
            NotFoundException: If appointment not found
        """
        stmt = (
            update(appointments)
            .where(appointments.c.id == appointment_id)
            .values(status=status.value)
            .returning(appointments)
        )
        async with self.writing(f"set appointment {appointment_id} status"):
            result = await self.db.execute(stmt)
            row = result.mappings().first()
            if not row:
                raise self.not_found(appointment_id)

        logger.info("appointment_status_changed", id=appointment_id, status=status.value)
        return AppointmentResponse.model_validate(dict(row))
