"""Patient service for data access."""

from sqlalchemy import func, select

from clinic_records.models.appointments import appointments
from clinic_records.models.billing import billing
from clinic_records.models.medical_records import medical_records
from clinic_records.models.patients import patients
from clinic_records.models.prescriptions import prescriptions
from clinic_records.schemas.patients import PatientCreate, PatientResponse
from clinic_records.services.base import CatalogService


class PatientService(CatalogService):
    """Service for patient operations.

    Deleting a patient cascades to their appointments, medical records,
    prescriptions and bills.
    """

    table = patients
    response_model = PatientResponse
    entity_name = "patient"

    async def create_patient(self, data: PatientCreate) -> PatientResponse:
        """Create a new patient."""
        return await self.create(data)

    async def search_patients(
        self,
        name: str,
        skip: int = 0,
        limit: int = 20,
    ) -> list[PatientResponse]:
        """Find patients whose first or last name contains ``name``."""
        pattern = f"%{name.lower()}%"
        stmt = (
            select(patients)
            .where(
                func.lower(patients.c.first_name).like(pattern)
                | func.lower(patients.c.last_name).like(pattern)
            )
            .order_by(patients.c.last_name, patients.c.first_name)
            .offset(skip)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return [PatientResponse.model_validate(dict(row)) for row in result.mappings()]

    async def count_dependents(self, patient_id: int) -> dict[str, int]:
        """Count the rows that would be cascaded by deleting the patient."""
        counts = {}
        for name, table in (
            ("appointments", appointments),
            ("medical_records", medical_records),
            ("prescriptions", prescriptions),
            ("billing", billing),
        ):
            stmt = select(func.count()).select_from(table).where(table.c.patient_id == patient_id)
            result = await self.db.execute(stmt)
            counts[name] = result.scalar() or 0
        return counts
