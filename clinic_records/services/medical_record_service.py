"""Medical record service for data access."""

from sqlalchemy import select

from clinic_records.models.medical_records import medical_records
from clinic_records.schemas.medical_records import MedicalRecordCreate, MedicalRecordResponse
from clinic_records.services.base import CatalogService


class MedicalRecordService(CatalogService):
    """Service for medical records.

    A record outlives its appointment: deleting the appointment only clears
    the link.
    """

    table = medical_records
    response_model = MedicalRecordResponse
    entity_name = "medical_record"

    async def create_record(self, data: MedicalRecordCreate) -> MedicalRecordResponse:
        """Create a new medical record."""
        return await self.create(data)

    async def list_for_patient(self, patient_id: int) -> list[MedicalRecordResponse]:
        """List a patient's records, most recent first."""
        stmt = (
            select(medical_records)
            .where(medical_records.c.patient_id == patient_id)
            .order_by(medical_records.c.record_date.desc(), medical_records.c.id.desc())
        )
        result = await self.db.execute(stmt)
        return [MedicalRecordResponse.model_validate(dict(row)) for row in result.mappings()]
