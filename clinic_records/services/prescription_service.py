"""Prescription service for data access."""

from collections import defaultdict
from collections.abc import Sequence
from typing import Any

import structlog
from sqlalchemy import insert, select

from clinic_records.models.prescriptions import prescription_items, prescriptions
from clinic_records.schemas.prescriptions import (
    PrescriptionCreate,
    PrescriptionItemCreate,
    PrescriptionItemResponse,
    PrescriptionResponse,
)
from clinic_records.services.base import CatalogService, to_row_values

logger = structlog.get_logger(__name__)


class PrescriptionService(CatalogService):
    """Service for prescriptions and their medication items."""

    table = prescriptions
    response_model = PrescriptionResponse
    entity_name = "prescription"

    async def create(  # type: ignore[override]
        self,
        data: PrescriptionCreate,
    ) -> PrescriptionResponse:
        """Issue a prescription together with its items."""
        return await self.create_prescription(data)

    async def create_prescription(self, data: PrescriptionCreate) -> PrescriptionResponse:
        """
        Issue a prescription together with its items.

        The header and every item are written in one transaction.

        Args:
            data: Prescription with items

        Returns:
            Created prescription including items

        Raises:
            ConflictException: If the same medication appears twice
            ReferenceViolationException: If a referenced row does not exist
        """
        header = data.model_dump(exclude={"items"}, exclude_none=True)

        async with self.writing("create prescription"):
            result = await self.db.execute(
                insert(prescriptions).values(**header).returning(prescriptions)
            )
            row = result.mappings().one()
            prescription_id = row["id"]

            for item in data.items:
                await self.db.execute(
                    insert(prescription_items).values(
                        **to_row_values(item, prescription_id=prescription_id)
                    )
                )

        logger.info(
            "prescription_created",
            id=prescription_id,
            patient_id=data.patient_id,
            items=len(data.items),
        )
        return await self.get_prescription(prescription_id)

    async def _with_items(self, rows: Sequence[Any]) -> list[PrescriptionResponse]:
        """Attach items to prescription rows, loading them in one query."""
        ids = [row["id"] for row in rows]
        if not ids:
            return []

        stmt = (
            select(prescription_items)
            .where(prescription_items.c.prescription_id.in_(ids))
            .order_by(prescription_items.c.prescription_id, prescription_items.c.medication_id)
        )
        result = await self.db.execute(stmt)

        items: defaultdict[int, list[PrescriptionItemResponse]] = defaultdict(list)
        for item in result.mappings():
            items[item["prescription_id"]].append(
                PrescriptionItemResponse.model_validate(dict(item))
            )

        return [
            PrescriptionResponse.model_validate({**dict(row), "items": items[row["id"]]})
            for row in rows
        ]

    async def get(self, entity_id: int) -> PrescriptionResponse:
        """Get a prescription with its items."""
        return await self.get_prescription(entity_id)

    async def get_prescription(self, prescription_id: int) -> PrescriptionResponse:
        """
        Get a prescription with its items.

        Raises:
            NotFoundException: If prescription not found
        """
        result = await self.db.execute(
            select(prescriptions).where(prescriptions.c.id == prescription_id)
        )
        row = result.mappings().first()

        if not row:
            raise self.not_found(prescription_id)

        return (await self._with_items([row]))[0]

    async def list_all(self, skip: int = 0, limit: int = 100) -> list[PrescriptionResponse]:
        """List prescriptions with their items, ordered by ID."""
        stmt = select(prescriptions).order_by(prescriptions.c.id).offset(skip).limit(limit)
        result = await self.db.execute(stmt)
        return await self._with_items(result.mappings().all())

    async def list_items(self, prescription_id: int) -> list[PrescriptionItemResponse]:
        """List the medication items of a prescription."""
        stmt = (
            select(prescription_items)
            .where(prescription_items.c.prescription_id == prescription_id)
            .order_by(prescription_items.c.medication_id)
        )
        result = await self.db.execute(stmt)
        return [PrescriptionItemResponse.model_validate(dict(row)) for row in result.mappings()]

    async def add_item(
        self,
        prescription_id: int,
        item: PrescriptionItemCreate,
    ) -> PrescriptionItemResponse:
        """
        Add a medication line to an existing prescription.

        Raises:
            ConflictException: If the medication is already on the prescription
            ReferenceViolationException: If prescription or medication does not exist
        """
        stmt = (
            insert(prescription_items)
            .values(**to_row_values(item, prescription_id=prescription_id))
            .returning(prescription_items)
        )
        async with self.writing(f"add item to prescription {prescription_id}"):
            result = await self.db.execute(stmt)
            row = result.mappings().one()

        return PrescriptionItemResponse.model_validate(dict(row))

    async def list_for_patient(self, patient_id: int) -> list[PrescriptionResponse]:
        """List a patient's prescriptions with items, most recent first."""
        stmt = (
            select(prescriptions)
            .where(prescriptions.c.patient_id == patient_id)
            .order_by(prescriptions.c.issued_at.desc(), prescriptions.c.id.desc())
        )
        result = await self.db.execute(stmt)
        return await self._with_items(result.mappings().all())
