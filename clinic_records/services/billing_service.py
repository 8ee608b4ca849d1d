"""Billing service: bills, payments and status upkeep."""

from decimal import Decimal

import structlog
from sqlalchemy import delete, insert, select, update

from clinic_records.core.exceptions import BadRequestException, NotFoundException
from clinic_records.models.billing import billing, payments
from clinic_records.schemas.billing import (
    BillCreate,
    BillingDrift,
    BillingStatus,
    BillResponse,
    PaymentCreate,
    PaymentResponse,
)
from clinic_records.services.base import BaseService, to_row_values

logger = structlog.get_logger(__name__)


def derive_billing_status(
    total_amount: Decimal,
    paid_amount: Decimal,
    current: BillingStatus | str | None = None,
) -> BillingStatus:
    """
    Work out a bill's status from its amounts.

    A cancelled bill stays cancelled whatever has been paid.

    Args:
        total_amount: Amount billed
        paid_amount: Amount paid so far
        current: Status currently stored on the bill

    Returns:
        Status matching the amounts
    """
    if current is not None and BillingStatus(current) == BillingStatus.CANCELLED:
        return BillingStatus.CANCELLED
    if paid_amount <= 0:
        return BillingStatus.UNPAID
    if paid_amount >= total_amount:
        return BillingStatus.PAID
    return BillingStatus.PARTIALLY_PAID


class BillingService(BaseService):
    """Service for bills and payments.

    ``billing.status`` is a stored column. Every payment recorded here adds to
    ``paid_amount`` and re-derives the status in the same transaction; rows
    written around this service can drift, see :meth:`find_status_drift`.
    """

    async def create_bill(self, data: BillCreate) -> BillResponse:
        """
        Issue a new unpaid bill.

        Raises:
            ReferenceViolationException: If the patient or appointment does not exist
        """
        values = to_row_values(data, paid_amount=Decimal("0.00"))
        values["status"] = derive_billing_status(data.total_amount, Decimal("0.00")).value

        stmt = insert(billing).values(**values).returning(billing)
        async with self.writing("create bill"):
            result = await self.db.execute(stmt)
            row = result.mappings().one()

        logger.info("bill_created", id=row["id"], total_amount=str(data.total_amount))
        return BillResponse.model_validate(dict(row))

    async def get_bill(self, bill_id: int) -> BillResponse:
        """
        Get bill by ID.

        Raises:
            NotFoundException: If bill not found
        """
        result = await self.db.execute(select(billing).where(billing.c.id == bill_id))
        row = result.mappings().first()

        if not row:
            raise NotFoundException(f"Bill {bill_id} not found")

        return BillResponse.model_validate(dict(row))

    async def list_bills_for_patient(self, patient_id: int) -> list[BillResponse]:
        """List a patient's bills, oldest first."""
        stmt = (
            select(billing)
            .where(billing.c.patient_id == patient_id)
            .order_by(billing.c.issued_at, billing.c.id)
        )
        result = await self.db.execute(stmt)
        return [BillResponse.model_validate(dict(row)) for row in result.mappings()]

    async def list_payments(self, bill_id: int) -> list[PaymentResponse]:
        """List the payments made against a bill, oldest first."""
        stmt = (
            select(payments)
            .where(payments.c.bill_id == bill_id)
            .order_by(payments.c.paid_at, payments.c.id)
        )
        result = await self.db.execute(stmt)
        return [PaymentResponse.model_validate(dict(row)) for row in result.mappings()]

    async def record_payment(self, bill_id: int, data: PaymentCreate) -> PaymentResponse:
        """
        Record a payment and bring the bill up to date.

        Inserts the payment, adds its amount to ``paid_amount`` and stores the
        re-derived status, all in one transaction.

        Args:
            bill_id: Bill being paid
            data: Payment details

        Returns:
            Recorded payment

        Raises:
            NotFoundException: If bill not found
            BadRequestException: If the bill is cancelled
        """
        async with self.writing(f"record payment on bill {bill_id}"):
            result = await self.db.execute(
                select(billing).where(billing.c.id == bill_id).with_for_update()
            )
            bill = result.mappings().first()

            if not bill:
                raise NotFoundException(f"Bill {bill_id} not found")

            if bill["status"] == BillingStatus.CANCELLED.value:
                raise BadRequestException(f"Bill {bill_id} is cancelled")

            payment_result = await self.db.execute(
                insert(payments)
                .values(**to_row_values(data, bill_id=bill_id))
                .returning(payments)
            )
            payment = payment_result.mappings().one()

            paid_amount = bill["paid_amount"] + data.amount
            status = derive_billing_status(bill["total_amount"], paid_amount)

            await self.db.execute(
                update(billing)
                .where(billing.c.id == bill_id)
                .values(paid_amount=paid_amount, status=status.value)
            )

        if paid_amount > bill["total_amount"]:
            logger.warning(
                "bill_overpaid",
                bill_id=bill_id,
                total_amount=str(bill["total_amount"]),
                paid_amount=str(paid_amount),
            )

        logger.info(
            "payment_recorded",
            bill_id=bill_id,
            payment_id=payment["id"],
            amount=str(data.amount),
            method=data.method.value,
            status=status.value,
        )
        return PaymentResponse.model_validate(dict(payment))

    async def cancel_bill(self, bill_id: int) -> BillResponse:
        """
        Mark a bill as cancelled.

        Raises:
            NotFoundException: If bill not found
        """
        stmt = (
            update(billing)
            .where(billing.c.id == bill_id)
            .values(status=BillingStatus.CANCELLED.value)
            .returning(billing)
        )
        async with self.writing(f"cancel bill {bill_id}"):
            result = await self.db.execute(stmt)
            row = result.mappings().first()
            if not row:
                raise NotFoundException(f"Bill {bill_id} not found")

        logger.info("bill_cancelled", id=bill_id)
        return BillResponse.model_validate(dict(row))

    async def delete_bill(self, bill_id: int) -> None:
        """
        Delete a bill together with its payments.

        Raises:
            NotFoundException: If bill not found
        """
        async with self.writing(f"delete bill {bill_id}"):
            result = await self.db.execute(delete(billing).where(billing.c.id == bill_id))
            if result.rowcount == 0:
                raise NotFoundException(f"Bill {bill_id} not found")

        logger.info("bill_deleted", id=bill_id)

    async def find_status_drift(self) -> list[BillingDrift]:
        """Find bills whose stored status no longer matches their amounts."""
        result = await self.db.execute(select(billing).order_by(billing.c.id))

        drift = []
        for bill in result.mappings():
            derived = derive_billing_status(
                bill["total_amount"],
                bill["paid_amount"],
                bill["status"],
            )
            if bill["status"] != derived.value:
                drift.append(
                    BillingDrift(
                        bill_id=bill["id"],
                        total_amount=bill["total_amount"],
                        paid_amount=bill["paid_amount"],
                        stored_status=bill["status"],
                        derived_status=derived,
                    )
                )

        if drift:
            logger.warning("billing_status_drift", bills=[d.bill_id for d in drift])
        return drift
