"""Billing and payment schemas for validation."""

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field, field_serializer


class BillingStatus(str, Enum):
    """Bill status enumeration."""

    UNPAID = "Unpaid"
    PARTIALLY_PAID = "PartiallyPaid"
    PAID = "Paid"
    CANCELLED = "Cancelled"


class PaymentMethod(str, Enum):
    """Payment method enumeration."""

    CASH = "Cash"
    CARD = "Card"
    MOBILE_MONEY = "MobileMoney"
    INSURANCE = "Insurance"


class BillCreate(BaseModel):
    """Schema for issuing a bill."""

    patient_id: int
    appointment_id: int | None = None
    issued_at: datetime | None = None
    total_amount: Decimal = Field(default=Decimal("0.00"), ge=0, max_digits=10, decimal_places=2)


class BillResponse(BaseModel):
    """Bill response schema."""

    id: int
    patient_id: int
    appointment_id: int | None = None
    issued_at: datetime | None = None
    total_amount: Decimal
    paid_amount: Decimal
    status: BillingStatus | None = None

    model_config = {"from_attributes": True}

    @field_serializer("total_amount", "paid_amount", when_used="json")
    def serialize_decimal(self, value: Decimal) -> str:
        """Serialize amounts with two decimal places."""
        return f"{value:.2f}"


class PaymentCreate(BaseModel):
    """Schema for recording a payment against a bill."""

    amount: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    method: PaymentMethod = PaymentMethod.CASH
    transaction_reference: str | None = Field(None, max_length=150)
    paid_at: datetime | None = None


class PaymentResponse(BaseModel):
    """Payment response schema."""

    id: int
    bill_id: int
    paid_at: datetime | None = None
    amount: Decimal
    method: PaymentMethod | None = None
    transaction_reference: str | None = None

    model_config = {"from_attributes": True}


class BillingDrift(BaseModel):
    """A bill whose stored status disagrees with its amounts."""

    bill_id: int
    total_amount: Decimal
    paid_amount: Decimal
    stored_status: BillingStatus | None
    derived_status: BillingStatus
