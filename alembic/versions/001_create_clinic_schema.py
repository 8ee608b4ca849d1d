"""Create clinic schema.

Revision ID: 001
Revises:
Create Date: 2026-10-18 00:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id() -> sa.Column:
    return sa.Column("id", sa.Integer(), autoincrement=True, nullable=False)


def _created(name: str) -> sa.Column:
    return sa.Column(
        name,
        sa.DateTime(),
        server_default=sa.text("CURRENT_TIMESTAMP"),
        nullable=True,
    )


def upgrade() -> None:
    """Upgrade database schema."""
    # Lookup tables
    op.create_table(
        "specialties",
        _id(),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.String(length=255), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_specialties"),
        sa.UniqueConstraint("name", name="uq_specialties_name"),
    )
    op.create_table(
        "medications",
        _id(),
        sa.Column("name", sa.String(length=150), nullable=False),
        sa.Column("manufacturer", sa.String(length=150), nullable=True),
        sa.Column("formulation", sa.String(length=100), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_medications"),
        sa.UniqueConstraint("name", name="uq_medications_name"),
    )

    # People and roles
    op.create_table(
        "doctors",
        _id(),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=150), nullable=False),
        sa.Column("phone", sa.String(length=30), nullable=True),
        sa.Column("license_no", sa.String(length=50), nullable=False),
        sa.Column("hired_date", sa.Date(), nullable=True),
        sa.Column("active", sa.Boolean(), server_default=sa.true(), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_doctors"),
        sa.UniqueConstraint("email", name="uq_doctors_email"),
        sa.UniqueConstraint("license_no", name="uq_doctors_license_no"),
    )
    op.create_table(
        "patients",
        _id(),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("date_of_birth", sa.Date(), nullable=True),
        sa.Column("gender", sa.String(length=10), server_default="Other", nullable=True),
        sa.Column("email", sa.String(length=150), nullable=True),
        sa.Column("phone", sa.String(length=30), nullable=True),
        sa.Column("address", sa.String(length=255), nullable=True),
        _created("created_at"),
        sa.CheckConstraint("gender IN ('Male', 'Female', 'Other')", name="patients_gender_check"),
        sa.PrimaryKeyConstraint("id", name="pk_patients"),
    )
    op.create_table(
        "doctor_specialties",
        sa.Column("doctor_id", sa.Integer(), nullable=False),
        sa.Column("specialty_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ["doctor_id"],
            ["doctors.id"],
            name="fk_doctor_specialties_doctor_id_doctors",
            ondelete="CASCADE",
            onupdate="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["specialty_id"],
            ["specialties.id"],
            name="fk_doctor_specialties_specialty_id_specialties",
            ondelete="CASCADE",
            onupdate="CASCADE",
        ),
        sa.PrimaryKeyConstraint("doctor_id", "specialty_id", name="pk_doctor_specialties"),
    )

    # Facility and scheduling
    op.create_table(
        "rooms",
        _id(),
        sa.Column("room_number", sa.String(length=20), nullable=False),
        sa.Column("floor", sa.String(length=20), nullable=True),
        sa.Column("notes", sa.String(length=255), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_rooms"),
        sa.UniqueConstraint("room_number", name="uq_rooms_room_number"),
    )
    op.create_table(
        "appointments",
        _id(),
        sa.Column("patient_id", sa.Integer(), nullable=False),
        sa.Column("doctor_id", sa.Integer(), nullable=False),
        sa.Column("room_id", sa.Integer(), nullable=True),
        sa.Column("scheduled_start", sa.DateTime(), nullable=False),
        sa.Column("scheduled_end", sa.DateTime(), nullable=False),
        sa.Column("status", sa.String(length=20), server_default="Scheduled", nullable=True),
        sa.Column("reason", sa.String(length=255), nullable=True),
        _created("created_at"),
        sa.CheckConstraint("scheduled_end > scheduled_start", name="appointments_schedule_check"),
        sa.CheckConstraint(
            "status IN ('Scheduled', 'CheckedIn', 'Completed', 'Cancelled', 'NoShow')",
            name="appointments_status_check",
        ),
        sa.ForeignKeyConstraint(
            ["patient_id"],
            ["patients.id"],
            name="fk_appointments_patient_id_patients",
            ondelete="CASCADE",
            onupdate="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["doctor_id"],
            ["doctors.id"],
            name="fk_appointments_doctor_id_doctors",
            ondelete="RESTRICT",
            onupdate="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["room_id"],
            ["rooms.id"],
            name="fk_appointments_room_id_rooms",
            ondelete="SET NULL",
            onupdate="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_appointments"),
    )
    op.create_index(
        "idx_appointments_doctor_start",
        "appointments",
        ["doctor_id", "scheduled_start"],
    )

    # Medical records and prescriptions
    op.create_table(
        "medical_records",
        _id(),
        sa.Column("patient_id", sa.Integer(), nullable=False),
        sa.Column("appointment_id", sa.Integer(), nullable=True),
        _created("record_date"),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("diagnosis", sa.String(length=255), nullable=True),
        sa.ForeignKeyConstraint(
            ["patient_id"],
            ["patients.id"],
            name="fk_medical_records_patient_id_patients",
            ondelete="CASCADE",
            onupdate="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["appointment_id"],
            ["appointments.id"],
            name="fk_medical_records_appointment_id_appointments",
            ondelete="SET NULL",
            onupdate="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_medical_records"),
    )
    op.create_table(
        "prescriptions",
        _id(),
        sa.Column("patient_id", sa.Integer(), nullable=False),
        sa.Column("doctor_id", sa.Integer(), nullable=False),
        sa.Column("appointment_id", sa.Integer(), nullable=True),
        _created("issued_at"),
        sa.Column("notes", sa.String(length=500), nullable=True),
        sa.ForeignKeyConstraint(
            ["patient_id"],
            ["patients.id"],
            name="fk_prescriptions_patient_id_patients",
            ondelete="CASCADE",
            onupdate="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["doctor_id"],
            ["doctors.id"],
            name="fk_prescriptions_doctor_id_doctors",
            ondelete="RESTRICT",
            onupdate="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["appointment_id"],
            ["appointments.id"],
            name="fk_prescriptions_appointment_id_appointments",
            ondelete="SET NULL",
            onupdate="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_prescriptions"),
    )
    op.create_table(
        "prescription_items",
        sa.Column("prescription_id", sa.Integer(), nullable=False),
        sa.Column("medication_id", sa.Integer(), nullable=False),
        sa.Column("dosage", sa.String(length=100), nullable=False),
        sa.Column("duration", sa.String(length=50), nullable=True),
        sa.Column("quantity", sa.Integer(), server_default=sa.text("1"), nullable=True),
        sa.ForeignKeyConstraint(
            ["prescription_id"],
            ["prescriptions.id"],
            name="fk_prescription_items_prescription_id_prescriptions",
            ondelete="CASCADE",
            onupdate="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["medication_id"],
            ["medications.id"],
            name="fk_prescription_items_medication_id_medications",
            ondelete="RESTRICT",
            onupdate="CASCADE",
        ),
        sa.PrimaryKeyConstraint(
            "prescription_id", "medication_id", name="pk_prescription_items"
        ),
    )

    # Billing and payments
    op.create_table(
        "billing",
        _id(),
        sa.Column("appointment_id", sa.Integer(), nullable=True),
        sa.Column("patient_id", sa.Integer(), nullable=False),
        _created("issued_at"),
        sa.Column(
            "total_amount",
            sa.Numeric(precision=10, scale=2),
            server_default=sa.text("0.00"),
            nullable=False,
        ),
        sa.Column(
            "paid_amount",
            sa.Numeric(precision=10, scale=2),
            server_default=sa.text("0.00"),
            nullable=False,
        ),
        sa.Column("status", sa.String(length=20), server_default="Unpaid", nullable=True),
        sa.CheckConstraint(
            "status IN ('Unpaid', 'PartiallyPaid', 'Paid', 'Cancelled')",
            name="billing_status_check",
        ),
        sa.ForeignKeyConstraint(
            ["appointment_id"],
            ["appointments.id"],
            name="fk_billing_appointment_id_appointments",
            ondelete="SET NULL",
            onupdate="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["patient_id"],
            ["patients.id"],
            name="fk_billing_patient_id_patients",
            ondelete="CASCADE",
            onupdate="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_billing"),
    )
    op.create_table(
        "payments",
        _id(),
        sa.Column("bill_id", sa.Integer(), nullable=False),
        _created("paid_at"),
        sa.Column("amount", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column("method", sa.String(length=20), server_default="Cash", nullable=True),
        sa.Column("transaction_reference", sa.String(length=150), nullable=True),
        sa.CheckConstraint(
            "method IN ('Cash', 'Card', 'MobileMoney', 'Insurance')",
            name="payments_method_check",
        ),
        sa.ForeignKeyConstraint(
            ["bill_id"],
            ["billing.id"],
            name="fk_payments_bill_id_billing",
            ondelete="CASCADE",
            onupdate="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_payments"),
    )


def downgrade() -> None:
    """Downgrade database schema."""
    op.drop_table("payments")
    op.drop_table("billing")
    op.drop_table("prescription_items")
    op.drop_table("prescriptions")
    op.drop_table("medical_records")
    op.drop_index("idx_appointments_doctor_start", table_name="appointments")
    op.drop_table("appointments")
    op.drop_table("rooms")
    op.drop_table("doctor_specialties")
    op.drop_table("patients")
    op.drop_table("doctors")
    op.drop_table("medications")
    op.drop_table("specialties")
