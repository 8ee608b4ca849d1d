"""Report bills whose stored status disagrees with their amounts."""

import asyncio
import sys

from clinic_records.core.logging import configure_logging
from clinic_records.database import AsyncSessionLocal, engine
from clinic_records.services.billing_service import BillingService


async def check_billing() -> int:
    """Print drifting bills; exit code 1 when any are found."""
    try:
        async with AsyncSessionLocal() as session:
            drift = await BillingService(session).find_status_drift()
    finally:
        await engine.dispose()

    if not drift:
        print("✓ Every bill status matches its amounts")
        return 0

    print(f"⚠️  {len(drift)} bill(s) out of sync:")
    for bill in drift:
        stored = bill.stored_status.value if bill.stored_status else "NULL"
        print(
            f"   bill {bill.bill_id}: total={bill.total_amount} paid={bill.paid_amount} "
            f"stored={stored} expected={bill.derived_status.value}"
        )
    return 1


if __name__ == "__main__":
    configure_logging()
    sys.exit(asyncio.run(check_billing()))
