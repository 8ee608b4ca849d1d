"""Script to load the example rows into an existing schema."""

import asyncio
import sys

from clinic_records.core.exceptions import AppException
from clinic_records.core.logging import configure_logging
from clinic_records.database import AsyncSessionLocal, engine
from clinic_records.seed import load_seed_data


async def seed() -> int:
    """Load seed data, returning a process exit code."""
    try:
        async with AsyncSessionLocal() as session:
            counts = await load_seed_data(session)
    except AppException as e:
        print(f"✗ Seeding failed: {e.message}", file=sys.stderr)
        return 1
    finally:
        await engine.dispose()

    if not counts:
        print("• Seed data already present, nothing to do")
        return 0

    print("✓ Seed data loaded:")
    for table, count in counts.items():
        print(f"   {table:<20} {count}")
    return 0


if __name__ == "__main__":
    configure_logging()
    sys.exit(asyncio.run(seed()))
