"""Script to initialize the database."""

import asyncio
import sys

from clinic_records.config import settings
from clinic_records.core.logging import configure_logging
from clinic_records.database import AsyncSessionLocal, create_schema, engine
from clinic_records.seed import load_seed_data


async def init_db(seed: bool = False) -> None:
    """Initialize the database by creating all tables, optionally seeding them."""
    await create_schema(engine)
    print("✓ Database schema created!")

    if seed:
        async with AsyncSessionLocal() as session:
            counts = await load_seed_data(session)
        if counts:
            print(f"✓ Seed data loaded: {sum(counts.values())} rows")
        else:
            print("• Seed data already present, skipped")

    await engine.dispose()


if __name__ == "__main__":
    configure_logging()
    asyncio.run(init_db(seed="--seed" in sys.argv[1:] or settings.seed_on_init))
