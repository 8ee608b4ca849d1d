#!/usr/bin/env python3
"""
Verify the test database configuration.

Tests drop and recreate every clinic table, so they must never point at the
database configured in DATABASE_URL.
"""

import os
import sys


def main() -> int:
    """Check test database configuration."""
    from dotenv import load_dotenv

    load_dotenv()

    prod_db = os.getenv("DATABASE_URL")
    test_db = os.getenv("TEST_DATABASE_URL")

    print("=" * 70)
    print("Test Database Setup Verification")
    print("=" * 70)
    print(f"   Application DB: {prod_db or '(default sqlite:///./clinic.db)'}")
    print(f"   Test DB:        {test_db or '(temporary SQLite file per test)'}")
    print()

    if not test_db:
        print("✅ No TEST_DATABASE_URL set: tests use a throwaway SQLite file.")
        return 0

    if prod_db and test_db == prod_db:
        print("❌ CRITICAL: Test database is same as application database!")
        print("   Tests drop every clinic table. Point TEST_DATABASE_URL elsewhere.")
        return 1

    if "test" not in test_db.lower():
        print("⚠️  WARNING: Test database URL doesn't contain 'test'")
        print("   Consider using a database name like 'clinic_db_test'")
        print()

    print("✅ Test database configuration looks good! Run: pytest")
    return 0


if __name__ == "__main__":
    sys.exit(main())
