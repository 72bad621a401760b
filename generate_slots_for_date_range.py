#!/usr/bin/env python3
"""
Regenerate slots for every active shift over a date range.
Existing slots of each shift inside the range are replaced.

Usage:
    python generate_slots_for_date_range.py <start_date> <end_date>

Example:
    python generate_slots_for_date_range.py 2026-01-01 2026-12-31
"""

import sys
from datetime import date
from pathlib import Path

from dotenv import load_dotenv

# Add the apps/api directory to the path so we can import from bookati
api_dir = Path(__file__).parent / "apps" / "api"
sys.path.insert(0, str(api_dir))

load_dotenv(api_dir / ".env")

from bookati.core.database import SessionLocal
from bookati.repositories.slot_repository import SqlAlchemySlotRepository
from bookati.services.slot_generator import SlotGenerator


def generate_slots_for_date_range(start_date: date, end_date: date) -> bool:
    """Run the bulk regeneration and print a per-shift report."""
    print("=" * 60)
    print("  GENERATE SLOTS FOR DATE RANGE")
    print("=" * 60)
    print(f"Start Date: {start_date}")
    print(f"End Date:   {end_date}\n")

    db = SessionLocal()
    try:
        generator = SlotGenerator(SqlAlchemySlotRepository(db))
        result = generator.generate_for_active_shifts(start_date, end_date)

        if not result.outcomes:
            print("No active shifts found.")
            return True

        for outcome in result.outcomes:
            if outcome.error:
                print(f"  ✗ {outcome.shift_id}: {outcome.error}")
            else:
                print(f"  ✓ {outcome.shift_id}: {outcome.slots_generated} slots")

        print("\n" + "=" * 60)
        print(f"✅ Generated {result.total_slots} slots for {len(result.outcomes)} shifts")
        if result.failed:
            print(f"❌ {len(result.failed)} shifts failed")
        print("=" * 60)

        return not result.failed
    finally:
        db.close()


if __name__ == "__main__":
    if len(sys.argv) != 3:
        print("Usage: python generate_slots_for_date_range.py <start_date> <end_date>")
        print("Example: python generate_slots_for_date_range.py 2026-01-01 2026-12-31")
        sys.exit(1)

    try:
        start = date.fromisoformat(sys.argv[1])
        end = date.fromisoformat(sys.argv[2])
    except ValueError:
        print("❌ Invalid date format. Use YYYY-MM-DD.")
        sys.exit(1)

    if start > end:
        print("❌ Start date must be on or before end date.")
        sys.exit(1)

    success = generate_slots_for_date_range(start, end)
    sys.exit(0 if success else 1)
