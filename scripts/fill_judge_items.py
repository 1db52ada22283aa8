#!/usr/bin/env python3
"""
Add missing per-judge checklist items to every seeded show.

Judges assigned through other tools do not trigger the checklist gap fill.
This script brings each seeded show's per-judge tasks in line with its
current judge roster. Existing items are never changed.

Usage:
    python scripts/fill_judge_items.py [--dry-run]

Options:
    --dry-run    Show what would be added without making changes
"""
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlmodel import Session, select

from showcompliance.checklist.seeding import plan_checklist_items, seed_checklist
from showcompliance.core.database import create_db_and_tables, engine
from showcompliance.models import Show


def main(dry_run: bool = False):
    """Fill per-judge gaps on every show that already has a checklist."""
    create_db_and_tables()

    with Session(engine) as session:
        shows = session.exec(select(Show).order_by(Show.start_date)).all()
        seeded = [show for show in shows if show.checklist_items]

        if not seeded:
            print("No seeded checklists found.")
            return

        print(f"Checking {len(seeded)} seeded checklist(s):\n")

        added_total = 0
        for show in seeded:
            planned = plan_checklist_items(show, show.judge_names(), show.checklist_items)
            if not planned:
                print(f"{show.name}: in sync")
                continue

            print(f"{show.name}: {len(planned)} item(s) missing")
            for item in planned:
                print(f"  + {item.title}")

            if dry_run:
                continue

            created = seed_checklist(session, show)
            added_total += len(created)

        if dry_run:
            print("\n--- DRY RUN: No changes made ---")
            return

        print(f"\nComplete: {added_total} item(s) added")


if __name__ == "__main__":
    dry_run = "--dry-run" in sys.argv
    main(dry_run=dry_run)
