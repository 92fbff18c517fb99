#!/usr/bin/env python3
"""
Load companies and jobs from a JSON file into the database.

Usage:
    python scripts/seed_db.py --input data/seed.json --db data/jobboard.db

The input file looks like:
    {"companies": [{"handle": ..., "name": ..., ...}],
     "jobs": [{"title": ..., "salary": ..., "equity": ..., "company_handle": ...}]}
"""

import argparse
import json
from decimal import Decimal
from pathlib import Path
import sys

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from jobboard.database import Company, Job, init_database, get_session
from jobboard.schema import validate_job


def seed(input_path: Path, db_path: Path, dry_run: bool = False) -> bool:
    """
    Seed the database from input_path.

    Everything is written in one transaction: if any row is rejected
    the database is left as it was.

    Args:
        input_path: Path to JSON seed file
        db_path: Path to SQLite database file
        dry_run: If True, don't write to database
    """
    print(f"Loading seed data from {input_path}...")
    with open(input_path) as f:
        data = json.load(f, parse_float=Decimal)

    companies = data.get("companies", [])
    jobs = data.get("jobs", [])
    print(f"Found {len(companies)} companies and {len(jobs)} jobs")

    if dry_run:
        print("\n[DRY RUN] Would seed the following jobs:")
        for i, job in enumerate(jobs[:5], 1):
            print(f"  {i}. {job.get('company_handle')}: {job.get('title')}")
        if len(jobs) > 5:
            print(f"  ... and {len(jobs) - 5} more")
        return True

    print(f"\nInitializing database at {db_path}...")
    init_database(db_path)
    session = get_session(db_path)

    try:
        added_companies = 0
        for company in companies:
            if session.get(Company, company["handle"]) is not None:
                print(f"⚠️  Company {company['handle']} already exists, skipping")
                continue
            session.add(Company(**company))
            added_companies += 1
        # Companies must exist before jobs that reference them are inserted
        session.flush()

        created = 0
        skipped = 0
        for job in jobs:
            errors = validate_job(job)
            if errors:
                print(f"⚠️  Skipping {job.get('title')!r}: {'; '.join(errors)}")
                skipped += 1
                continue
            existing = session.query(Job).filter_by(
                title=job["title"], company_handle=job["company_handle"]
            ).first()
            if existing:
                print(f"⚠️  Job {job['title']!r} at {job['company_handle']} already exists, skipping")
                skipped += 1
                continue
            session.add(Job(
                title=job["title"],
                salary=job.get("salary"),
                equity=job.get("equity"),
                company_handle=job["company_handle"],
            ))
            created += 1

        session.commit()

        print(f"\n✅ Seeding complete!")
        print(f"   Companies: {added_companies}")
        print(f"   Jobs:      {created}")
        print(f"   Skipped:   {skipped}")
    except Exception as e:
        session.rollback()
        print(f"❌ Seeding failed: {e}")
        return False
    finally:
        session.close()

    return True


def main():
    parser = argparse.ArgumentParser(description="Seed companies and jobs into the database")
    parser.add_argument("--input", type=Path, required=True,
                       help="Path to JSON seed file")
    parser.add_argument("--db", type=Path, default=Path("data/jobboard.db"),
                       help="Path to SQLite database file")
    parser.add_argument("--dry-run", action="store_true",
                       help="Show what would be seeded without writing")

    args = parser.parse_args()

    if not args.input.exists():
        print(f"❌ Seed file not found: {args.input}")
        sys.exit(1)

    if not seed(args.input, args.db, dry_run=args.dry_run):
        sys.exit(1)


if __name__ == "__main__":
    main()
