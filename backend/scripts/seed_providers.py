#!/usr/bin/env python3
"""
Insert or refresh the marketplace reference rows (Ticketmaster, SeatGeek, StubHub, Viagogo).
Idempotent; run after migrations: cd backend && python scripts/seed_providers.py
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from dealfinder.db.session import SessionLocal
from dealfinder.services.provider_service import list_active_providers, seed_providers


def main():
    db = SessionLocal()
    try:
        count = seed_providers(db)
        active = ", ".join(p.name for p in list_active_providers(db))
        print(f"Seeded {count} providers. Active: {active}")
    finally:
        db.close()


if __name__ == "__main__":
    main()
