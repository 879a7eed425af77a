#!/usr/bin/env python3
"""
Empty the derived scoring tables (deal_scores, match_deal_summaries). Snapshots and fetch
logs are kept; the next scoring pass rebuilds everything.
Run with backend stopped: cd backend && python scripts/clear_scores.py
"""
import sys
from pathlib import Path

# backend/scripts/ -> backend/
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlalchemy import text

from dealfinder.db.session import engine
from dealfinder.db.tables import SCORING_TABLE_NAMES


def main():
    tables = ", ".join(SCORING_TABLE_NAMES)
    print(f"Connecting to DB and truncating {tables} ...")
    with engine.connect() as conn:
        conn.execute(text(f"TRUNCATE TABLE {tables} RESTART IDENTITY"))
        conn.commit()
    print("Done. Run scripts/run_fetch_and_score.py --score-only to rebuild.")


if __name__ == "__main__":
    main()
