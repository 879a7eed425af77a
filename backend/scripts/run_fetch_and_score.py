#!/usr/bin/env python3
"""
One manual fetch pass across every registered provider, then a full scoring pass.
Run: cd backend && python scripts/run_fetch_and_score.py [--score-only]
"""
import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from dealfinder.db.session import SessionLocal
from dealfinder.services.ingestion import fetch_all_prices
from dealfinder.services.scoring import compute_all_scores


def main():
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--score-only", action="store_true", help="skip fetching; rescore stored snapshots")
    args = parser.parse_args()

    if not args.score_only:
        print("Fetching prices from all providers...")
        total = fetch_all_prices(SessionLocal)
        print(f"Saved {total} price snapshots.")
    print("Computing deal scores...")
    result = compute_all_scores(SessionLocal)
    print(f"Done. matches={result['matches']}, scored={result['scored']}, failed={result['failed']}")


if __name__ == "__main__":
    main()
