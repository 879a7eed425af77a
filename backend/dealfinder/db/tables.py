"""
Single source of truth for database tables that exist after migrations (001).

Use these names when writing raw SQL. alembic/env.py asserts the models match.
"""
ALL_TABLE_NAMES = (
    "providers",
    "price_snapshots",
    "deal_scores",
    "match_deal_summaries",
    "fetch_logs",
)

# Derived tables rebuilt by a scoring pass; safe to TRUNCATE before a full rescore.
SCORING_TABLE_NAMES = (
    "deal_scores",
    "match_deal_summaries",
)
