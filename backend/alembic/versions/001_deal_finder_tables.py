"""Deal finder tables: providers, price snapshots, deal scores, match summaries, fetch logs.

price_snapshots is append-only history; deal_scores and match_deal_summaries are
upsert targets keyed by their unique constraints.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "providers",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("display_name", sa.String(150), nullable=False),
        sa.Column("website_url", sa.String(500), nullable=False),
        sa.Column("fee_percentage", sa.Numeric(5, 2), nullable=False, server_default="0"),
        sa.Column("trust_score", sa.Integer(), nullable=False, server_default="50"),
        sa.Column("has_buyer_protection", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("api_type", sa.String(30), nullable=False, server_default="SIMULATED"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("priority", sa.Integer(), nullable=False, server_default="100"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.CheckConstraint("fee_percentage >= 0", name="ck_providers_fee_non_negative"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_providers_name", "providers", ["name"], unique=True)
    op.create_index("ix_providers_is_active", "providers", ["is_active"], unique=False)

    op.create_table(
        "price_snapshots",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("match_id", sa.Integer(), nullable=False),
        sa.Column("provider_id", sa.Integer(), sa.ForeignKey("providers.id"), nullable=False),
        sa.Column("category", sa.String(50), nullable=False, server_default="GENERAL"),
        sa.Column("base_price", sa.Numeric(10, 2), nullable=False),
        sa.Column("fee_amount", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("total_price", sa.Numeric(10, 2), nullable=False),
        sa.Column("currency", sa.String(3), nullable=False, server_default="USD"),
        sa.Column("availability_status", sa.String(30), nullable=False, server_default="AVAILABLE"),
        sa.Column("booking_url", sa.Text(), nullable=True),
        sa.Column("source_type", sa.String(20), nullable=False),
        sa.Column("fetched_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint("base_price >= 0", name="ck_price_snapshots_base_non_negative"),
        sa.CheckConstraint("total_price >= base_price", name="ck_price_snapshots_total_ge_base"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_price_snapshots_match_id", "price_snapshots", ["match_id"], unique=False)
    op.create_index("ix_price_snapshots_provider_id", "price_snapshots", ["provider_id"], unique=False)
    op.create_index("ix_price_snapshots_fetched_at", "price_snapshots", ["fetched_at"], unique=False)
    op.create_index(
        "ix_price_snapshots_match_provider", "price_snapshots", ["match_id", "provider_id"], unique=False
    )

    op.create_table(
        "deal_scores",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("match_id", sa.Integer(), nullable=False),
        sa.Column("provider_id", sa.Integer(), sa.ForeignKey("providers.id"), nullable=False),
        sa.Column("category", sa.String(50), nullable=False, server_default="GENERAL"),
        sa.Column("deal_score", sa.Integer(), nullable=False),
        sa.Column("current_price", sa.Numeric(10, 2), nullable=False),
        sa.Column("market_average", sa.Numeric(10, 2), nullable=False),
        sa.Column("savings_percentage", sa.Numeric(7, 2), nullable=False),
        sa.Column("price_trend", sa.String(10), nullable=False),
        sa.Column("trend_percentage", sa.Numeric(9, 2), nullable=False),
        sa.Column("price_7d_low", sa.Numeric(10, 2), nullable=False),
        sa.Column("price_7d_high", sa.Numeric(10, 2), nullable=False),
        sa.Column("best_time_to_buy", sa.String(10), nullable=False),
        sa.Column("recommendation", sa.Text(), nullable=False),
        sa.Column("booking_url", sa.Text(), nullable=True),
        sa.Column("last_computed_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_deal_scores_match_id", "deal_scores", ["match_id"], unique=False)
    op.create_unique_constraint(
        "uq_deal_scores_match_provider_category",
        "deal_scores",
        ["match_id", "provider_id", "category"],
    )

    op.create_table(
        "match_deal_summaries",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("match_id", sa.Integer(), nullable=False),
        sa.Column("category", sa.String(50), nullable=False, server_default="GENERAL"),
        sa.Column("lowest_price", sa.Numeric(10, 2), nullable=False),
        sa.Column("highest_price", sa.Numeric(10, 2), nullable=False),
        sa.Column("average_price", sa.Numeric(10, 2), nullable=False),
        sa.Column("best_provider_id", sa.Integer(), sa.ForeignKey("providers.id"), nullable=False),
        sa.Column("best_deal_score", sa.Integer(), nullable=False),
        sa.Column("num_providers", sa.Integer(), nullable=False),
        sa.Column("overall_trend", sa.String(10), nullable=False),
        sa.Column("best_time_to_buy", sa.String(10), nullable=False),
        sa.Column("last_computed_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_match_deal_summaries_match_id", "match_deal_summaries", ["match_id"], unique=False)
    op.create_unique_constraint(
        "uq_match_deal_summaries_match_category",
        "match_deal_summaries",
        ["match_id", "category"],
    )

    op.create_table(
        "fetch_logs",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("provider_id", sa.Integer(), sa.ForeignKey("providers.id"), nullable=True),
        sa.Column("provider_name", sa.String(100), nullable=True),
        sa.Column("fetch_type", sa.String(30), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("records_fetched", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("error_message", sa.Text(), nullable=True),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("duration_ms", sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_fetch_logs_provider_id", "fetch_logs", ["provider_id"], unique=False)
    op.create_index("ix_fetch_logs_status", "fetch_logs", ["status"], unique=False)
    op.create_index("ix_fetch_logs_started_at", "fetch_logs", ["started_at"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_fetch_logs_started_at", table_name="fetch_logs")
    op.drop_index("ix_fetch_logs_status", table_name="fetch_logs")
    op.drop_index("ix_fetch_logs_provider_id", table_name="fetch_logs")
    op.drop_table("fetch_logs")
    op.drop_constraint("uq_match_deal_summaries_match_category", "match_deal_summaries", type_="unique")
    op.drop_index("ix_match_deal_summaries_match_id", table_name="match_deal_summaries")
    op.drop_table("match_deal_summaries")
    op.drop_constraint("uq_deal_scores_match_provider_category", "deal_scores", type_="unique")
    op.drop_index("ix_deal_scores_match_id", table_name="deal_scores")
    op.drop_table("deal_scores")
    op.drop_index("ix_price_snapshots_match_provider", table_name="price_snapshots")
    op.drop_index("ix_price_snapshots_fetched_at", table_name="price_snapshots")
    op.drop_index("ix_price_snapshots_provider_id", table_name="price_snapshots")
    op.drop_index("ix_price_snapshots_match_id", table_name="price_snapshots")
    op.drop_table("price_snapshots")
    op.drop_index("ix_providers_is_active", table_name="providers")
    op.drop_index("ix_providers_name", table_name="providers")
    op.drop_table("providers")
