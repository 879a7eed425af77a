"""Per-match rollup of all providers' deal scores. Derived only; never hand-edited."""
from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import relationship

from dealfinder.db.base import Base


class MatchDealSummary(Base):
    __tablename__ = "match_deal_summaries"

    id = Column(Integer, primary_key=True, autoincrement=True)
    match_id = Column(Integer, nullable=False, index=True)
    category = Column(String(50), nullable=False, default="GENERAL")

    lowest_price = Column(Numeric(10, 2), nullable=False)
    highest_price = Column(Numeric(10, 2), nullable=False)
    average_price = Column(Numeric(10, 2), nullable=False)

    best_provider_id = Column(Integer, ForeignKey("providers.id"), nullable=False)
    best_deal_score = Column(Integer, nullable=False)
    num_providers = Column(Integer, nullable=False)
    overall_trend = Column(String(10), nullable=False)
    best_time_to_buy = Column(String(10), nullable=False)
    last_computed_at = Column(DateTime(timezone=True), nullable=False)

    best_provider = relationship("Provider", lazy="joined")

    __table_args__ = (
        UniqueConstraint("match_id", "category", name="uq_match_deal_summaries_match_category"),
    )
