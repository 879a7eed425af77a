"""
Current best-known deal quality per (match_id, provider_id, category). Upsert target:
each scoring pass overwrites the row for its key.
"""
from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from dealfinder.db.base import Base


class DealScore(Base):
    __tablename__ = "deal_scores"

    id = Column(Integer, primary_key=True, autoincrement=True)
    match_id = Column(Integer, nullable=False, index=True)
    provider_id = Column(Integer, ForeignKey("providers.id"), nullable=False)
    category = Column(String(50), nullable=False, default="GENERAL")

    deal_score = Column(Integer, nullable=False)  # 0–100, 50 = at market average
    current_price = Column(Numeric(10, 2), nullable=False)
    market_average = Column(Numeric(10, 2), nullable=False)
    savings_percentage = Column(Numeric(7, 2), nullable=False)  # negative when above average

    price_trend = Column(String(10), nullable=False)  # UP | DOWN | STABLE
    trend_percentage = Column(Numeric(9, 2), nullable=False)
    price_7d_low = Column(Numeric(10, 2), nullable=False)
    price_7d_high = Column(Numeric(10, 2), nullable=False)

    best_time_to_buy = Column(String(10), nullable=False)  # NOW | WAIT
    recommendation = Column(Text, nullable=False)
    booking_url = Column(Text, nullable=True)
    last_computed_at = Column(DateTime(timezone=True), nullable=False)

    provider = relationship("Provider", lazy="joined")

    __table_args__ = (
        UniqueConstraint("match_id", "provider_id", "category", name="uq_deal_scores_match_provider_category"),
    )
