"""
One provider's quoted price for a match at a point in time. Append-only: rows are never
updated, only superseded by newer snapshots for the same (match_id, provider_id).
"""
from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from dealfinder.db.base import Base


class PriceSnapshot(Base):
    __tablename__ = "price_snapshots"

    id = Column(Integer, primary_key=True, autoincrement=True)
    match_id = Column(Integer, nullable=False, index=True)
    provider_id = Column(Integer, ForeignKey("providers.id"), nullable=False, index=True)
    category = Column(String(50), nullable=False, default="GENERAL")
    base_price = Column(Numeric(10, 2), nullable=False)
    fee_amount = Column(Numeric(10, 2), nullable=False, default=0)
    total_price = Column(Numeric(10, 2), nullable=False)  # base_price + fee_amount
    currency = Column(String(3), nullable=False, default="USD")
    availability_status = Column(String(30), nullable=False, default="AVAILABLE")
    booking_url = Column(Text, nullable=True)
    source_type = Column(String(20), nullable=False)  # REAL_API | SIMULATED
    fetched_at = Column(DateTime(timezone=True), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    provider = relationship("Provider", lazy="joined")

    __table_args__ = (
        CheckConstraint("base_price >= 0", name="ck_price_snapshots_base_non_negative"),
        CheckConstraint("total_price >= base_price", name="ck_price_snapshots_total_ge_base"),
        Index("ix_price_snapshots_match_provider", "match_id", "provider_id"),
    )
