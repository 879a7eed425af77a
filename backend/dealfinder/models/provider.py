"""Ticket marketplaces. Read-mostly reference data; the pipeline only reads it."""
from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Integer, Numeric, String
from sqlalchemy.sql import func

from dealfinder.db.base import Base


class Provider(Base):
    __tablename__ = "providers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False, unique=True, index=True)  # must match client provider_name
    display_name = Column(String(150), nullable=False)
    website_url = Column(String(500), nullable=False)
    fee_percentage = Column(Numeric(5, 2), nullable=False, default=0)
    trust_score = Column(Integer, nullable=False, default=50)
    has_buyer_protection = Column(Boolean, nullable=False, default=False)
    api_type = Column(String(30), nullable=False, default="SIMULATED")  # REAL_API | SIMULATED
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    priority = Column(Integer, nullable=False, default=100)  # display order and tie-break
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint("fee_percentage >= 0", name="ck_providers_fee_non_negative"),
    )
