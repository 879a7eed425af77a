"""Audit row for one ingestion attempt of one provider. Append-only."""
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from dealfinder.db.base import Base


class FetchLog(Base):
    __tablename__ = "fetch_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    provider_id = Column(Integer, ForeignKey("providers.id"), nullable=True, index=True)  # null when unknown
    provider_name = Column(String(100), nullable=True)  # client name, kept when no provider row exists
    fetch_type = Column(String(30), nullable=False)  # SCHEDULED | MANUAL
    status = Column(String(20), nullable=False, index=True)  # SUCCESS | FAILED
    records_fetched = Column(Integer, nullable=False, default=0)
    error_message = Column(Text, nullable=True)
    started_at = Column(DateTime(timezone=True), nullable=False, index=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    duration_ms = Column(Integer, nullable=True)

    provider = relationship("Provider", lazy="joined")
