"""
Snapshot ingestion: pull raw observations from every provider client, normalize fees,
append price snapshots and write one fetch log row per provider per pass.
"""
from dealfinder.services.ingestion.fetch import (
    build_snapshots,
    compute_fee,
    fetch_all_prices,
    fetch_from_provider,
)

__all__ = ["build_snapshots", "compute_fee", "fetch_all_prices", "fetch_from_provider"]
