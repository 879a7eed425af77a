from dealfinder.db.base import Base
from dealfinder.db.tables import ALL_TABLE_NAMES, SCORING_TABLE_NAMES
from dealfinder.db.upsert import upsert

__all__ = ["Base", "ALL_TABLE_NAMES", "SCORING_TABLE_NAMES", "upsert"]
