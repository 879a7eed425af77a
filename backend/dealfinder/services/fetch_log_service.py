"""Fetch audit trail reads."""
from sqlalchemy.orm import Session

from dealfinder.core.constants import DEFAULT_FETCH_LOG_LIMIT, FETCH_STATUSES, MAX_LIST_LIMIT
from dealfinder.core.errors import InvalidInputError, require_positive
from dealfinder.models.fetch_log import FetchLog
from dealfinder.schemas import FetchLogOut


def list_fetch_logs(db: Session, status: str | None = None, limit: int = DEFAULT_FETCH_LOG_LIMIT) -> list[FetchLogOut]:
    """Newest first, optionally filtered by status (SUCCESS | FAILED)."""
    require_positive("limit", limit, MAX_LIST_LIMIT)
    q = db.query(FetchLog)
    if status is not None:
        status = status.upper()
        if status not in FETCH_STATUSES:
            raise InvalidInputError(f"status must be one of {', '.join(FETCH_STATUSES)}, got {status}")
        q = q.filter(FetchLog.status == status)
    rows = q.order_by(FetchLog.started_at.desc(), FetchLog.id.desc()).limit(limit).all()
    return [FetchLogOut.model_validate(r) for r in rows]
