"""Provider reference data: idempotent seed and read helpers."""
import logging

from sqlalchemy.orm import Session

from dealfinder.core.errors import NotFoundError
from dealfinder.data.providers import PROVIDERS
from dealfinder.db.upsert import upsert
from dealfinder.models.provider import Provider

logger = logging.getLogger(__name__)


def seed_providers(db: Session, providers: list[dict] | None = None) -> int:
    """Upsert the seed marketplaces keyed by name. Returns rows written."""
    rows = providers if providers is not None else PROVIDERS
    for row in rows:
        upsert(db, Provider, dict(row), ["name"])
    db.commit()
    logger.info("Seeded %s providers", len(rows))
    return len(rows)


def list_active_providers(db: Session) -> list[Provider]:
    return (
        db.query(Provider)
        .filter(Provider.is_active.is_(True))
        .order_by(Provider.priority.asc(), Provider.id.asc())
        .all()
    )


def get_provider_by_id(db: Session, provider_id: int) -> Provider:
    row = db.get(Provider, provider_id)
    if row is None:
        raise NotFoundError(f"Provider not found with ID: {provider_id}")
    return row


def get_provider_by_name(db: Session, name: str) -> Provider | None:
    return db.query(Provider).filter(Provider.name == name).first()
