"""
Keyed upsert (INSERT ... ON CONFLICT DO UPDATE) for the active dialect.

PostgreSQL in production, SQLite in tests; both expose the same on_conflict_do_update API.
"""
from typing import Any

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


def upsert(db: Session, model: Any, values: dict[str, Any], key_columns: list[str]) -> None:
    """Insert one row or overwrite every non-key column of the row with the same natural key."""
    dialect = db.get_bind().dialect.name
    insert = _INSERTS.get(dialect)
    if insert is None:
        raise NotImplementedError(f"Keyed upsert not supported for dialect {dialect}")
    stmt = insert(model).values(**values)
    stmt = stmt.on_conflict_do_update(
        index_elements=key_columns,
        set_={k: stmt.excluded[k] for k in values if k not in key_columns},
    )
    db.execute(stmt)
