"""Helpers shared by the one-off maintenance scripts."""
from collections.abc import Sequence

from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from halal_gains.core.config import get_settings
from halal_gains.db.session import create_db_engine
import halal_gains.models  # noqa: F401


def get_engine() -> Engine:
    return create_db_engine(get_settings().database_url)


def has_column(engine: Engine, table: str, column: str) -> bool:
    inspector = inspect(engine)
    if table not in inspector.get_table_names():
        return False
    return column in [c["name"] for c in inspector.get_columns(table)]


def apply_or_print(
    engine: Engine, statements: Sequence[str], manual: Sequence[str] | None = None
) -> bool:
    """Run the DDL in one transaction, or print it for manual execution.

    ``manual`` replaces the printed statements when the hand-run form differs
    (for example PostgreSQL-only ``IF NOT EXISTS`` guards). Returns True when the
    statements were applied.
    """
    try:
        with engine.begin() as conn:
            for statement in statements:
                conn.execute(text(statement))
    except SQLAlchemyError as exc:
        print(f"Could not apply schema change automatically: {exc}")
        print("Run the following SQL manually:")
        print()
        for statement in manual or statements:
            print(f"    {statement};")
        print()
        return False
    return True
