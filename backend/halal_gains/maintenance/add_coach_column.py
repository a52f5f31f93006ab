"""Add ``client_profiles.coach_id`` and give unassigned clients a coach.

    python -m halal_gains.maintenance.add_coach_column
"""
import sys

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from halal_gains.maintenance.schema import apply_or_print, get_engine, has_column
from halal_gains.models.profile import ClientProfile, CoachProfile

COLUMN_DEFINITION = "coach_id INTEGER REFERENCES coach_profiles(id) ON DELETE SET NULL"
ADD_COLUMN = f"ALTER TABLE client_profiles ADD COLUMN {COLUMN_DEFINITION}"
# Safe to paste even if the column appeared since the check
MANUAL_ADD_COLUMN = f"ALTER TABLE client_profiles ADD COLUMN IF NOT EXISTS {COLUMN_DEFINITION}"
ADD_INDEX = "CREATE INDEX IF NOT EXISTS ix_client_profiles_coach_id ON client_profiles (coach_id)"


def ensure_coach_column(engine: Engine) -> bool:
    statements = [ADD_INDEX]
    if has_column(engine, "client_profiles", "coach_id"):
        print("Column client_profiles.coach_id already exists.")
    else:
        print("Adding client_profiles.coach_id...")
        statements.insert(0, ADD_COLUMN)
    return apply_or_print(engine, statements, manual=[MANUAL_ADD_COLUMN, ADD_INDEX])


def assign_default_coach(db: Session) -> int:
    """Point every client without a coach at the first coach. Returns the count."""
    coach = db.query(CoachProfile).order_by(CoachProfile.id).first()
    if coach is None:
        print("No coaches found; nothing to assign.")
        return 0

    assigned = 0
    clients = db.query(ClientProfile).filter(ClientProfile.coach_id.is_(None)).all()
    for client in clients:
        try:
            client.coach_id = coach.id
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            print(f"  ! could not assign client {client.id}: {exc}")
            continue
        assigned += 1
        print(f"  assigned client {client.id} ({client.full_name}) to coach {coach.full_name}")
    return assigned


def main() -> int:
    engine = get_engine()
    if not ensure_coach_column(engine):
        return 1
    with Session(engine) as db:
        assigned = assign_default_coach(db)
    print(f"Done. {assigned} client(s) assigned.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
