"""Attach workout plans without a client to the coach's only client.

    python -m halal_gains.maintenance.assign_plans
"""
import sys

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from halal_gains.maintenance.schema import get_engine
from halal_gains.models.profile import ClientProfile, CoachProfile
from halal_gains.models.workout_plan import WorkoutPlan


def assign_plans(db: Session) -> int:
    assigned = 0
    for coach in db.query(CoachProfile).order_by(CoachProfile.id).all():
        clients = db.query(ClientProfile).filter(ClientProfile.coach_id == coach.id).all()
        if len(clients) != 1:
            if clients:
                print(f"Skipping coach {coach.full_name}: {len(clients)} clients, assign manually.")
            continue
        client = clients[0]
        plans = (
            db.query(WorkoutPlan)
            .filter(WorkoutPlan.coach_id == coach.id, WorkoutPlan.client_id.is_(None))
            .all()
        )
        for plan in plans:
            try:
                plan.client_id = client.id
                db.commit()
            except SQLAlchemyError as exc:
                db.rollback()
                print(f"  ! could not update plan {plan.id}: {exc}")
                continue
            assigned += 1
            print(f"  plan '{plan.name}' -> {client.full_name}")
    return assigned


def main() -> int:
    try:
        with Session(get_engine()) as db:
            assigned = assign_plans(db)
    except SQLAlchemyError as exc:
        print(f"Error: {exc}")
        return 1
    print(f"Done. {assigned} plan(s) assigned.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
