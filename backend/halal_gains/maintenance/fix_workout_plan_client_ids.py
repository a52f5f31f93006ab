"""Rewrite workout plans that stored an account id in ``client_id``.

Older builds saved the client's user id instead of the client profile id.

    python -m halal_gains.maintenance.fix_workout_plan_client_ids
"""
import sys

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from halal_gains.maintenance.schema import get_engine
from halal_gains.models.profile import ClientProfile
from halal_gains.models.workout_plan import WorkoutPlan


def fix_client_ids(db: Session) -> tuple[int, list[int]]:
    """Return the number of plans fixed and the ids of plans left unresolved."""
    profile_ids = {pid for (pid,) in db.query(ClientProfile.id).all()}
    by_user = {uid: pid for uid, pid in db.query(ClientProfile.user_id, ClientProfile.id).all()}

    fixed = 0
    unresolved = []
    plans = db.query(WorkoutPlan).filter(WorkoutPlan.client_id.isnot(None)).all()
    for plan in plans:
        if plan.client_id in profile_ids:
            continue
        profile_id = by_user.get(plan.client_id)
        if profile_id is None:
            print(f"  ? plan {plan.id} '{plan.name}': no client profile for id {plan.client_id}")
            unresolved.append(plan.id)
            continue
        try:
            print(f"  plan {plan.id} '{plan.name}': {plan.client_id} -> {profile_id}")
            plan.client_id = profile_id
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            print(f"  ! could not update plan {plan.id}: {exc}")
            unresolved.append(plan.id)
            continue
        fixed += 1
    return fixed, unresolved


def main() -> int:
    try:
        with Session(get_engine()) as db:
            fixed, unresolved = fix_client_ids(db)
    except SQLAlchemyError as exc:
        print(f"Error: {exc}")
        return 1
    print(f"Done. {fixed} plan(s) fixed, {len(unresolved)} unresolved.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
