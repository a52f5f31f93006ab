"""Give every coach a profile photo from the configured rotation.

    python -m halal_gains.maintenance.reseed_coach_photos
"""
import sys
from collections.abc import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from halal_gains.core.config import get_settings
from halal_gains.maintenance.schema import get_engine
from halal_gains.models.profile import CoachProfile


def reseed_photos(db: Session, photos: Sequence[str]) -> int:
    if not photos:
        print("No photo URLs configured.")
        return 0
    updated = 0
    for index, coach in enumerate(db.query(CoachProfile).order_by(CoachProfile.id).all()):
        photo = photos[index % len(photos)]
        try:
            coach.profile_photos = [photo]
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            print(f"  ! could not update coach {coach.id}: {exc}")
            continue
        updated += 1
        print(f"  {coach.full_name}: {photo}")
    return updated


def main() -> int:
    try:
        with Session(get_engine()) as db:
            updated = reseed_photos(db, get_settings().coach_photo_urls)
    except SQLAlchemyError as exc:
        print(f"Error: {exc}")
        return 1
    print(f"Done. {updated} coach(es) updated.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
