"""Prepare the database before the API starts.

A fresh database (no ``users`` table) gets every table from the models and is
stamped at the Alembic head; an existing one is upgraded. Pass ``--seed`` to
load the demo coach and client afterwards. Then serve with::

    uvicorn --factory halal_gains.main:create_app
"""

import subprocess
import sys

from sqlalchemy import inspect

from halal_gains.core.config import get_settings
from halal_gains.db.base import Base
from halal_gains.db.seed import seed_demo_data
from halal_gains.db.session import create_db_engine, create_session_factory
import halal_gains.models  # noqa: F401


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    engine = create_db_engine(get_settings().database_url)

    if "users" not in inspect(engine).get_table_names():
        print("Empty database: creating tables from the models...")
        Base.metadata.create_all(bind=engine)
        subprocess.check_call([sys.executable, "-m", "alembic", "stamp", "head"])
        print("Tables created and stamped at head.")
    else:
        print("Upgrading existing database...")
        subprocess.check_call([sys.executable, "-m", "alembic", "upgrade", "head"])
        print("Migrations complete.")

    if "--seed" in argv:
        with create_session_factory(engine)() as session:
            seed_demo_data(session)
        print("Demo data loaded.")


if __name__ == "__main__":
    main()
