#!/usr/bin/env python3
"""Container entrypoint for the travel API.

Blocks until the database answers, brings the schema to the latest alembic
revision, makes sure the seed admin exists and finally hands the process
over to uvicorn.
"""
import os
import sys

from alembic import command
from alembic.config import Config
from sqlalchemy.orm import sessionmaker

from app.core.config import settings
from app.db.session import make_engine
from app.seed import run as run_seed
from wait_for_db import wait

HERE = os.path.dirname(os.path.abspath(__file__))


def migrate(database_url: str) -> None:
    cfg = Config(os.path.join(HERE, "alembic.ini"))
    cfg.set_main_option("sqlalchemy.url", database_url)
    command.upgrade(cfg, "head")


def seed(database_url: str) -> None:
    # engine built after the migration ran
    engine = make_engine(database_url)
    db = sessionmaker(autoflush=False, bind=engine)()
    try:
        run_seed(db)
    finally:
        db.close()
        engine.dispose()


def serve(port: int) -> None:
    os.execv(
        sys.executable,
        [sys.executable, "-m", "uvicorn", "app.main:app", "--host", "0.0.0.0", "--port", str(port)],
    )


if __name__ == "__main__":
    wait(settings.DATABASE_URL, int(os.getenv("DB_WAIT_TIMEOUT", "60")))
    migrate(settings.DATABASE_URL)
    seed(settings.DATABASE_URL)
    serve(settings.PORT)
