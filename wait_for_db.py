"""Poll Postgres until it accepts connections (no-op for SQLite)."""
import os
import time
from urllib.parse import urlparse

import psycopg2


def connect_kwargs(database_url: str) -> dict:
    # psycopg2 only understands the bare postgresql:// scheme
    _, _, rest = database_url.partition("://")
    p = urlparse("postgresql://" + rest)
    return {
        "host": p.hostname or "db",
        "port": p.port or 5432,
        "user": p.username or "wayfarer",
        "password": p.password or "wayfarer",
        "dbname": p.path.lstrip("/") or "wayfarer",
    }


def wait(database_url: str, timeout_s: int = 60) -> None:
    if database_url.startswith("sqlite"):
        print("[wait_for_db] sqlite url, skipping")
        return
    kwargs = connect_kwargs(database_url)
    deadline = time.monotonic() + timeout_s
    print(f"[wait_for_db] {kwargs['host']}:{kwargs['port']}/{kwargs['dbname']} (timeout {timeout_s}s)")
    while True:
        try:
            psycopg2.connect(**kwargs).close()
        except psycopg2.OperationalError as e:
            if time.monotonic() > deadline:
                print(f"[wait_for_db] gave up: {e}")
                raise
            time.sleep(1)
        else:
            print("[wait_for_db] database is up")
            return


if __name__ == "__main__":
    url = os.getenv("DATABASE_URL")
    if not url:
        raise SystemExit("DATABASE_URL is not set")
    wait(url, int(os.getenv("DB_WAIT_TIMEOUT", "60")))
