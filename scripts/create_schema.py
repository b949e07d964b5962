from __future__ import annotations

import argparse

from sqlalchemy import text

from infrastructure.database import build_engine
from infrastructure.persistence.tables import Base
from infrastructure.settings import get_settings


def main() -> None:
    parser = argparse.ArgumentParser(description="Create the judging dashboard tables in PostgreSQL.")
    parser.add_argument("--db-url", default=None, help="PostgreSQL URL (defaults to DATABASE_URL)")
    args = parser.parse_args()

    engine = build_engine(args.db_url or get_settings().database_url)
    with engine.begin() as conn:
        # gen_random_uuid() is built in from Postgres 13, pgcrypto before that
        conn.execute(text("CREATE EXTENSION IF NOT EXISTS pgcrypto"))
        Base.metadata.create_all(conn)

    print("Tables: " + ", ".join(sorted(Base.metadata.tables)))


if __name__ == "__main__":
    main()
