from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from sqlalchemy.orm import sessionmaker

from domain.exceptions import CsvParseError, PersistenceFailure
from domain.services.import_service import ImportService
from infrastructure.adapters.repository.postgres_repository import PostgresRepository
from infrastructure.database import build_engine
from infrastructure.settings import get_settings


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Import a DevPost projects CSV export using direct database credentials."
    )
    parser.add_argument("csv_file", help="Path to the DevPost export (.csv)")
    parser.add_argument("--db-url", default=None, help="PostgreSQL URL (defaults to DATABASE_URL)")
    parser.add_argument("--batch-size", type=int, default=1000, help="Rows per upsert statement")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    path = Path(args.csv_file)
    if not path.exists():
        raise SystemExit(f"File not found: {path}")

    engine = build_engine(args.db_url or get_settings().database_url)
    session = sessionmaker(autoflush=False, bind=engine)()

    try:
        service = ImportService(PostgresRepository(session, batch_size=args.batch_size))
        summary = service.import_csv(path.read_bytes())
    except CsvParseError as e:
        print(json.dumps({"error": str(e), "details": e.diagnostics}), file=sys.stderr)
        return 1
    except PersistenceFailure as e:
        print(json.dumps({"error": str(e), "details": {"phase": e.phase, "message": e.details}}), file=sys.stderr)
        return 1
    finally:
        session.close()

    print(json.dumps(summary.to_dict()))
    return 0


if __name__ == "__main__":
    sys.exit(main())
