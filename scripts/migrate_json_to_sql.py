"""One-off migration script: JSON store file -> SQL database (DATABASE_URL)."""
from __future__ import annotations

import argparse
from pathlib import Path
import sys
from datetime import datetime

# Make the bugtracker package importable when run from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from bugtracker.core.config import get_settings  # noqa: E402
from bugtracker.db import build_sessionmaker, get_engine, session_scope  # noqa: E402
from bugtracker.db.create_tables import create_all  # noqa: E402
from bugtracker.db.models import Bug  # noqa: E402
from bugtracker.domain.bugs import DEFAULT_STATUS, is_valid_status  # noqa: E402
from bugtracker.repositories.json_storage import JSONBugRepository  # noqa: E402


def migrate(json_path: Path) -> int:
    if not json_path.exists():
        raise SystemExit(f"File not found: {json_path}")
    db = JSONBugRepository(json_path).load()
    engine = get_engine()
    create_all(engine)
    count = 0
    with session_scope(build_sessionmaker(engine)) as session:
        for bug_id, doc in db["bugs"].items():
            status = doc.get("status")
            entity = Bug(
                id=bug_id,
                title=doc.get("title") or "",
                description=doc.get("description") or "",
                status=status if is_valid_status(status) else DEFAULT_STATUS,
                created_at=datetime.fromisoformat(doc["created_at"]),
                updated_at=datetime.fromisoformat(doc["updated_at"]),
            )
            # merge keeps the migration re-runnable
            session.merge(entity)
            count += 1
        session.commit()
    return count


if __name__ == "__main__":
    ap = argparse.ArgumentParser(description="Copy bugs from the JSON store into the SQL database")
    ap.add_argument("--json", default=get_settings().json_store_path, help="JSON store file")
    args = ap.parse_args()
    total = migrate(Path(args.json))
    print(f"{total} bug(s) migrated to {get_settings().database_url}.")
