"""
JSON-file persistence adapter.

Keeps every bug in a single document `{"bugs": {id: doc}}`. Useful for local
runs without a database. Writes are serialised within one process only; two
processes sharing the file can lose each other's updates.
"""

from __future__ import annotations

import json
import threading
import uuid
from datetime import datetime
from pathlib import Path
from typing import Mapping, Optional

from bugtracker.domain.bugs import DEFAULT_STATUS, BugReport, StoreFailure
from bugtracker.repositories.base import BugStore, next_timestamp


def _doc_to_report(doc: dict) -> BugReport:
    return BugReport(
        id=doc["id"],
        title=doc["title"],
        description=doc.get("description", ""),
        status=doc.get("status", DEFAULT_STATUS),
        created_at=datetime.fromisoformat(doc["created_at"]),
        updated_at=datetime.fromisoformat(doc["updated_at"]),
    )


def db_defaults(db: dict) -> dict:
    db.setdefault("bugs", {})
    return db


class JSONBugRepository(BugStore):
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def load(self) -> dict:
        try:
            if self.path.exists():
                with self.path.open("r", encoding="utf-8") as f:
                    db = json.load(f)
            else:
                return {"bugs": {}}
        except (OSError, ValueError) as exc:
            raise StoreFailure(f"Could not read {self.path}: {exc}") from exc
        if not isinstance(db, dict) or not isinstance(db.get("bugs", {}), dict):
            raise StoreFailure(f"Unexpected layout in {self.path}: expected {{\"bugs\": {{...}}}}")
        return db_defaults(db)

    def save(self, db: dict) -> None:
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(db, ensure_ascii=False, indent=2), encoding="utf-8")
            tmp.replace(self.path)
        except OSError as exc:
            raise StoreFailure(f"Could not write {self.path}: {exc}") from exc

    def insert(self, fields: Mapping[str, str]) -> BugReport:
        now = next_timestamp().isoformat()
        doc = {
            "id": uuid.uuid4().hex,
            "title": fields["title"],
            "description": fields.get("description") or "",
            "status": fields.get("status") or DEFAULT_STATUS,
            "created_at": now,
            "updated_at": now,
        }
        with self._lock:
            db = self.load()
            db["bugs"][doc["id"]] = doc
            self.save(db)
        return _doc_to_report(doc)

    def find_all(self) -> list[BugReport]:
        with self._lock:
            db = self.load()
        return [_doc_to_report(doc) for doc in db["bugs"].values()]

    def find_by_id_and_update(self, bug_id: str, patch: Mapping[str, str]) -> Optional[BugReport]:
        with self._lock:
            db = self.load()
            doc = db["bugs"].get(bug_id)
            if doc is None:
                return None
            doc.update(patch)
            previous = datetime.fromisoformat(doc["updated_at"])
            doc["updated_at"] = next_timestamp(previous).isoformat()
            self.save(db)
        return _doc_to_report(doc)

    def find_by_id_and_delete(self, bug_id: str) -> None:
        with self._lock:
            db = self.load()
            if db["bugs"].pop(bug_id, None) is not None:
                self.save(db)

    def ping(self) -> None:
        with self._lock:
            self.load()
