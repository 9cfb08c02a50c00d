from __future__ import annotations

import json
import sys
import threading
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from bugtracker.domain.bugs import StoreFailure  # noqa: E402
from bugtracker.repositories.json_storage import JSONBugRepository  # noqa: E402


@pytest.fixture()
def repo(tmp_path):
    return JSONBugRepository(tmp_path / "bugs.json")


def test_missing_file_is_an_empty_store(repo):
    assert repo.find_all() == []
    repo.ping()


def test_insert_persists_document(repo):
    bug = repo.insert({"title": "Broken link", "description": "footer", "status": "open"})
    raw = json.loads(repo.path.read_text(encoding="utf-8"))
    assert raw["bugs"][bug.id]["title"] == "Broken link"
    assert JSONBugRepository(repo.path).find_all() == [bug]


def test_update_and_delete(repo):
    bug = repo.insert({"title": "t", "description": "A", "status": "open"})
    updated = repo.find_by_id_and_update(bug.id, {"status": "resolved"})
    assert updated.description == "A"
    assert updated.status == "resolved"
    assert updated.updated_at > bug.updated_at
    assert repo.find_by_id_and_update("nope", {"status": "resolved"}) is None

    repo.find_by_id_and_delete(bug.id)
    repo.find_by_id_and_delete(bug.id)
    assert repo.find_all() == []


def test_corrupt_file_raises_store_failure(repo):
    repo.path.write_text("{not json", encoding="utf-8")
    with pytest.raises(StoreFailure):
        repo.find_all()


def test_non_object_root_raises_store_failure(repo):
    repo.path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(StoreFailure):
        repo.find_all()
    repo.path.write_text('{"bugs": []}', encoding="utf-8")
    with pytest.raises(StoreFailure):
        repo.find_all()


def test_concurrent_inserts_are_not_lost(repo):
    errors = []

    def worker(n):
        try:
            repo.insert({"title": f"bug {n}", "description": "", "status": "open"})
        except Exception as exc:  # pragma: no cover
            errors.append(exc)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(40)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    titles = {b.title for b in repo.find_all()}
    assert titles == {f"bug {n}" for n in range(40)}
