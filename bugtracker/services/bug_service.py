"""Bug report use cases (create, list, update, delete)."""

from __future__ import annotations

import logging
from typing import Any, Optional

from bugtracker.domain.bugs import BugReport, clean_create_payload, clean_update_patch
from bugtracker.repositories.base import BugStore

logger = logging.getLogger(__name__)


class BugService:
    """Stateless request handler; every call round-trips to the store."""

    def __init__(self, store: BugStore) -> None:
        self.store = store

    def create(self, payload: Any) -> BugReport:
        fields = clean_create_payload(payload)
        bug = self.store.insert(fields)
        logger.info("bug %s created", bug.id)
        return bug

    def list(self) -> list[BugReport]:
        return self.store.find_all()

    def update(self, bug_id: str, payload: Any) -> Optional[BugReport]:
        """Merge payload into the bug; None when no live bug has this id."""
        patch = clean_update_patch(payload)
        bug = self.store.find_by_id_and_update(bug_id, patch)
        if bug is None:
            logger.info("update skipped, bug %s not found", bug_id)
        return bug

    def delete(self, bug_id: str) -> None:
        self.store.find_by_id_and_delete(bug_id)

    def ping(self) -> None:
        self.store.ping()
