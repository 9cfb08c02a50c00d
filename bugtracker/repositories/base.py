"""Record store contract the bug service depends on."""
from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Mapping, Optional

from bugtracker.domain.bugs import BugReport


class BugStore(ABC):
    """Persistent collection of bug documents keyed by a store-assigned id."""

    @abstractmethod
    def insert(self, fields: Mapping[str, str]) -> BugReport:
        """Persist a new bug, assigning its id and both timestamps."""

    @abstractmethod
    def find_all(self) -> list[BugReport]:
        """Return every live bug in the store's natural order."""

    @abstractmethod
    def find_by_id_and_update(self, bug_id: str, patch: Mapping[str, str]) -> Optional[BugReport]:
        """Merge patch into the bug and return it, or None if it does not exist."""

    @abstractmethod
    def find_by_id_and_delete(self, bug_id: str) -> None:
        """Remove the bug if present."""

    def ping(self) -> None:
        """Raise StoreFailure when the store cannot be reached."""
        self.find_all()


def next_timestamp(previous: datetime | None = None) -> datetime:
    """Current UTC time, nudged forward so it never repeats `previous`."""
    now = datetime.now(timezone.utc)
    if previous is not None and now <= previous:
        now = previous + timedelta(microseconds=1)
    return now
