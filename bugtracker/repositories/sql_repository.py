"""Bug store backed by SQLAlchemy."""
from __future__ import annotations

import logging
import uuid
from typing import Mapping, Optional

from sqlalchemy import delete, select, text
from sqlalchemy.exc import SQLAlchemyError

from bugtracker.db.models import Bug
from bugtracker.db.session import SessionFactory, session_scope
from bugtracker.domain.bugs import DEFAULT_STATUS, BugReport, StoreFailure, as_utc
from bugtracker.repositories.base import BugStore, next_timestamp

logger = logging.getLogger(__name__)


def _entity_to_report(entity: Bug) -> BugReport:
    return BugReport(
        id=entity.id,
        title=entity.title,
        description=entity.description or "",
        status=entity.status,
        created_at=as_utc(entity.created_at),
        updated_at=as_utc(entity.updated_at),
    )


class SQLBugRepository(BugStore):
    """CRUD helpers wrapping one short-lived SQLAlchemy session per call."""

    def __init__(self, session_factory: SessionFactory) -> None:
        self._session_factory = session_factory

    def insert(self, fields: Mapping[str, str]) -> BugReport:
        now = next_timestamp()
        entity = Bug(
            id=uuid.uuid4().hex,
            title=fields["title"],
            description=fields.get("description") or "",
            status=fields.get("status") or DEFAULT_STATUS,
            created_at=now,
            updated_at=now,
        )
        try:
            with session_scope(self._session_factory) as session:
                session.add(entity)
                session.commit()
                session.refresh(entity)
                return _entity_to_report(entity)
        except SQLAlchemyError as exc:
            logger.error("insert failed: %s", exc)
            raise StoreFailure(f"Could not save bug: {exc}") from exc

    def find_all(self) -> list[BugReport]:
        try:
            with session_scope(self._session_factory) as session:
                stmt = select(Bug).order_by(Bug.created_at)
                return [_entity_to_report(entity) for entity in session.execute(stmt).scalars().all()]
        except SQLAlchemyError as exc:
            raise StoreFailure(f"Could not list bugs: {exc}") from exc

    def find_by_id_and_update(self, bug_id: str, patch: Mapping[str, str]) -> Optional[BugReport]:
        try:
            with session_scope(self._session_factory) as session:
                entity = session.get(Bug, bug_id)
                if not entity:
                    return None
                for field, value in patch.items():
                    setattr(entity, field, value)
                entity.updated_at = next_timestamp(as_utc(entity.updated_at))
                session.commit()
                session.refresh(entity)
                return _entity_to_report(entity)
        except SQLAlchemyError as exc:
            logger.error("update of %s failed: %s", bug_id, exc)
            raise StoreFailure(f"Could not update bug: {exc}") from exc

    def find_by_id_and_delete(self, bug_id: str) -> None:
        try:
            with session_scope(self._session_factory) as session:
                session.execute(delete(Bug).where(Bug.id == bug_id))
                session.commit()
        except SQLAlchemyError as exc:
            logger.error("delete of %s failed: %s", bug_id, exc)
            raise StoreFailure(f"Could not delete bug: {exc}") from exc

    def ping(self) -> None:
        try:
            with session_scope(self._session_factory) as session:
                session.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            raise StoreFailure(f"Database unreachable: {exc}") from exc
