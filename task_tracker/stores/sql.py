"""SQL task store backed by Flask-SQLAlchemy.

Must be used inside a Flask application context.
"""

import logging
from datetime import datetime
from typing import Any, NoReturn

from sqlalchemy import case, delete, select, update
from sqlalchemy.exc import SQLAlchemyError

from task_tracker.exceptions import StoreFailure
from task_tracker.extensions import db
from task_tracker.models import Task
from task_tracker.stores.base import TaskRecord, TaskStore


logger = logging.getLogger(__name__)

# Ids are stored as 64-bit signed integers
MAX_TASK_ID = 2**63 - 1


class SQLTaskStore(TaskStore):
    """Store that keeps tasks in the ``tasks`` table."""

    name = "sql"

    def insert(self, owner: str, title: str, description: str, now: datetime) -> TaskRecord:
        task = Task(
            title=title,
            description=description,
            completed=False,
            owner=owner,
            created_at=now,
            updated_at=now,
        )
        try:
            db.session.add(task)
            db.session.flush()
            record = TaskRecord.from_model(task)
            db.session.commit()
        except SQLAlchemyError as exc:
            self._fail("insert", exc)
        return record

    def list_by_owner(self, owner: str) -> list[TaskRecord]:
        query = (
            select(Task)
            .where(Task.owner == owner)
            .order_by(Task.created_at.desc(), Task.id.desc())
        )
        try:
            return [TaskRecord.from_model(task) for task in db.session.scalars(query)]
        except SQLAlchemyError as exc:
            self._fail("list", exc)

    def get(self, task_id: int, owner: str) -> TaskRecord | None:
        if not _valid_id(task_id):
            return None
        try:
            task = db.session.scalars(
                select(Task).where(Task.id == task_id, Task.owner == owner)
            ).first()
        except SQLAlchemyError as exc:
            self._fail("get", exc)
        return TaskRecord.from_model(task) if task else None

    def update(
        self, task_id: int, owner: str, changes: dict[str, Any], now: datetime
    ) -> TaskRecord | None:
        if not _valid_id(task_id):
            return None

        # Single statement: the database serializes writers on the row and
        # only the supplied columns are touched.
        stmt = (
            update(Task)
            .where(Task.id == task_id, Task.owner == owner)
            .values(
                **changes,
                updated_at=case((Task.updated_at > now, Task.updated_at), else_=now),
            )
            .execution_options(synchronize_session=False)
        )
        try:
            result = db.session.execute(stmt)
            if result.rowcount == 0:
                db.session.rollback()
                return None
            db.session.commit()
        except SQLAlchemyError as exc:
            self._fail("update", exc)
        return self.get(task_id, owner)

    def delete(self, task_id: int, owner: str) -> bool:
        if not _valid_id(task_id):
            return False
        stmt = delete(Task).where(Task.id == task_id, Task.owner == owner)
        try:
            result = db.session.execute(stmt.execution_options(synchronize_session=False))
            db.session.commit()
        except SQLAlchemyError as exc:
            self._fail("delete", exc)
        return result.rowcount > 0

    def _fail(self, operation: str, exc: SQLAlchemyError) -> NoReturn:
        db.session.rollback()
        logger.error(f"Task store {operation} failed: {exc}", exc_info=True)
        raise StoreFailure(f"Task store {operation} failed") from exc


def _valid_id(task_id: int) -> bool:
    return 0 < task_id <= MAX_TASK_ID
