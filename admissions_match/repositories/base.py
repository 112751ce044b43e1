"""Base repository class with common read helpers."""

from typing import Generic, TypeVar

from sqlalchemy import func
from sqlalchemy.orm import Session

from admissions_match.db import Base

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """
    Base repository over a caller-owned session.

    Repositories flush but never commit; the caller's ``db.session()`` block
    decides when a unit of work is committed.

    Usage:
        class StudentRepository(BaseRepository[StudentProfile]):
            model = StudentProfile

        repo = StudentRepository(session)
        student = repo.get_by_id(1)
    """

    model: type[T]

    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, id: int) -> T | None:
        return self.session.get(self.model, id)

    def _filtered(self, query, filters: dict):
        for key, value in filters.items():
            if not hasattr(self.model, key):
                raise ValueError(f"Unknown filter key for {self.model.__name__}: {key}")
            query = query.filter(getattr(self.model, key) == value)
        return query

    def count(self, **filters) -> int:
        """Count rows matching equality filters on model attributes."""
        query = self.session.query(func.count(self.model.id))  # type: ignore[attr-defined]
        return self._filtered(query, filters).scalar() or 0

    def exists_where(self, **filters) -> bool:
        query = self._filtered(self.session.query(self.model), filters)
        return bool(self.session.query(query.exists()).scalar())
