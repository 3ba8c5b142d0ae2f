from __future__ import annotations

import logging
import uuid
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Iterator

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import StoreFailureError
from ..models.meal import ClientSession, Meal, MealSession
from . import sessions
from .sessions import SessionIdentity

logger = logging.getLogger("uvicorn")

EDITABLE_FIELDS = ("title", "description", "in_diet")


class MealStore:
    """Session-scoped access to meals. Each public call is its own transaction."""

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _guard(self, action: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Store failure while trying to %s", action)
            raise StoreFailureError(f"Could not {action}") from exc

    def create(
        self,
        identity: SessionIdentity,
        *,
        title: str,
        in_diet: bool,
        description: str | None = None,
        created_at: datetime | None = None,
    ) -> Meal:
        with self._guard("create meal"):
            # session row first so the ownership record never dangles
            sessions.register(self.db, identity)
            next_seq = (self.db.query(func.max(Meal.seq)).scalar() or 0) + 1
            meal = Meal(
                id=str(uuid.uuid4()),
                seq=next_seq,
                title=title,
                description=description,
                in_diet=in_diet,
                created_at=created_at or datetime.utcnow(),
            )
            self.db.add(meal)
            self.db.flush()
            self.db.add(MealSession(meal_id=meal.id, session_id=identity.session_id))
            self.db.commit()
            self.db.refresh(meal)
        logger.info("Created meal %s for session %s", meal.id, identity.session_id)
        return meal

    def _owned_by(self, session_id: str):
        return (
            self.db.query(Meal)
            .join(MealSession, MealSession.meal_id == Meal.id)
            .filter(MealSession.session_id == session_id)
        )

    def list_by_session(self, session_id: str) -> list[Meal]:
        with self._guard("list meals"):
            return self._owned_by(session_id).order_by(Meal.created_at.desc(), Meal.seq.desc()).all()

    def list_chronological(self, session_id: str) -> list[Meal]:
        with self._guard("load meal history"):
            return self._owned_by(session_id).order_by(Meal.created_at.asc(), Meal.seq.asc()).all()

    def get_by_id(self, meal_id: str) -> Meal | None:
        with self._guard("load meal"):
            return self.db.get(Meal, meal_id)

    def get_owner(self, meal_id: str) -> str | None:
        with self._guard("load meal owner"):
            return (
                self.db.query(MealSession.session_id)
                .filter(MealSession.meal_id == meal_id)
                .scalar()
            )

    def update(self, meal_id: str, changes: dict[str, Any]) -> Meal | None:
        """Apply only the supplied editable fields. Absent fields stay untouched."""
        applicable = {key: value for key, value in changes.items() if key in EDITABLE_FIELDS}
        with self._guard("update meal"):
            meal = self.db.get(Meal, meal_id)
            if meal is None or not applicable:
                return meal
            for key, value in applicable.items():
                setattr(meal, key, value)
            self.db.commit()
            self.db.refresh(meal)
        return meal

    def delete(self, meal_id: str) -> bool:
        with self._guard("delete meal"):
            meal = self.db.get(Meal, meal_id)
            if meal is None:
                return False
            self.db.delete(meal)
            self.db.commit()
        logger.info("Deleted meal %s", meal_id)
        return True

    def count_by_session(self, session_id: str, in_diet: bool | None = None) -> int:
        with self._guard("count meals"):
            query = (
                self.db.query(func.count(Meal.id))
                .join(MealSession, MealSession.meal_id == Meal.id)
                .filter(MealSession.session_id == session_id)
            )
            if in_diet is not None:
                query = query.filter(Meal.in_diet.is_(in_diet))
            return query.scalar() or 0

    def reset(self) -> None:
        with self._guard("reset data"):
            self.db.query(MealSession).delete()
            self.db.query(Meal).delete()
            self.db.query(ClientSession).delete()
            self.db.commit()
        logger.info("All sessions and meals removed")
