from __future__ import annotations
from typing import Tuple

from sqlalchemy import func, select
from sqlalchemy.engine import Engine

from .db import Base, make_engine, make_sessionmaker
from .models import Attempt


class AttemptStore:
	"""Append-only per-user attempt history."""

	def __init__(self, engine: Engine) -> None:
		self.engine = engine
		self._session = make_sessionmaker(engine)

	def create_schema(self) -> None:
		Base.metadata.create_all(bind=self.engine)

	def record(
		self,
		user_id: str,
		*,
		question: str,
		user_answer: str,
		correct_answer: str,
		correctness: bool,
	) -> int:
		with self._session() as db:
			row = Attempt(
				user_id=user_id,
				question=question,
				user_answer=user_answer,
				correct_answer=correct_answer,
				correctness=correctness,
			)
			db.add(row)
			db.commit()
			return row.id

	def summarize(self, user_id: str) -> Tuple[int, int]:
		"""Return (attempts, correct) for a user."""
		with self._session() as db:
			attempts = db.scalar(select(func.count()).select_from(Attempt).where(Attempt.user_id == user_id)) or 0
			correct = db.scalar(
				select(func.count()).select_from(Attempt).where(Attempt.user_id == user_id, Attempt.correctness.is_(True))
			) or 0
		return int(attempts), int(correct)

	def dispose(self) -> None:
		self.engine.dispose()


def open_store(url: str) -> AttemptStore:
	store = AttemptStore(make_engine(url))
	store.create_schema()
	return store
