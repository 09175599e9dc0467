from __future__ import annotations
from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text, func
from .db import Base


class Attempt(Base):
	__tablename__ = "attempts"
	id = Column(Integer, primary_key=True, autoincrement=True)
	user_id = Column(String(128), nullable=False, index=True)
	question = Column(Text, nullable=False, default="")
	user_answer = Column(Text, nullable=False, default="")
	correct_answer = Column(Text, nullable=False, default="")
	correctness = Column(Boolean, nullable=False, default=False)
	# Assigned by the database, never by the client
	created_at = Column(DateTime, server_default=func.now(), nullable=False)
