from __future__ import annotations
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

Base = declarative_base()


def make_engine(url: str) -> Engine:
	connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
	kwargs = {}
	# In-memory SQLite lives inside one connection, so share it across sessions
	if url in ("sqlite://", "sqlite:///:memory:"):
		kwargs["poolclass"] = StaticPool
	return create_engine(url, connect_args=connect_args, future=True, **kwargs)


def make_sessionmaker(engine: Engine) -> sessionmaker:
	return sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)
