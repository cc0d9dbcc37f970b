from __future__ import annotations

from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from invoicer.core.paths import database_path


_ENGINE = None
_DATABASE_URL: Optional[str] = None


def database_url() -> str:
	if _DATABASE_URL:
		return _DATABASE_URL
	# Use posix path for SQLAlchemy URL compatibility on Windows
	return f"sqlite:///{database_path().as_posix()}"


def set_database_url(url: Optional[str]) -> None:
	"""Point the engine at another database (tests use 'sqlite://').

	Drops the cached engine so the next get_engine() call reconnects.
	"""
	global _ENGINE, _DATABASE_URL
	if _ENGINE is not None:
		_ENGINE.dispose()
	_ENGINE = None
	_DATABASE_URL = url


def get_engine(echo: bool = False):
	"""Return a singleton SQLAlchemy engine for the configured SQLite DB."""
	global _ENGINE
	if _ENGINE is None:
		url = database_url()
		kwargs = {"connect_args": {"check_same_thread": False}}
		if url in ("sqlite://", "sqlite:///:memory:"):
			# One shared connection, or every session would see an empty database
			kwargs["poolclass"] = StaticPool
		_ENGINE = create_engine(url, echo=echo, **kwargs)
	return _ENGINE


def create_db_and_tables(echo: bool = False) -> None:
	"""Create the database file and all SQLModel tables."""
	# Ensure models are imported so metadata has all tables
	import invoicer.data.models  # noqa: F401

	if not _DATABASE_URL:
		database_path().parent.mkdir(parents=True, exist_ok=True)
	SQLModel.metadata.create_all(get_engine(echo=echo))


def get_session(echo: bool = False) -> Session:
	"""Create a new Session bound to the project engine.

	expire_on_commit=False so returned instances keep attribute values after commit.
	"""
	return Session(get_engine(echo=echo), expire_on_commit=False)


@contextmanager
def session_scope(echo: bool = False) -> Generator[Session, None, None]:
	"""Transactional scope: commit on success, roll back and re-raise on error.

	Usage:
		with session_scope() as s:
			... use s ...
	"""
	session = get_session(echo=echo)
	try:
		yield session
		session.commit()
	except Exception:
		session.rollback()
		raise
	finally:
		session.close()
