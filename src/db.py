"""Throwaway credential store backing the login form.

Every login attempt loads the credential rows into a fresh in-memory SQLite
database, runs the lookup and drops the database again. Nothing is shared
between requests.
"""
import csv
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, List

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from . import models
from .schemas import Credential

logger = logging.getLogger(__name__)

LOGIN_QUERY = (
    "SELECT username, password FROM users "
    "WHERE username='%s' AND password='%s'"
)


def parse_credentials(text: str) -> List[Credential]:
    """Parse ``username,password`` CSV text (header row first)."""
    rows = []
    for record in csv.DictReader(text.splitlines()):
        rows.append(Credential(
            username=record.get("username") or "",
            password=record.get("password") or "",
        ))
    return rows


def load_credentials(path) -> List[Credential]:
    p = Path(path)
    return parse_credentials(p.read_text(encoding="utf-8"))


@contextmanager
def credential_store(rows: Iterable[Credential]) -> Iterator[Session]:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    models.Base.metadata.create_all(bind=engine)
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = SessionLocal()
    try:
        db.add_all(
            models.User(username=r.username, password=r.password) for r in rows
        )
        db.commit()
        yield db
    finally:
        db.close()
        engine.dispose()


def build_login_query(username: str, password: str) -> str:
    # raw interpolation, the login form is the injection target
    return LOGIN_QUERY % (username, password)


def find_users(db: Session, username: str, password: str) -> List[Credential]:
    """Run the login lookup and return every matched row.

    The query goes to the driver untouched, so quotes in the submitted
    values change its meaning. Driver errors propagate as
    ``sqlalchemy.exc.SQLAlchemyError``.
    """
    query = build_login_query(username, password)
    logger.debug("login query: %s", query)
    result = db.connection().exec_driver_sql(query)
    users = []
    for row in result.fetchall():
        # a NULL column cannot be read as text, the row is skipped
        if row[0] is None or row[1] is None:
            continue
        users.append(Credential(username=str(row[0]), password=str(row[1])))
    return users
