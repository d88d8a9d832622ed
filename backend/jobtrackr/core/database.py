import logging
from typing import Generator

from fastapi import HTTPException
from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from jobtrackr.core.config import settings

logger = logging.getLogger(__name__)

engine = create_engine(
    settings.database_url,
    pool_pre_ping=True,   # checks stale connections
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def commit_or_fail(db: Session, *, message: str = "Failed to save changes") -> None:
    """
    Commit the unit of work or surface a generic 500.

    The session is rolled back so stored state stays as it was before the call.
    No retry is attempted.
    """
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Storage call failed: %s", message)
        raise HTTPException(status_code=500, detail=message)
