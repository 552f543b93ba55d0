from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from salesdash.database.engine import engine


def make_session_factory(bind):
    """Session factory for ``bind``; store reads and the reseed share these options."""
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=bind,
    )


SessionLocal = make_session_factory(engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    except SQLAlchemyError:
        db.rollback()
        raise
    finally:
        db.close()
