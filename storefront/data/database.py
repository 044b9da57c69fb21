# storefront/data/database.py
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.domain.errors import Conflict, StorageFailure
from storefront.utils.settings import DATABASE_URL
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _engine_options(url: str) -> dict:
    # sqlite tylko lokalnie i w testach, jedno polaczenie dla bazy w pamieci
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}, "poolclass": StaticPool}
    return {"pool_pre_ping": True}


engine = create_engine(DATABASE_URL, **_engine_options(DATABASE_URL))
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
Base = declarative_base()


def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session, integrity_as_conflict: bool = True) -> Iterator[Session]:
    """
    Unit of work: commit gdy blok przejdzie, rollback przy kazdym wyjatku.

    Bledy SQLAlchemy sa tlumaczone na Conflict (naruszenie unikalnosci) albo
    StorageFailure. Z integrity_as_conflict=False wszystko idzie jako
    StorageFailure.
    """
    try:
        yield db
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.error(f"Transaction rolled back, integrity error: {e.orig}")
        if integrity_as_conflict:
            raise Conflict("A record with this data already exists") from e
        raise StorageFailure("Storage constraint violated, nothing was saved") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Transaction rolled back: {e}")
        raise StorageFailure("Storage failure, nothing was saved") from e
    except Exception:
        db.rollback()
        raise


def init_db() -> None:
    # import modeli zeby zarejestrowaly sie w Base.metadata
    import storefront.data.models  # noqa: F401

    logger.info(f"Models registered in Base.metadata: {list(Base.metadata.tables.keys())}")
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created")
