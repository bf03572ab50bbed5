# app/config/database.py
from contextlib import contextmanager
from typing import Iterator
import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from .settings import settings

logger = logging.getLogger(__name__)

engine_kwargs = {
    "pool_pre_ping": True,
    "echo": settings.debug
}

# SQLite necesita compartir la conexión entre hilos del servidor
if settings.is_sqlite:
    engine_kwargs["connect_args"] = {"check_same_thread": False}
else:
    engine_kwargs["pool_recycle"] = 300

# Create engine
engine = create_engine(settings.database_url, **engine_kwargs)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# Database dependency
def get_db():
    """Database dependency for FastAPI"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """
    Ámbito transaccional explícito sobre una sesión.

    Confirma al salir normalmente y revierte ante cualquier excepción,
    que se vuelve a lanzar sin modificar. Todo lo escrito dentro del bloque
    se confirma junto o no se confirma.
    """
    try:
        yield db
        db.commit()
    except Exception:
        logger.debug("Revirtiendo transacción")
        db.rollback()
        raise
