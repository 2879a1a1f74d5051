from fastapi import Request
from sqlalchemy import create_engine, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker, declarative_base
from .config import Settings

Base = declarative_base()

def make_engine(settings: Settings) -> Engine:
    # Configure database connection based on database type
    if settings.DATABASE_URL.startswith("sqlite"):
        connect_args = {"check_same_thread": False}
        return create_engine(
            settings.DATABASE_URL,
            future=True,
            echo=settings.DEBUG,
            connect_args=connect_args
        )
    # PostgreSQL/MySQL with connection pooling
    return create_engine(
        settings.DATABASE_URL,
        future=True,
        echo=settings.DEBUG,
        pool_size=settings.DATABASE_POOL_SIZE,
        max_overflow=settings.DATABASE_MAX_OVERFLOW,
        pool_pre_ping=True,
        pool_recycle=3600,  # Recycle connections after 1 hour
    )

class Database:
    """Engine plus session factory, built once per application."""

    def __init__(self, settings: Settings):
        self.engine = make_engine(settings)
        self.SessionLocal = sessionmaker(bind=self.engine, autoflush=False, autocommit=False, future=True)

    def create_all(self) -> None:
        Base.metadata.create_all(bind=self.engine)

    def ping(self) -> None:
        with self.SessionLocal() as db:
            db.execute(select(1))

    def dispose(self) -> None:
        self.engine.dispose()

def get_db(request: Request):
    db: Session = request.app.state.db.SessionLocal()
    try:
        yield db
    finally:
        db.close()
