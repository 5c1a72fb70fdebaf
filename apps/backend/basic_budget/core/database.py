from __future__ import annotations

from sqlalchemy import Engine, create_engine, event, select
from sqlalchemy.orm import sessionmaker, DeclarativeBase, Session

from .config import settings


class Base(DeclarativeBase):
    pass


def build_engine(url: str) -> Engine:
    eng = create_engine(
        url,
        connect_args={"check_same_thread": False} if url.startswith("sqlite") else {},
    )
    # SQLite 안정성 설정: FK enforce + WAL 모드
    if url.startswith("sqlite"):
        @event.listens_for(eng, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):  # type: ignore[override]
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.close()
    return eng


engine = build_engine(settings.DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine | None = None) -> None:
    """Create all tables and make sure the singleton settings row exists."""
    from .. import models

    target = bind or engine
    Base.metadata.create_all(target)

    with Session(target) as db:
        row = db.execute(select(models.AppSetting).where(models.AppSetting.id == 1)).scalar_one_or_none()
        if row is None:
            db.add(
                models.AppSetting(
                    id=1,
                    cycle_type=models.CycleType(settings.DEFAULT_CYCLE_TYPE),
                    week_start=settings.DEFAULT_WEEK_START,
                    currency=settings.DEFAULT_CURRENCY,
                    locale=settings.DEFAULT_LOCALE,
                    biweekly_anchor_date=None,
                    app_lock_enabled=False,
                )
            )
            db.commit()
