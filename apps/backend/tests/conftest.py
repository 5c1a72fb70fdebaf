from __future__ import annotations

import os
import tempfile
from typing import Any, Generator

import pytest

# 사용자 환경을 건드리지 않도록 임시 파일 SQLite 사용 (앱 import 전에 지정)
_fd, _TEST_DB_PATH = tempfile.mkstemp(prefix="budget_test_", suffix=".sqlite3")
os.close(_fd)
os.environ["BUDGET_DATABASE_URL"] = f"sqlite:///{_TEST_DB_PATH}"

from sqlalchemy.orm import sessionmaker  # noqa: E402

from basic_budget import schemas  # noqa: E402
from basic_budget.core.clock import FixedClock  # noqa: E402
from basic_budget.core.database import Base, engine as app_engine, init_db  # noqa: E402
from basic_budget.core.deps import get_services  # noqa: E402
from basic_budget.main import app  # noqa: E402
from basic_budget.models import Cadence, CategoryKind, CycleType, RolloverRule  # noqa: E402
from basic_budget.services import build_services, memory_context, sql_context  # noqa: E402

TODAY = "2026-04-16"


@pytest.fixture(scope="session")
def engine() -> Generator[Any, Any, Any]:
    init_db(app_engine)
    yield app_engine
    app_engine.dispose()
    for suffix in ("", "-wal", "-shm"):
        try:
            os.remove(_TEST_DB_PATH + suffix)
        except OSError:
            pass


@pytest.fixture(scope="function")
def db_session(engine) -> Generator[Any, Any, Any]:
    TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    # settings 단일 행 시드
    init_db(engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        # 테이블 데이터 정리 (FK 역순)
        with engine.begin() as conn:
            for tbl in reversed(Base.metadata.sorted_tables):
                conn.execute(tbl.delete())


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock(TODAY)


@pytest.fixture()
def services(clock):
    """인메모리 저장소 기반 서비스 묶음"""
    return build_services(memory_context(clock=clock))


@pytest.fixture()
def sql_services(db_session, clock):
    """SQLite 저장소 기반 서비스 묶음"""
    return build_services(sql_context(db_session, clock=clock))


@pytest.fixture(autouse=True)
def override_dependency(db_session, clock):
    # FastAPI DI override: 테스트 세션 + 고정 시계
    def _get_services_override():
        return build_services(sql_context(db_session, clock=clock))

    app.dependency_overrides[get_services] = _get_services_override
    yield
    app.dependency_overrides.clear()


@pytest.fixture()
def client(db_session):
    from fastapi.testclient import TestClient
    with TestClient(app) as c:
        yield c


# ===== 공용 시드 헬퍼 =====


def make_period(services, start="2026-04-01", end="2026-04-30", income_cents=500000):
    return services.periods.create_period(
        schemas.PeriodCreate(
            cycle_type=CycleType.MONTHLY,
            start_date=start,
            end_date=end,
            income_cents=income_cents,
        )
    )


def make_category(services, name="Groceries", kind=CategoryKind.NEED):
    return services.categories.create_category(schemas.CategoryCreate(name=name, kind=kind))


def make_budget(services, period, category, amount_cents=30000, cadence=Cadence.MONTHLY, rule=RolloverRule.RESET):
    return services.budgets.upsert_budget(
        schemas.BudgetUpsert(
            period_id=period.id,
            category_id=category.id,
            cadence=cadence,
            amount_cents=amount_cents,
            rollover_rule=rule,
        )
    )


def spend(services, period, category, amount_cents, date=TODAY, merchant=None):
    # 지출은 음수로 저장
    return services.transactions.add_transaction(
        schemas.TransactionCreate(
            date=date,
            amount_cents=-abs(amount_cents),
            category_id=category.id,
            period_id=period.id,
            merchant=merchant,
        )
    )
