"""전역 테스트 설정

역할:
- 테스트 환경 구성 (in-memory SQLite)
- 공통 Fake 저장소/게이트웨이 주입
- DB 시드 및 TestClient 픽스처

금지:
- 외부 DB/네트워크 접근
"""

from __future__ import annotations

import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Dict

import pytest

# 프로젝트 루트를 경로에 추가
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# settings는 import 시점에 로드되므로 src import 전에 설정
os.environ.setdefault("DATABASE_URL", "sqlite://")

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from src.core.database import Base, create_db_engine, get_db  # noqa: E402
from src.repositories.models import Category, Order, OrderItem, Product, ProductTag  # noqa: E402
from tests.fakes import FakeOrderStore, FakeRefundGateway  # noqa: E402
from tests.fixtures import CATEGORIES, ORDERS, PRODUCTS  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def test_env() -> None:
    """테스트 환경 변수 설정 (세션 전역)"""
    os.environ["ENVIRONMENT"] = "test"
    os.environ["LOG_LEVEL"] = "INFO"


@pytest.fixture
def fake_order_store() -> FakeOrderStore:
    return FakeOrderStore()


@pytest.fixture
def fake_refund_gateway() -> FakeRefundGateway:
    return FakeRefundGateway()


# ============================================================================
# SQLite (in-memory) 픽스처
# ============================================================================

@pytest.fixture
def db_engine():
    """테스트별 in-memory SQLite 엔진 (StaticPool: 모든 세션이 같은 연결 공유)"""
    engine = create_db_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(bind=db_engine, autocommit=False, autoflush=False)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


def seed_catalog(session) -> None:
    categories = {}
    for data in CATEGORIES:
        category = Category(**data)
        session.add(category)
        categories[data["slug"]] = category
    session.flush()

    for data in PRODUCTS:
        fields = {k: v for k, v in data.items() if k not in ("category", "tags")}
        product = Product(category_id=categories[data["category"]].id, **fields)
        product.tags = [ProductTag(value=tag) for tag in data.get("tags", [])]
        session.add(product)
    session.commit()


def seed_orders(session) -> None:
    for data in ORDERS:
        fields = {k: v for k, v in data.items() if k not in ("items", "created_at")}
        order = Order(created_at=datetime(*data["created_at"]), **fields)
        order.items = [OrderItem(**item) for item in data["items"]]
        session.add(order)
    session.commit()


@pytest.fixture
def catalog_db(db_session):
    """카탈로그 시드된 세션"""
    seed_catalog(db_session)
    return db_session


@pytest.fixture
def orders_db(db_session):
    """주문 시드된 세션"""
    seed_orders(db_session)
    return db_session


# ============================================================================
# API 테스트용 픽스처
# ============================================================================

@pytest.fixture
def app(session_factory):
    """get_db를 테스트 세션으로 교체한 앱"""
    from src.app import create_app

    application = create_app()

    def _override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    application.dependency_overrides[get_db] = _override_get_db
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def admin_headers() -> Dict[str, str]:
    return {"X-User-Id": "admin-1", "X-User-Role": "ADMIN"}


@pytest.fixture
def customer_headers() -> Dict[str, str]:
    return {"X-User-Id": "user-7", "X-User-Role": "USER"}
