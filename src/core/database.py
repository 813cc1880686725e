"""데이터베이스 연결 및 세션 관리"""
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from contextlib import contextmanager
from typing import Any, Generator

from src.core.config import settings
from src.core.logging import logger

# SQLAlchemy Base
Base = declarative_base()


def _engine_options(database_url: str) -> dict[str, Any]:
    """드라이버별 엔진 옵션

    SQLite(로컬 개발/테스트)는 커넥션 풀 옵션을 받지 않으므로 분기합니다.
    """
    if database_url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,
        "pool_recycle": 300,
        "pool_size": 5,
        "max_overflow": 10,
    }


def _unicode_lower(value: Any) -> Any:
    return value.lower() if isinstance(value, str) else value


def register_sqlite_functions(dbapi_connection: Any, connection_record: Any) -> None:
    """SQLite 내장 lower()는 ASCII만 변환하므로 Python str.lower로 교체 (예: 'Éponge' → 'éponge')"""
    dbapi_connection.create_function("lower", 1, _unicode_lower, deterministic=True)


def create_db_engine(database_url: str, **overrides: Any) -> Engine:
    """엔진 생성 (SQLite면 연결마다 유니코드 lower 등록)"""
    options = {**_engine_options(database_url), **overrides}
    db_engine = create_engine(database_url, **options)
    if database_url.startswith("sqlite"):
        event.listen(db_engine, "connect", register_sqlite_functions)
    return db_engine


engine = create_db_engine(settings.database_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db() -> None:
    """데이터베이스 테이블 초기화"""
    # 모델 등록 (metadata에 테이블이 올라가도록)
    import src.repositories.models  # noqa: F401

    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        raise


def get_db() -> Generator[Session, None, None]:
    """FastAPI Dependency: DB 세션 제공"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def get_db_context() -> Generator[Session, None, None]:
    """Context Manager: DB 세션 제공"""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
