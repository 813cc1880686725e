"""헬스 체크 엔드포인트"""
from datetime import datetime

from fastapi import APIRouter
from sqlalchemy.exc import SQLAlchemyError

from src.core import database
from src.core.config import settings
from src.core.logging import logger
from src.schemas.common_schema import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health_check():
    """
    헬스 체크 엔드포인트

    - DB 연결 상태 (SELECT 1)
    """
    db_ok = False
    try:
        with database.engine.connect() as connection:
            connection.exec_driver_sql("SELECT 1")
            db_ok = True
    except SQLAlchemyError as e:
        logger.error(f"Database connection error: {e}")

    return HealthResponse(
        status="ok" if db_ok else "error",
        timestamp=datetime.now(),
        version=settings.api_version,
    )


@router.get("/")
def root():
    """루트 엔드포인트"""
    return {
        "service": settings.api_title,
        "version": settings.api_version,
        "docs": "/docs",
    }
