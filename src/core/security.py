"""
보안 검증 및 관리자 인가
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Request

from src.core.config import settings
from src.core.exceptions import (
    AdminAccessRequiredException,
    AuthenticationRequiredException,
    InvalidQueryException,
)
from src.core.logging import logger, sanitize_for_log


ADMIN_ROLE = "ADMIN"
USER_ID_HEADER = "X-User-Id"
USER_ROLE_HEADER = "X-User-Role"


class SecurityValidator:
    """입력 보안 검증"""

    @staticmethod
    def validate_query(query: str, max_length: Optional[int] = None) -> bool:
        """검색어 검증

        Args:
            query: 검색어
            max_length: 최대 길이 (기본: settings.search_max_query_length)

        Returns:
            유효성 여부

        Raises:
            InvalidQueryException: 너무 길거나 제어 문자 포함
        """
        limit = max_length or settings.search_max_query_length
        if len(query) > limit:
            raise InvalidQueryException(f"Search query must be at most {limit} characters")

        # 제어 문자 (NUL 포함) 차단, 탭은 공백으로 취급
        if any(ord(ch) < 32 and ch != "\t" for ch in query) or "\x7f" in query:
            logger.warning(f"[API] Control character in search query: {sanitize_for_log(repr(query), 50)}")
            raise InvalidQueryException("Search query contains invalid characters")

        return True


@dataclass(frozen=True)
class CurrentUser:
    """인증된 사용자"""

    id: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role.upper() == ADMIN_ROLE


class AdminAuthorizer:
    """요청에서 현재 사용자를 해석

    세션 검증은 앞단 인증 프록시가 담당하며, 여기서는 프록시가 주입한
    X-User-Id / X-User-Role 헤더만 읽습니다.
    """

    def current_user(self, request: Request) -> Optional[CurrentUser]:
        user_id = (request.headers.get(USER_ID_HEADER) or "").strip()
        if not user_id:
            return None
        role = (request.headers.get(USER_ROLE_HEADER) or "").strip()
        return CurrentUser(id=user_id, role=role)

    def require_admin(self, request: Request) -> CurrentUser:
        """
        Raises:
            AuthenticationRequiredException: 사용자 정보 없음
            AdminAccessRequiredException: ADMIN 역할 아님
        """
        user = self.current_user(request)
        if user is None:
            logger.warning(f"[API] Unauthenticated admin request: {request.method} {request.url.path}")
            raise AuthenticationRequiredException()
        if not user.is_admin:
            logger.warning(f"[API] Non-admin user {sanitize_for_log(user.id, 40)} denied: {request.url.path}")
            raise AdminAccessRequiredException(user.id)
        return user


_authorizer = AdminAuthorizer()


def get_authorizer() -> AdminAuthorizer:
    """AdminAuthorizer 싱글톤 (테스트에서 override 가능)"""
    return _authorizer


def require_admin(
    request: Request,
    authorizer: AdminAuthorizer = Depends(get_authorizer),
) -> CurrentUser:
    """FastAPI Dependency: 관리자 전용 엔드포인트 보호 (401/403)"""
    return authorizer.require_admin(request)


async def log_request(request: Request) -> None:
    """요청 로깅 (민감 정보 제외)

    Args:
        request: FastAPI Request 객체
    """
    method = request.method
    path = request.url.path

    query_params = {}
    for key, value in request.query_params.items():
        query_params[key] = sanitize_for_log(str(value), max_length=50)

    if query_params:
        logger.debug(f"[API] {method} {path}?{query_params}")
    else:
        logger.debug(f"[API] {method} {path}")
