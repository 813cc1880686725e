"""로깅 설정

- 로거 이름: storefront
- 사용자 입력(검색어, 주문 메모, 헤더 값)은 sanitize_for_log를 거쳐 기록
"""
import logging
import re
import sys

from src.core.config import settings

# 고객 이메일 (주문 검색어/메모에 섞여 들어옴)
_EMAIL_PATTERN = re.compile(r"[\w.+-]+@[\w-]+(?:\.[\w-]+)+")
# 카드/전화번호로 보이는 숫자열 (공백/하이픈 포함 9자 이상)
_LONG_NUMBER_PATTERN = re.compile(r"\d(?:[\d -]{7,}\d)")
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


def _is_production() -> bool:
    return settings.environment.lower() == "production"


def setup_logging() -> logging.Logger:
    """storefront 로거 초기화"""
    logger = logging.getLogger("storefront")

    log_level = settings.log_level.upper()
    if _is_production() and log_level == "DEBUG":
        log_level = "INFO"

    logger.setLevel(getattr(logging, log_level))

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, log_level))

    if _is_production():
        formatter = logging.Formatter(
            fmt="%(asctime)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

    console_handler.setFormatter(formatter)

    if not logger.handlers:
        logger.addHandler(console_handler)

    return logger


logger = setup_logging()


def sanitize_for_log(value: str, max_length: int = 100) -> str:
    """사용자 입력을 로그용 문자열로 변환

    - 이메일 주소 → [email]
    - 카드/전화번호 형태의 숫자열 → [number]
    - 제어 문자 제거 (로그 라인 위조 방지)
    - max_length 초과분 절단

    Args:
        value: 로깅할 문자열
        max_length: 최대 길이

    Returns:
        마스킹/절단된 문자열
    """
    if not value:
        return "[empty]"

    result = _CONTROL_CHARS.sub("", value)
    result = _EMAIL_PATTERN.sub("[email]", result)
    result = _LONG_NUMBER_PATTERN.sub("[number]", result)

    if len(result) > max_length:
        result = result[:max_length] + "..."

    return result
