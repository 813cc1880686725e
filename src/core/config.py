"""설정 관리 - 환경 변수 로드 및 검증"""
from pydantic_settings import BaseSettings
from pydantic import field_validator


class Settings(BaseSettings):
    """애플리케이션 설정"""

    # 데이터베이스
    database_url: str = "sqlite:///./storefront.db"

    # 검색 (Relevance Engine)
    # - search_max_limit: limit 파라미터 상한 (정책값)
    # - search_candidate_multiplier: 재정렬용 후보 풀 배수 (limit x N)
    search_default_limit: int = 10
    search_max_limit: int = 50
    search_candidate_multiplier: int = 3
    search_suggestion_pool: int = 8
    search_max_suggestions: int = 5
    search_max_category_suggestions: int = 3
    search_max_query_length: int = 200

    # 가중치/동의어 정책 YAML (resources/ 기준 상대 경로)
    search_policy_path: str = "search/scoring_policy.yaml"

    # 주문 (Order Lifecycle)
    order_delivery_estimate_days: int = 7
    order_list_default_limit: int = 20
    order_list_max_limit: int = 100

    # API
    api_title: str = "Home Textiles Storefront API"
    api_version: str = "1.0.0"
    api_description: str = "상품 검색(relevance ranking) 및 관리자 주문 관리 API"

    # 로깅
    # - environment=production 이면 DEBUG 로그를 INFO로 올리고 짧은 포맷 사용
    log_level: str = "INFO"
    environment: str = "development"

    @field_validator(
        "search_default_limit",
        "search_max_limit",
        "search_candidate_multiplier",
        "search_suggestion_pool",
        "search_max_suggestions",
        "search_max_category_suggestions",
        "search_max_query_length",
    )
    @classmethod
    def validate_search_limits(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("search limits must be positive")
        return v

    @field_validator("order_delivery_estimate_days")
    @classmethod
    def validate_delivery_days(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("order_delivery_estimate_days must be positive")
        return v

    @field_validator("order_list_default_limit", "order_list_max_limit")
    @classmethod
    def validate_order_limits(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("order list limits must be positive")
        return v

    @field_validator("database_url")
    @classmethod
    def validate_required_urls(cls, v: str) -> str:
        if not v:
            raise ValueError("database_url must not be empty")
        return v

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
