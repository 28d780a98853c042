"""
등기부등본 PDF 변환 서비스 설정
"""
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """애플리케이션 설정"""

    # 앱 기본 설정
    APP_NAME: str = "등기부등본 PDF 변환 서비스"
    APP_VERSION: str = "2.0.0"
    DEBUG: bool = False

    # Gemini 설정 (API 키가 없으면 모델 경로 비활성화)
    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-2.5-flash"
    GEMINI_API_URL: str = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
    GEMINI_TIMEOUT: int = 120  # 초
    GEMINI_RETRY_COUNT: int = 3
    GEMINI_TEMPERATURE: float = 0.1
    GEMINI_MAX_OUTPUT_TOKENS: int = 16384

    # 파일 설정
    MAX_FILE_SIZE: int = 20 * 1024 * 1024  # 20MB (Gemini inline 한도)

    # JSON 복구 설정
    JSON_REPAIR_MAX_ATTEMPTS: int = 6
    JSON_ERROR_EXCERPT_CHARS: int = 80

    # 말소 감지: 실선 문자(──, —)도 말소로 볼지 여부
    CANCELLATION_RULE_GLYPHS: bool = False

    # 로깅 설정
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = ""

    class Config:
        env_file = ".env.backend"
        case_sensitive = True
        env_file_encoding = "utf-8"


@lru_cache()
def get_settings() -> Settings:
    """설정 싱글톤 반환"""
    return Settings()


# 설정 인스턴스
settings = get_settings()
