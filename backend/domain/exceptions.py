"""도메인 예외"""


class DomainError(Exception):
    """도메인 레이어 기본 예외"""
    pass


class FatalInputError(DomainError):
    """파싱 입력 자체가 잘못된 경우 (문자열이 아님 등)"""

    def __init__(self, received: object):
        self.received_type = type(received).__name__
        super().__init__(f"입력 텍스트는 문자열이어야 합니다: {self.received_type}")


class MalformedStructuredOutputError(DomainError):
    """모델 응답에서 JSON을 복구하지 못함"""

    def __init__(self, reason: str, attempts: int, excerpt: str = ""):
        self.reason = reason
        self.attempts = attempts
        self.excerpt = excerpt
        message = f"JSON 파싱 실패 ({attempts}회 시도): {reason}"
        if excerpt:
            message += f" | 근처 텍스트: {excerpt!r}"
        super().__init__(message)


class ModelNotConfiguredError(DomainError):
    def __init__(self):
        super().__init__("GEMINI_API_KEY 환경변수가 설정되지 않았습니다. .env.backend 파일을 확인하세요.")


class ModelExtractionError(DomainError):
    """외부 모델 호출 실패 (네트워크, 응답 형식)"""
    pass


class FileTooLargeError(DomainError):
    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(
            f"PDF 파일이 너무 큽니다 ({size / 1024 / 1024:.2f}MB, 최대 {limit // (1024 * 1024)}MB)"
        )


class ParserNotFoundError(DomainError):
    def __init__(self, doc_type: str, version: str):
        super().__init__(f"파서를 찾을 수 없습니다: {doc_type} v{version}")
