"""도메인 열거형"""
import enum


class EntryStatus(str, enum.Enum):
    ACTIVE = "유효"
    CANCELLED = "말소"


class ExtractionStrategy(str, enum.Enum):
    MODEL = "model"
    TEXT = "text"
    AUTO = "auto"


class OwnerBasis(str, enum.Enum):
    """현재 소유자 판정 근거"""
    TRANSFER = "transfer"          # 유효한 소유권이전/보존
    DECLARED = "declared"          # 표제부 명의인 + 일치하는 갑구 항목
    DECLARED_ONLY = "declared_only"  # 표제부 명의인만
    LAST_ACTIVE = "last_active"    # 마지막 유효 항목
    UNRESOLVED = "unresolved"
