"""
파서 플러그인 기반 클래스

플러그인은 선형 텍스트를 받아 레코드 딕셔너리를 만드는 parse_text만 구현하면 된다.
PDF 입력은 기반 클래스가 텍스트로 바꿔 위임한다.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List


@dataclass
class DocumentTypeInfo:
    type_id: str              # "registry"
    display_name: str         # "등기부등본"
    description: str
    sub_types: List[str] = field(default_factory=list)


@dataclass
class ParseResult:
    """파서 출력 래퍼. data는 camelCase 레코드 딕셔너리"""
    document_type: str
    parser_version: str = ""
    strategy: str = ""              # "text" | "model"
    parse_date: str = field(default_factory=lambda: datetime.now().isoformat())
    data: Dict[str, Any] = field(default_factory=dict)
    raw_text: str = ""
    errors: List[str] = field(default_factory=list)


class BaseParser(ABC):

    @classmethod
    @abstractmethod
    def document_type_info(cls) -> DocumentTypeInfo: ...

    @classmethod
    @abstractmethod
    def parser_version(cls) -> str: ...

    @classmethod
    @abstractmethod
    def can_parse(cls, text_sample: str) -> float:
        """텍스트 앞부분 기준 0.0~1.0 신뢰도 (0.0이면 처리 불가)"""
        ...

    @abstractmethod
    def parse_text(self, raw_text: str) -> ParseResult: ...

    def parse(self, pdf_buffer: bytes) -> ParseResult:
        from parsers.common.pdf_utils import extract_text

        return self.parse_text(extract_text(pdf_buffer))
