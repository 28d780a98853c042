"""문서 파서 포트 인터페이스"""
from abc import ABC, abstractmethod

from parsers.base import ParseResult


class DocumentParserPort(ABC):
    @abstractmethod
    def parse(self, document_type: str, pdf_buffer: bytes,
              version: str = "latest") -> ParseResult: ...
    @abstractmethod
    def parse_text(self, document_type: str, raw_text: str,
                   version: str = "latest") -> ParseResult: ...
