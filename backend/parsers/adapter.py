"""
파서 플러그인 시스템 ↔ 애플리케이션 포트 어댑터

application.ports.parser_service.DocumentParserPort를 구현하여
parsers/ 플러그인 시스템을 유스케이스에서 사용할 수 있게 한다.
"""
from application.ports.parser_service import DocumentParserPort
from parsers import get_parser
from parsers.base import ParseResult


class ParserServiceAdapter(DocumentParserPort):
    """파서 플러그인 시스템을 DocumentParserPort로 어댑팅"""

    def parse(self, document_type: str, pdf_buffer: bytes,
              version: str = "latest") -> ParseResult:
        return get_parser(document_type, version).parse(pdf_buffer)

    def parse_text(self, document_type: str, raw_text: str,
                   version: str = "latest") -> ParseResult:
        return get_parser(document_type, version).parse_text(raw_text)
