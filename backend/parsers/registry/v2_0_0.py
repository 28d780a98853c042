"""
등기부등본 텍스트 파서 v2.0.0
- 선형 텍스트 기반 (표/좌표 정보 없음)
- 【표제부】/【갑구】/【을구】 표식으로 섹션 분리
- 순위번호 행 단위 항목 누적 + 규칙표 필드 추출
- 텍스트 토큰 기반 말소 감지
"""
from typing import Optional

from parsers.base import BaseParser, DocumentTypeInfo, ParseResult
from parsers.registry.pipeline import parse_registry_text


class RegistryParserV2(BaseParser):
    """등기부등본 파서 v2.0.0 (BaseParser 플러그인)"""

    def __init__(self, rule_glyphs: Optional[bool] = None):
        self.rule_glyphs = rule_glyphs

    @classmethod
    def document_type_info(cls) -> DocumentTypeInfo:
        return DocumentTypeInfo(
            type_id="registry",
            display_name="등기부등본",
            description="부동산 등기부등본 (토지, 건물, 집합건물)",
            sub_types=["land", "building", "aggregate_building"],
        )

    @classmethod
    def parser_version(cls) -> str:
        return "2.0.0"

    @classmethod
    def can_parse(cls, text_sample: str) -> float:
        """등기부등본 텍스트인지 판별"""
        score = 0.0
        indicators = [
            ('고유번호', 0.3),
            ('표제부', 0.2),
            ('갑구', 0.2),
            ('을구', 0.1),
            ('등기사항전부증명서', 0.15),
            ('등기부등본', 0.15),
            ('[토지]', 0.05), ('[건물]', 0.05), ('[집합건물]', 0.05),
        ]
        compact_sample = text_sample.replace(' ', '')
        for keyword, weight in indicators:
            if keyword in compact_sample:
                score += weight
        return min(score, 1.0)

    def parse_text(self, raw_text: str) -> ParseResult:
        record = parse_registry_text(raw_text, rule_glyphs=self.rule_glyphs)
        return ParseResult(
            document_type="registry",
            parser_version=self.parser_version(),
            strategy="text",
            data=record.to_dict(),
            raw_text=raw_text,
        )
