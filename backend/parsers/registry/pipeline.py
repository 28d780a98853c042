"""
등기부 변환 파이프라인

텍스트 경로: 원문 → 섹션 분리 → 표제부/갑구/을구 파싱 → 소유자 판정 → 요약
모델 경로:   모델 응답 → JSON 복구/형태 검증 → 동일한 소유자 판정 → 요약
"""
from typing import Optional

from loguru import logger

from domain.exceptions import FatalInputError
from parsers.common.cancellation import CancellationDetector
from parsers.common.json_recovery import recover_registry_payload
from parsers.registry.entries import parse_encumbrance_entries, parse_ownership_entries
from parsers.registry.header import parse_property_header
from parsers.registry.record import RegistryRecord, record_parts_from_payload
from parsers.registry.sections import split_sections
from parsers.registry.summary import summarize


def parse_registry_text(raw_text: str, rule_glyphs: Optional[bool] = None) -> RegistryRecord:
    """PDF에서 추출한 선형 텍스트 → RegistryRecord

    구조를 찾지 못해도 예외 없이 빈 값으로 채운 레코드를 반환한다.

    Raises:
        FatalInputError: 입력이 문자열이 아님
    """
    if not isinstance(raw_text, str):
        raise FatalInputError(raw_text)

    sections = split_sections(raw_text)
    detector = CancellationDetector(rule_glyphs=rule_glyphs)

    header = parse_property_header(sections.header, sections.title)
    section_a = parse_ownership_entries(sections.section_a, detector)
    section_b = parse_encumbrance_entries(sections.section_b, detector)

    summary = summarize(header, section_a, section_b)
    logger.info(
        f"텍스트 파싱 완료: 갑구 {len(section_a)}건, 을구 {len(section_b)}건, "
        f"소유자 {summary.current_owner}"
    )
    return RegistryRecord(
        header=header,
        ownership_entries=section_a,
        encumbrance_entries=section_b,
        summary=summary,
    )


def parse_model_response(response_text: str, max_attempts: Optional[int] = None) -> RegistryRecord:
    """모델 응답 텍스트 → RegistryRecord

    Raises:
        FatalInputError: 입력이 문자열이 아님
        MalformedStructuredOutputError: JSON 복구 실패
    """
    payload = recover_registry_payload(response_text, max_attempts)
    header, section_a, section_b = record_parts_from_payload(payload)

    summary = summarize(header, section_a, section_b)
    logger.info(
        f"모델 응답 파싱 완료: 갑구 {len(section_a)}건, 을구 {len(section_b)}건, "
        f"소유자 {summary.current_owner}"
    )
    return RegistryRecord(
        header=header,
        ownership_entries=section_a,
        encumbrance_entries=section_b,
        summary=summary,
    )
