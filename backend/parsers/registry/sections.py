"""섹션 분리: 헤더 / 표제부 / 갑구 / 을구"""
import re
from dataclasses import dataclass
from typing import Optional, Tuple

from loguru import logger


def _spaced_marker(word: str) -> re.Pattern:
    """【 표 제 부 】 처럼 글자 사이 공백이 끼어도 매칭"""
    inner = r'\s*'.join(re.escape(ch) for ch in word)
    return re.compile(r'【\s*' + inner + r'\s*】')


TITLE_MARKER = _spaced_marker('표제부')
SECTION_A_MARKER = _spaced_marker('갑구')
SECTION_B_MARKER = _spaced_marker('을구')


@dataclass(frozen=True)
class RegistrySections:
    header: str = ""
    title: str = ""
    section_a: str = ""
    section_b: str = ""
    # 원문 기준 경계 (title 시작, 갑구 시작, 을구 시작)
    boundaries: Tuple[int, int, int] = (0, 0, 0)

    def as_tuple(self) -> Tuple[str, str, str, str]:
        return self.header, self.title, self.section_a, self.section_b


def _find(pattern: re.Pattern, text: str, start: int) -> Optional[int]:
    match = pattern.search(text, start)
    return match.start() if match else None


def split_sections(text: str) -> RegistrySections:
    """표식 순서(표제부 → 갑구 → 을구)대로 네 구간으로 분리.

    구간은 겹치지 않고 순서를 지키며, 이어 붙이면 원문과 같다.
    표식이 없으면 해당 구간은 비거나 다음 경계(또는 끝)까지 늘어난다.
    """
    end = len(text)

    title_start = _find(TITLE_MARKER, text, 0)
    if title_start is None:
        title_start = 0

    a_start = _find(SECTION_A_MARKER, text, title_start)
    b_start = _find(SECTION_B_MARKER, text, a_start if a_start is not None else title_start)

    if b_start is None:
        b_start = end
    if a_start is None:
        a_start = b_start

    sections = RegistrySections(
        header=text[:title_start],
        title=text[title_start:a_start],
        section_a=text[a_start:b_start],
        section_b=text[b_start:],
        boundaries=(title_start, a_start, b_start),
    )
    logger.debug(
        f"섹션 분리: header={len(sections.header)} title={len(sections.title)} "
        f"갑구={len(sections.section_a)} 을구={len(sections.section_b)}"
    )
    return sections
