"""
갑구/을구 행 단위 항목 파서

순위번호만 있는 행(예: '3', '9-1')이 새 항목을 연다. 다음 순위번호 행까지의
나머지 행은 섹션별 규칙표를 순서대로 거치며 필드를 채운다.

- 필드는 한 번 채워지면 덮어쓰지 않는다 (먼저 쓴 값 우선).
- 예외: '날짜 + 등기원인' 조합은 단순 등기원인을 한 번 덮어쓴다.
- 말소 여부는 항목의 모든 행에 대해 OR 누적된다 (한 번 말소면 끝까지 말소).
- 가등기 표식도 같은 방식으로 누적된다 ('소유권이전청구'/'권가등기'처럼 행이 잘려도 유지).
"""
import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Set, Tuple

from loguru import logger

from domain.enums import EntryStatus
from parsers.common.cancellation import CancellationDetector
from parsers.common.text_utils import (
    clean_text, compact, extract_receipt_number, normalize_amount,
    parse_date_iso, parse_id_fragment, split_lines, strip_labels,
)
from parsers.registry.record import PROVISIONAL_MARKER, EncumbranceEntry, OwnershipEntry


RANK_RE = re.compile(r'^\d+(?:-\d+)?$')

# ==================== 어휘 ====================

# 더 구체적인 용어가 그 용어를 포함하는 짧은 용어보다 앞에 온다
PURPOSES: Tuple[str, ...] = (
    '소유권이전청구권가등기', '소유권이전담보가등기',
    '소유권일부이전', '소유권이전', '소유권보존', '소유권말소',
    '근저당권부채권질권설정', '근저당권설정', '근저당권이전', '근저당권변경', '근저당권말소',
    '근질권설정', '근질권이전', '근질권변경', '근질권말소', '근질권',
    '전세권설정', '전세권이전', '전세권변경', '전세권말소',
    '주택임차권', '임차권설정', '임차권',
    '지상권설정', '지역권설정',
    '처분금지가처분', '가처분', '가압류', '압류',
    '임의경매개시결정', '강제경매개시결정', '경매개시결정',
    '가등기', '신탁',
)

CAUSES: Tuple[str, ...] = (
    '협의분할에의한상속', '확정채권양도', '매매예약', '매매', '증여', '상속',
    '신탁재산귀속', '신탁', '해지', '해제', '변제',
    '전세권설정계약', '설정계약', '전세계약', '임대차계약',
    '임의경매개시결정', '강제경매개시결정', '가압류결정', '가처분결정', '압류',
    '판결', '공매', '교환',
)

PRINCIPAL_MARKER = '본등기'
PROVISIONAL_PURPOSE_RE = re.compile(r'소유권이전[가-힣]{0,6}?가등기')

DATED_CAUSE_RE = re.compile(
    r'(\d{4}년\s*\d{1,2}월\s*\d{1,2}일)\s*(' + '|'.join(map(re.escape, CAUSES)) + ')'
)

INSTITUTION = (
    r'(?:주식회사|유한회사)\s?[가-힣]+|'
    r'[가-힣]+(?:은행|조합|공사|금고|공단|신탁|캐피탈|보험|주식회사|기금)'
)
PERSON = r'[가-힣]{2,4}(?![가-힣])'

SECTION_A_LABELS = (
    re.compile(r'【\s*갑\s*구\s*】'),
    re.compile(r'\(\s*소유권에\s*관한\s*사항\s*\)'),
)
SECTION_B_LABELS = (
    re.compile(r'【\s*을\s*구\s*】'),
    re.compile(r'\(\s*소유권\s*이외의\s*권리에\s*관한\s*사항\s*\)'),
)
COLUMN_HEADER_RE = re.compile(
    r'순위번호\s+등\s*기\s*목\s*적\s+접\s*수\s+등\s*기\s*원\s*인\s+권리자\s+및\s+기타사항'
)


# ==================== 추출 함수 ====================

def _first_term(vocabulary: Sequence[str]) -> Callable[[str], str]:
    def extract(line: str) -> str:
        joined = compact(line)
        for term in vocabulary:
            if term in joined:
                return term
        return ""
    return extract


def _first_match(*patterns: re.Pattern) -> Callable[[str], str]:
    def extract(line: str) -> str:
        for pattern in patterns:
            match = pattern.search(line)
            if match:
                return clean_text(match[1])
        return ""
    return extract


def _labelled(labels: str, *names: str) -> Tuple[re.Pattern, ...]:
    """'라벨 이름' 패턴들 (names 순서대로 시도)"""
    return tuple(
        re.compile(r'(?:' + labels + r')\s*[:：]?\s*(' + name + ')')
        for name in names
    )


def _dated_cause(line: str) -> str:
    match = DATED_CAUSE_RE.search(line)
    if match:
        return f"{clean_text(match[1])} {match[2]}"
    return ""


def _amount(line: str) -> str:
    for pattern in AMOUNT_RES:
        match = pattern.search(line)
        if match:
            amount = normalize_amount(match[1])
            if amount != "0":
                return amount
    return ""


_first_purpose = _first_term(PURPOSES)


def extract_purpose(line: str) -> str:
    """어휘에 없는 '소유권이전…가등기' 형태도 가등기 표식을 살려서 반환"""
    joined = compact(line)
    match = PROVISIONAL_PURPOSE_RE.search(joined)
    if match and PRINCIPAL_MARKER not in joined:
        return match[0]
    return _first_purpose(line)


def is_provisional_line(line: str) -> bool:
    """가등기 표식이 있는 행 (가등기에 기한 본등기 주석은 제외)"""
    joined = compact(line)
    return PROVISIONAL_MARKER in joined and PRINCIPAL_MARKER not in joined


extract_cause = _first_term(CAUSES)

OWNER_RES = (
    re.compile(r'(?:공유자|가등기권자)\s*지분\s*[\d.]+\s*분의\s*[\d.]+\s*(' + PERSON + ')'),
) + _labelled('소유자|공유자|가등기권자|수탁자', INSTITUTION, PERSON) + (
    re.compile(r'(' + PERSON + r')\s+\d{6}-?\d?[*○●]'),
)

ADDRESS_RES = (
    re.compile(r'주소\s*[:：]?\s*([가-힣0-9\s\-,()]+(?:동|호|층|번지))'),
    re.compile(r'([가-힣]+시\s+[가-힣]+구\s+[^\n]+(?:동|호|층|번지))'),
    re.compile(
        r'((?:서울|부산|대구|인천|광주|대전|울산|세종|경기|강원|충청|충북|충남|'
        r'전라|전북|전남|경상|경북|경남|제주)[가-힣]*(?:특별시|광역시|특별자치시|도|특별자치도)'
        r'\s+[가-힣]+(?:시|군|구)(?:\s+\S+){0,6})'
    ),
)

AMOUNT_RES = (
    re.compile(r'채권최고액\s*금?\s*([\d,]+)'),
    re.compile(r'(?:전세금|임차보증금|채권액|청구금액)\s*금?\s*([\d,]+)'),
    re.compile(r'금\s*([\d,]+)\s*원'),
)

DEBTOR_RES = _labelled('채무자|전세권자', INSTITUTION, PERSON)

HOLDER_B_RES = _labelled(
    '근저당권자|채권자|질권자|지상권자|임차권자', INSTITUTION, r'[가-힣]{2,20}'
) + (re.compile(r'권리자\s*([가-힣]+)'),)


# ==================== 규칙표 ====================

@dataclass(frozen=True)
class FieldRule:
    """(추출기, 대상 필드). override면 같은 필드를 한 번에 한해 덮어쓴다"""
    field: str
    extract: Callable[[str], str]
    override: bool = False


COMMON_RULES: Tuple[FieldRule, ...] = (
    FieldRule('purpose', extract_purpose),
    FieldRule('receipt_date', parse_date_iso),
    FieldRule('receipt_number', extract_receipt_number),
    FieldRule('registration_cause', extract_cause),
    FieldRule('registration_cause', _dated_cause, override=True),
)

OWNERSHIP_RULES: Tuple[FieldRule, ...] = COMMON_RULES + (
    FieldRule('right_holder', _first_match(*OWNER_RES)),
    FieldRule('id_number', parse_id_fragment),
    FieldRule('address', _first_match(*ADDRESS_RES)),
)

ENCUMBRANCE_RULES: Tuple[FieldRule, ...] = COMMON_RULES + (
    FieldRule('claim_amount', _amount),
    FieldRule('debtor', _first_match(*DEBTOR_RES)),
    FieldRule('right_holder', _first_match(*HOLDER_B_RES)),
)


@dataclass(frozen=True)
class FlagRule:
    """항목의 어느 한 행이라도 참이면 참 (말소와 같은 OR 누적)"""
    field: str
    predicate: Callable[[str], bool]


OWNERSHIP_FLAGS: Tuple[FlagRule, ...] = (
    FlagRule('provisional', is_provisional_line),
)


# ==================== 누적기 ====================

class EntryAccumulator:
    """순위번호 하나에 속한 행들의 부분 파싱 상태"""

    def __init__(self, rank: str):
        self.rank = rank
        self.values: Dict[str, str] = {}
        self.overridden: Set[str] = set()
        self.cancelled = False
        self.flags: Dict[str, bool] = {}

    def feed(self, line: str, rules: Sequence[FieldRule], detector: CancellationDetector,
             flags: Sequence[FlagRule] = ()):
        for rule in rules:
            if rule.override:
                if rule.field in self.overridden:
                    continue
                value = rule.extract(line)
                if value:
                    self.values[rule.field] = value
                    self.overridden.add(rule.field)
            elif rule.field not in self.values:
                value = rule.extract(line)
                if value:
                    self.values[rule.field] = value
        for flag in flags:
            if not self.flags.get(flag.field) and flag.predicate(line):
                self.flags[flag.field] = True
        if detector.is_cancelled_line(line):
            self.cancelled = True

    def finalize(self, factory):
        status = EntryStatus.CANCELLED if self.cancelled else EntryStatus.ACTIVE
        return factory(rank=self.rank, status=status, **self.values, **self.flags)


# ==================== 파싱 ====================

def _section_lines(text: str, labels: Sequence[re.Pattern]) -> List[str]:
    return split_lines(strip_labels(text, tuple(labels) + (COLUMN_HEADER_RE,)))


def parse_entries(text: str, labels: Sequence[re.Pattern], rules: Sequence[FieldRule],
                  factory, detector: Optional[CancellationDetector] = None,
                  flags: Sequence[FlagRule] = ()) -> List:
    """섹션 텍스트 → 항목 목록. 첫 순위번호 이전 행은 버린다"""
    if not text or not text.strip():
        return []
    detector = detector or CancellationDetector()

    entries = []
    current: Optional[EntryAccumulator] = None
    for line in _section_lines(text, labels):
        if RANK_RE.match(line):
            if current:
                entries.append(current.finalize(factory))
            current = EntryAccumulator(line)
        elif current:
            current.feed(line, rules, detector, flags)
    if current:
        entries.append(current.finalize(factory))
    return entries


def parse_ownership_entries(text: str,
                            detector: Optional[CancellationDetector] = None) -> List[OwnershipEntry]:
    """갑구 (소유권에 관한 사항)"""
    entries = parse_entries(text, SECTION_A_LABELS, OWNERSHIP_RULES, OwnershipEntry, detector,
                            OWNERSHIP_FLAGS)
    logger.debug(f"갑구 항목 {len(entries)}건")
    return entries


def parse_encumbrance_entries(text: str,
                              detector: Optional[CancellationDetector] = None) -> List[EncumbranceEntry]:
    """을구 (소유권 이외의 권리에 관한 사항)"""
    entries = parse_entries(text, SECTION_B_LABELS, ENCUMBRANCE_RULES, EncumbranceEntry, detector)
    logger.debug(f"을구 항목 {len(entries)}건")
    return entries


def count_rank_lines(text: str) -> int:
    """섹션 텍스트의 순위번호 행 수"""
    return sum(1 for line in (text or '').split('\n') if RANK_RE.match(line.strip()))
