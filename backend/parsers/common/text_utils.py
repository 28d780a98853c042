"""텍스트 정규화 공통 유틸리티 (상태 없는 순수 함수)"""
import enum
import math
import re
from typing import Iterable, List, Optional


WATERMARK_RE = re.compile(r'열\s*람\s*용')

# 한국어/점 구분 날짜 (2024년 8월 22일, 2024.8.22)
DATE_RE = re.compile(r'(\d{4})\s*[년.]\s*(\d{1,2})\s*[월.]\s*(\d{1,2})\s*일?')
ISO_DATE_RE = re.compile(r'^(\d{4})-(\d{1,2})-(\d{1,2})$')

RECEIPT_NUMBER_RES = (
    re.compile(r'제\s*(\d+)\s*호'),
    re.compile(r'접수\s*(\d+)'),
)

# 주민등록번호 앞자리 + 마스킹 (800101-1******, 800101-*******, 800101-1)
ID_FRAGMENT_RES = (
    re.compile(r'(\d{6}-?\d?[*○●]+)'),
    re.compile(r'(\d{6}-\d)'),
)

# 페이지 헤더/푸터 (본문과 무관한 반복 행)
PAGE_HEADER_RE = re.compile(
    r'^\[(?:토지|건물|집합건물)\]\s*.+$|'
    r'^표시번호\s+접\s*수|'
    r'^순위번호\s+등\s*기\s*목\s*적'
)
PAGE_FOOTER_RE = re.compile(
    r'열람일시\s*:|'
    r'발행일시\s*:|'
    r'^\d+/\d+$'
)


def clean_text(text: Optional[str]) -> str:
    """텍스트 정리 (공백 정규화, 워터마크 제거)"""
    if not text:
        return ""
    text = WATERMARK_RE.sub('', text)
    return re.sub(r'\s+', ' ', text).strip()


def compact(text: Optional[str]) -> str:
    """모든 공백 제거 ('소유권 이전' 같은 띄어쓰기 변형 비교용)"""
    return re.sub(r'\s+', '', text or '')


def strip_labels(text: str, patterns: Iterable[re.Pattern]) -> str:
    """섹션 제목, 컬럼 헤더 등 라벨 노이즈 제거"""
    for pattern in patterns:
        text = pattern.sub('', text)
    return text


def split_lines(text: str) -> List[str]:
    """공백 제거된 비어있지 않은 행 목록 (페이지 헤더/푸터 제외)"""
    lines = []
    for line in text.split('\n'):
        stripped = line.strip()
        if not stripped:
            continue
        if PAGE_HEADER_RE.match(stripped) or PAGE_FOOTER_RE.search(stripped):
            continue
        lines.append(stripped)
    return lines


def parse_date_iso(text: Optional[str]) -> str:
    """날짜 문자열을 YYYY-MM-DD로 변환. 없으면 빈 문자열"""
    if not text:
        return ""
    match = DATE_RE.search(text)
    if match:
        return f"{match[1]}-{match[2].zfill(2)}-{match[3].zfill(2)}"
    return ""


def normalize_date(value) -> str:
    """외부 입력 날짜 정규화 (이미 ISO면 자릿수만 맞춤)"""
    if value is None:
        return ""
    text = str(value).strip()
    iso = ISO_DATE_RE.match(text)
    if iso:
        return f"{iso[1]}-{iso[2].zfill(2)}-{iso[3].zfill(2)}"
    return parse_date_iso(text)


def parse_amount(text) -> int:
    """금액 문자열에서 숫자만 추출. 실패 시 0 (예외 없음)"""
    if text is None or isinstance(text, bool):
        return 0
    if isinstance(text, int):
        return max(text, 0)
    if isinstance(text, float):
        return max(int(text), 0) if math.isfinite(text) else 0
    digits = re.sub(r'[^\d]', '', str(text))
    return int(digits) if digits else 0


def normalize_amount(text) -> str:
    """금액을 쉼표 없는 숫자 문자열로 ('금231,000,000원' → '231000000')"""
    return str(parse_amount(text))


def format_currency(value) -> str:
    """표시용 금액 ('231000000' → '231,000,000원'). 0이면 빈 문자열"""
    amount = parse_amount(value)
    if not amount:
        return ""
    return f"{amount:,}원"


def extract_receipt_number(text: str) -> str:
    """'제 N 호' 또는 '접수 N' 형식의 접수번호"""
    for pattern in RECEIPT_NUMBER_RES:
        match = pattern.search(text)
        if match:
            return match[1]
    return ""


def parse_id_fragment(text: str) -> str:
    """마스킹된 주민등록번호 조각"""
    for pattern in ID_FRAGMENT_RES:
        match = pattern.search(text)
        if match:
            return match[1]
    return ""


def to_camel(name: str) -> str:
    """snake_case → camelCase ('active_count_a' → 'activeCountA')"""
    head, *rest = name.split('_')
    return head + ''.join(part[:1].upper() + part[1:] for part in rest)


def to_dict(obj, camel: bool = False):
    """데이터클래스를 딕셔너리로 변환"""
    if hasattr(obj, '__dataclass_fields__'):
        d = {}
        for k in obj.__dataclass_fields__:
            val = getattr(obj, k)
            d[to_camel(k) if camel else k] = to_dict(val, camel)
        return d
    elif isinstance(obj, enum.Enum):
        return obj.value
    elif isinstance(obj, (list, tuple)):
        return [to_dict(item, camel) for item in obj]
    elif isinstance(obj, dict):
        return {k: to_dict(v, camel) for k, v in obj.items()}
    else:
        return obj
