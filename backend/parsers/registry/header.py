"""표제부 파싱 (고유번호, 소재지번, 건물, 대지권, 명의인)"""
import re
from typing import Optional

from parsers.common.text_utils import clean_text
from parsers.registry.record import PropertyHeader


PROVINCES = r'(?:경기도|서울|부산|인천|대구|광주|대전|울산|제주|강원|충청|충북|충남|전라|전북|전남|경상|경북|경남|세종)'

UNIQUE_NUMBER_RES = (
    re.compile(r'고유번호\s*[:：]?\s*([\d\-]+)'),
    re.compile(r'(\d{4}-\d{4}-\d{6})'),
)
LOCATION_LINE_RE = re.compile(r'^' + PROVINCES + r'.+(?:동|리|가)\s+\d+')
LOCATION_RES = (
    re.compile(r'소재지번?\s*[:：]?\s*([^\n]+)'),
    re.compile(r'\[(?:토지|건물|집합건물)\]\s*([^\n]+)'),
)
ROAD_ADDRESS_RES = (
    re.compile(r'\[도로명주소\]\s*\n?\s*(' + PROVINCES + r'[^\n\[]{5,})'),
    re.compile(r'\[도로명주소\]\s*([^\n]+)'),
    re.compile(r'도로명주소\s*[:：]?\s*([^\n]+)'),
    re.compile(r'\(도로명주소\s*[:：]?\s*([^)]+)\)'),
)
BUILDING_UNIT_RE = re.compile(r'(\S+\s+제\s*\d+\s*동(?:\s*제\s*\d+\s*층)?(?:\s*제\s*\d+\s*호)?)')
BUILDING_NAME_RES = (
    re.compile(r'건물명칭\s*[:：]?\s*([^\n\[【]+)'),
    re.compile(r'명\s*칭\s*[:：]?\s*([^\n]+)'),
    re.compile(r'(\S+(?:아파트|타워|맨션|빌라|오피스텔|빌딩))'),
)
STRUCTURE_LINE_RE = re.compile(
    r'((?:철근콘크리트|철골철근콘크리트|철골|경량철골|벽돌|블록|조적|목|강)\s*(?:구)?조[^\n]*)'
)
STRUCTURE_AFTER_LABEL_RE = re.compile(r'건물내역[^\n]*\n([^\n【]+)')
EXCLUSIVE_PART_RE = re.compile(r'전유부분의\s*건물의\s*표시')
AREA_RE = re.compile(r'([\d,]+(?:\.\d+)?)\s*㎡')
AREA_LABEL_RE = re.compile(r'면적\s*[:：]?\s*([\d,.]+)')
RATIO_RES = (
    re.compile(r'([\d,.]+)\s*분의\s*\n?\s*([\d,.]+)'),
)
RATIO_LABEL_RE = re.compile(r'대지권비율\s*[:：]?\s*([^\n]+)')
LAND_RIGHT_TYPE_RES = (
    re.compile(r'대지권종류\s*[:：]?\s*([^\n]+)'),
    re.compile(r'((?:소유권|지상권|전세권|임차권)\s*대지권)'),
)
DECLARED_OWNER_RE = re.compile(
    r'(?:소유자|등기명의인)\s*[:：]?\s*([가-힣]{2,4})(?![가-힣])'
)


def _search(text: str, *patterns: re.Pattern) -> str:
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            return clean_text(match[1])
    return ""


def _location(text: str) -> str:
    for line in text.split('\n'):
        if LOCATION_LINE_RE.match(line.strip()):
            return clean_text(line)
    return _search(text, *LOCATION_RES)


def _building_name(text: str) -> str:
    return _search(text, BUILDING_UNIT_RE, *BUILDING_NAME_RES)


def _structure(text: str) -> str:
    return _search(text, STRUCTURE_LINE_RE, STRUCTURE_AFTER_LABEL_RE)


def _exclusive_area(title: str, combined: str) -> str:
    """전유부분 표시 이후의 첫 면적, 없으면 문서 첫 면적"""
    marker = EXCLUSIVE_PART_RE.search(title)
    scope = title[marker.end():] if marker else combined
    match = AREA_RE.search(scope) or AREA_RE.search(combined)
    if match:
        return match[1] + '㎡'
    label = AREA_LABEL_RE.search(combined)
    return label[1] + '㎡' if label else ""


def _land_right_ratio(text: str) -> str:
    for pattern in RATIO_RES:
        match = pattern.search(text)
        if match:
            return f"{match[1]}분의 {match[2]}"
    return _search(text, RATIO_LABEL_RE)


def parse_property_header(header: str, title: str,
                          declared_owner: Optional[str] = None) -> PropertyHeader:
    """헤더 + 표제부 텍스트 → PropertyHeader (찾지 못한 값은 빈 문자열)"""
    combined = (header or '') + '\n' + (title or '')
    owner = declared_owner if declared_owner is not None else _search(combined, DECLARED_OWNER_RE)
    return PropertyHeader(
        unique_number=_search(combined, *UNIQUE_NUMBER_RES),
        location=_location(combined),
        road_address=_search(combined, *ROAD_ADDRESS_RES),
        building_name=_building_name(combined),
        structure=_structure(combined),
        exclusive_area=_exclusive_area(title or '', combined),
        land_right_ratio=_land_right_ratio(combined),
        land_right_type=_search(combined, *LAND_RIGHT_TYPE_RES),
        declared_owner_name=owner,
    )
