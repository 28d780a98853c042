"""
등기부 구조화 레코드

표제부(PropertyHeader), 갑구(OwnershipEntry), 을구(EncumbranceEntry),
요약(Summary)과 이를 묶는 RegistryRecord. 외부 출력은 camelCase 딕셔너리.
"""
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List

from loguru import logger

from domain.enums import EntryStatus, OwnerBasis
from parsers.common.text_utils import clean_text, normalize_amount, normalize_date, to_dict


NEEDS_REVIEW = "확인필요"
PROVISIONAL_MARKER = '가등기'


# ==================== 데이터 클래스 ====================

@dataclass(frozen=True)
class PropertyHeader:
    """표제부: 부동산 표시"""
    unique_number: str = ""
    location: str = ""
    road_address: str = ""
    building_name: str = ""
    structure: str = ""
    exclusive_area: str = ""
    land_right_ratio: str = ""
    land_right_type: str = ""
    declared_owner_name: str = ""


@dataclass(frozen=True)
class OwnershipEntry:
    """갑구 항목: 소유권에 관한 사항"""
    rank: str
    purpose: str = ""
    receipt_date: str = ""
    receipt_number: str = ""
    registration_cause: str = ""
    right_holder: str = ""
    id_number: str = ""
    address: str = ""
    status: EntryStatus = EntryStatus.ACTIVE
    provisional: bool = False         # 가등기 (이전 청구권 보전, 소유권 아님)

    @property
    def is_active(self) -> bool:
        return self.status == EntryStatus.ACTIVE


@dataclass(frozen=True)
class EncumbranceEntry:
    """을구 항목: 소유권 이외의 권리에 관한 사항"""
    rank: str
    purpose: str = ""
    receipt_date: str = ""
    receipt_number: str = ""
    registration_cause: str = ""
    claim_amount: str = "0"
    debtor: str = ""
    right_holder: str = ""
    status: EntryStatus = EntryStatus.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status == EntryStatus.ACTIVE


@dataclass(frozen=True)
class CurrentOwner:
    name: str = NEEDS_REVIEW
    id_number: str = ""
    address: str = ""
    receipt_date: str = ""
    basis: OwnerBasis = OwnerBasis.UNRESOLVED


@dataclass(frozen=True)
class Summary:
    current_owner: str = NEEDS_REVIEW
    owner_id_number: str = ""
    owner_address: str = ""
    owner_receipt_date: str = ""
    total_mortgage: str = "0"
    mortgage_count: int = 0
    total_lease: str = "0"
    lease_count: int = 0
    warnings: List[str] = field(default_factory=list)
    active_count_a: int = 0
    cancelled_count_a: int = 0
    active_count_b: int = 0
    cancelled_count_b: int = 0


@dataclass
class RegistryRecord:
    """변환 결과 전체. 표현 계층에 넘긴 뒤 폐기된다"""
    header: PropertyHeader
    ownership_entries: List[OwnershipEntry] = field(default_factory=list)
    encumbrance_entries: List[EncumbranceEntry] = field(default_factory=list)
    summary: Summary = field(default_factory=Summary)

    def to_dict(self) -> Dict[str, Any]:
        return to_dict(self, camel=True)


# ==================== 모델 응답 → 레코드 ====================

def _text(item: Dict[str, Any], *keys: str) -> str:
    for key in keys:
        value = item.get(key)
        if value is not None and value != "":
            return clean_text(str(value))
    return ""


def coerce_status(value: Any) -> EntryStatus:
    """'말소'/'cancelled' 계열만 말소, 나머지는 유효"""
    text = str(value or '').strip().lower()
    if text in (EntryStatus.CANCELLED.value, 'cancelled', 'canceled'):
        return EntryStatus.CANCELLED
    return EntryStatus.ACTIVE


def header_from_payload(data: Dict[str, Any]) -> PropertyHeader:
    return PropertyHeader(
        unique_number=_text(data, 'uniqueNumber'),
        location=_text(data, 'location'),
        road_address=_text(data, 'roadAddress'),
        building_name=_text(data, 'buildingName'),
        structure=_text(data, 'structure'),
        exclusive_area=_text(data, 'exclusiveArea'),
        land_right_ratio=_text(data, 'landRightRatio'),
        land_right_type=_text(data, 'landRightType'),
        declared_owner_name=_text(data, 'declaredOwnerName', 'ownerName'),
    )


def ownership_from_payload(item: Dict[str, Any]) -> OwnershipEntry:
    purpose = _text(item, 'purpose')
    return OwnershipEntry(
        rank=_text(item, 'rank', 'rankNumber'),
        purpose=purpose,
        receipt_date=normalize_date(item.get('receiptDate')),
        receipt_number=_text(item, 'receiptNumber'),
        registration_cause=_text(item, 'registrationCause'),
        right_holder=_text(item, 'rightHolder'),
        id_number=_text(item, 'idNumber'),
        address=_text(item, 'address'),
        status=coerce_status(item.get('status')),
        provisional=item.get('provisional') in (True, 'true') or PROVISIONAL_MARKER in purpose,
    )


def encumbrance_from_payload(item: Dict[str, Any]) -> EncumbranceEntry:
    return EncumbranceEntry(
        rank=_text(item, 'rank', 'rankNumber'),
        purpose=_text(item, 'purpose'),
        receipt_date=normalize_date(item.get('receiptDate')),
        receipt_number=_text(item, 'receiptNumber'),
        registration_cause=_text(item, 'registrationCause'),
        claim_amount=normalize_amount(item.get('claimAmount')),
        debtor=_text(item, 'debtor'),
        right_holder=_text(item, 'rightHolder'),
        status=coerce_status(item.get('status')),
    )


def entries_from_payload(items: List[Any], factory) -> List:
    entries = []
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            logger.warning(f"항목 {index}이(가) 객체가 아님 ({type(item).__name__}) → 건너뜀")
            continue
        entry = factory(item)
        if not entry.rank:
            logger.warning(f"항목 {index}에 순위번호 없음 → 위치 기반 '{index + 1}' 사용")
            entry = replace(entry, rank=str(index + 1))
        entries.append(entry)
    return entries


def record_parts_from_payload(payload: Dict[str, Any]):
    """validate_shape를 거친 payload → (header, 갑구, 을구)"""
    header = header_from_payload(payload.get('header') or {})
    section_a = entries_from_payload(payload.get('ownershipEntries') or [], ownership_from_payload)
    section_b = entries_from_payload(payload.get('encumbranceEntries') or [], encumbrance_from_payload)
    return header, section_a, section_b

