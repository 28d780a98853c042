"""요약 정보 집계 (부작용 없는 순수 함수)"""
from typing import List, Sequence

from domain.enums import EntryStatus
from parsers.common.text_utils import parse_amount
from parsers.registry.ownership import resolve_current_owner
from parsers.registry.record import EncumbranceEntry, OwnershipEntry, PropertyHeader, Summary


MORTGAGE_PURPOSE = '근저당권설정'
LEASE_PURPOSE = '전세권설정'

WARNING_SEIZURE = '⚠️ 유효한 압류/가압류 등기가 있습니다.'
WARNING_AUCTION = '⚠️ 경매 진행 중인 것으로 보입니다.'
WARNING_INJUNCTION = '⚠️ 처분금지가처분이 설정되어 있습니다.'


def _active_with(entries: Sequence, keyword: str) -> List:
    return [e for e in entries if e.is_active and keyword in e.purpose]


def _total(entries: Sequence[EncumbranceEntry]) -> str:
    return str(sum(parse_amount(e.claim_amount) for e in entries))


def _count(entries: Sequence, status: EntryStatus) -> int:
    return sum(1 for e in entries if e.status == status)


def build_warnings(section_a: Sequence[OwnershipEntry],
                   section_b: Sequence[EncumbranceEntry]) -> List[str]:
    """경고 규칙은 서로 독립적으로 평가된다"""
    warnings = []
    if _active_with(section_a, '압류'):  # 가압류 포함
        warnings.append(WARNING_SEIZURE)
    if _active_with(section_a, '경매'):
        warnings.append(WARNING_AUCTION)
    if _active_with(section_b, '가처분'):
        warnings.append(WARNING_INJUNCTION)
    return warnings


def summarize(header: PropertyHeader,
              section_a: Sequence[OwnershipEntry],
              section_b: Sequence[EncumbranceEntry]) -> Summary:
    owner = resolve_current_owner(header, section_a)
    mortgages = _active_with(section_b, MORTGAGE_PURPOSE)
    leases = _active_with(section_b, LEASE_PURPOSE)

    return Summary(
        current_owner=owner.name,
        owner_id_number=owner.id_number,
        owner_address=owner.address,
        owner_receipt_date=owner.receipt_date,
        total_mortgage=_total(mortgages),
        mortgage_count=len(mortgages),
        total_lease=_total(leases),
        lease_count=len(leases),
        warnings=build_warnings(section_a, section_b),
        active_count_a=_count(section_a, EntryStatus.ACTIVE),
        cancelled_count_a=_count(section_a, EntryStatus.CANCELLED),
        active_count_b=_count(section_b, EntryStatus.ACTIVE),
        cancelled_count_b=_count(section_b, EntryStatus.CANCELLED),
    )
