"""현재 소유자 판정

우선순위:
1. 유효한 소유권이전/보존 항목 중 마지막 (가등기 항목 제외)
2. 표제부 명의인: 같은 이름의 유효 항목이 있으면 그 주민번호/주소/일자 사용,
   없으면 이름만 (가등기만 있는 경우)
3. 목적과 무관한 마지막 유효 항목
4. 판정 불가 → '확인필요'

완료된 이전등기는 항상 표제부 명의인보다 우선한다.
"""
from typing import Optional, Sequence

from domain.enums import OwnerBasis
from parsers.registry.record import (
    NEEDS_REVIEW, PROVISIONAL_MARKER, CurrentOwner, OwnershipEntry, PropertyHeader,
)


TRANSFER_PURPOSES = ('소유권이전', '소유권보존')


def is_transfer(entry: OwnershipEntry) -> bool:
    if entry.provisional:
        return False
    purpose = entry.purpose
    return (any(p in purpose for p in TRANSFER_PURPOSES)
            and PROVISIONAL_MARKER not in purpose)


def _last(entries: Sequence[OwnershipEntry], predicate) -> Optional[OwnershipEntry]:
    for entry in reversed(entries):
        if predicate(entry):
            return entry
    return None


def _from_entry(entry: OwnershipEntry, basis: OwnerBasis, name: str = "") -> CurrentOwner:
    return CurrentOwner(
        name=name or entry.right_holder or NEEDS_REVIEW,
        id_number=entry.id_number,
        address=entry.address,
        receipt_date=entry.receipt_date,
        basis=basis,
    )


def resolve_current_owner(header: PropertyHeader,
                          entries: Sequence[OwnershipEntry]) -> CurrentOwner:
    active = [e for e in entries if e.is_active]

    transfer = _last(active, is_transfer)
    if transfer:
        return _from_entry(transfer, OwnerBasis.TRANSFER)

    declared = (header.declared_owner_name or '').strip()
    if declared:
        match = _last(active, lambda e: e.right_holder == declared)
        if match:
            return _from_entry(match, OwnerBasis.DECLARED, name=declared)
        return CurrentOwner(name=declared, basis=OwnerBasis.DECLARED_ONLY)

    if active:
        return _from_entry(active[-1], OwnerBasis.LAST_ACTIVE)

    return CurrentOwner()
