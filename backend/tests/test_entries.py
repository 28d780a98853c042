from domain.enums import EntryStatus
from parsers.common.cancellation import CancellationDetector
from parsers.registry.entries import (
    EntryAccumulator, OWNERSHIP_FLAGS, OWNERSHIP_RULES, count_rank_lines, extract_purpose,
    parse_encumbrance_entries, parse_ownership_entries,
)
from parsers.registry.record import OwnershipEntry
from parsers.registry.sections import split_sections


def test_ownership_entries(registry_text):
    sections = split_sections(registry_text)
    entries = parse_ownership_entries(sections.section_a)

    assert [e.rank for e in entries] == ["1", "2", "3"]
    preserve, provisional, transfer = entries

    assert preserve.purpose == "소유권보존"
    assert preserve.receipt_date == "2010-03-02"
    assert preserve.receipt_number == "12345"
    assert preserve.right_holder == "김철수"
    assert preserve.id_number == "700101-1******"

    assert provisional.purpose == "소유권이전청구권가등기"
    assert provisional.registration_cause == "2019년5월9일 매매예약"
    assert provisional.right_holder == "김영수"
    assert provisional.provisional
    assert not preserve.provisional and not transfer.provisional

    assert transfer.purpose == "소유권이전"
    assert transfer.receipt_date == "2020-06-15"
    assert transfer.registration_cause == "2020년5월1일 매매"
    assert transfer.right_holder == "이영희"
    assert transfer.address == "서울특별시 서초구 반포동"
    assert all(e.status == EntryStatus.ACTIVE for e in entries)


def test_encumbrance_entries(registry_text):
    sections = split_sections(registry_text)
    entries = parse_encumbrance_entries(sections.section_b)

    assert [e.rank for e in entries] == ["1", "2", "3", "4"]
    first, cancel, second, lease = entries

    assert first.purpose == "근저당권설정"
    assert first.claim_amount == "120000000"
    assert first.debtor == "김철수"
    assert first.right_holder == "주식회사국민은행"
    assert first.status == EntryStatus.ACTIVE

    assert cancel.status == EntryStatus.CANCELLED
    assert cancel.claim_amount == "0"

    assert second.claim_amount == "231000000"
    assert second.right_holder == "주식회사신한은행"

    assert lease.purpose == "전세권설정"
    assert lease.claim_amount == "300000000"
    assert lease.debtor == "박민수"


def test_entry_count_matches_rank_lines(registry_text):
    sections = split_sections(registry_text)
    assert len(parse_ownership_entries(sections.section_a)) == count_rank_lines(sections.section_a)
    assert len(parse_encumbrance_entries(sections.section_b)) == count_rank_lines(sections.section_b)


def test_sub_rank_opens_new_entry():
    text = "【갑구】\n9\n소유권이전\n9-1\n9번등기명의인표시변경\n"
    entries = parse_ownership_entries(text)
    assert [e.rank for e in entries] == ["9", "9-1"]


def test_lines_before_first_rank_are_ignored():
    text = "【갑구】\n소유권이전\n1\n소유권보존\n"
    entries = parse_ownership_entries(text)
    assert len(entries) == 1
    assert entries[0].purpose == "소유권보존"


def test_empty_section():
    assert parse_ownership_entries("") == []
    assert parse_encumbrance_entries("   \n") == []


def test_cancellation_is_sticky():
    acc = EntryAccumulator("1")
    detector = CancellationDetector(rule_glyphs=False)
    for line in ["근저당권설정", "말소", "2020년1월1일", "채무자 홍길동"]:
        acc.feed(line, OWNERSHIP_RULES, detector)
    assert acc.finalize(OwnershipEntry).status == EntryStatus.CANCELLED


def test_first_value_wins_but_dated_cause_overrides_once():
    acc = EntryAccumulator("1")
    detector = CancellationDetector(rule_glyphs=False)
    for line in ["소유권이전", "2020년1월2일", "매매", "소유권보존",
                 "2019년12월1일 매매", "2019년12월5일 증여"]:
        acc.feed(line, OWNERSHIP_RULES, detector)
    entry = acc.finalize(OwnershipEntry)
    assert entry.purpose == "소유권이전"
    assert entry.receipt_date == "2020-01-02"
    assert entry.registration_cause == "2019년12월1일 매매"


def test_secured_provisional_purpose_is_kept():
    text = "【갑구】\n2\n소유권이전담보가등기\n2019년5월10일\n제200호\n가등기권자 박영수\n"
    entry, = parse_ownership_entries(text)
    assert entry.purpose == "소유권이전담보가등기"
    assert entry.provisional
    assert entry.right_holder == "박영수"


def test_extract_purpose():
    assert extract_purpose("소유권이전청구권가등기") == "소유권이전청구권가등기"
    assert extract_purpose("소유권 이전 담보 가등기") == "소유권이전담보가등기"
    assert extract_purpose("소유권이전") == "소유권이전"
    assert extract_purpose("2번가등기에기한본등기 소유권이전") == "소유권이전"


def test_provisional_flag_survives_wrapped_purpose():
    acc = EntryAccumulator("2")
    detector = CancellationDetector(rule_glyphs=False)
    for line in ["소유권이전청구", "권가등기", "2019년5월10일", "가등기권자 박영수"]:
        acc.feed(line, OWNERSHIP_RULES, detector, OWNERSHIP_FLAGS)
    entry = acc.finalize(OwnershipEntry)
    assert entry.purpose == "소유권이전"
    assert entry.provisional


def test_principal_registration_note_is_not_provisional():
    text = "【갑구】\n3\n소유권이전\n2020년6월15일\n2번가등기에기한본등기\n소유자 박영수\n"
    entry, = parse_ownership_entries(text)
    assert entry.purpose == "소유권이전"
    assert not entry.provisional


def test_unit_number_is_not_a_receipt_number():
    text = "【갑구】\n1\n소유권보존\n소유자 김철수\n서울특별시 강남구 역삼동 101동 502호\n"
    entry, = parse_ownership_entries(text)
    assert entry.receipt_number == ""
