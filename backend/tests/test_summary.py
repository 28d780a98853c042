from domain.enums import EntryStatus
from parsers.registry.entries import parse_encumbrance_entries, parse_ownership_entries
from parsers.registry.header import parse_property_header
from parsers.registry.record import EncumbranceEntry, OwnershipEntry, PropertyHeader
from parsers.registry.sections import split_sections
from parsers.registry.summary import (
    WARNING_AUCTION, WARNING_INJUNCTION, WARNING_SEIZURE, build_warnings, summarize,
)


def _parsed(text):
    sections = split_sections(text)
    header = parse_property_header(sections.header, sections.title)
    return header, parse_ownership_entries(sections.section_a), parse_encumbrance_entries(sections.section_b)


def test_summary_of_sample(registry_text):
    summary = summarize(*_parsed(registry_text))

    assert summary.current_owner == "이영희"
    assert summary.owner_id_number == "800101-2******"
    assert summary.owner_receipt_date == "2020-06-15"
    # 말소된 2번은 제외, 1번과 3번만 합산
    assert summary.mortgage_count == 2
    assert summary.total_mortgage == "351000000"
    assert summary.lease_count == 1
    assert summary.total_lease == "300000000"
    assert summary.warnings == []
    assert (summary.active_count_a, summary.cancelled_count_a) == (3, 0)
    assert (summary.active_count_b, summary.cancelled_count_b) == (3, 1)


def test_summary_is_idempotent(registry_text):
    parts = _parsed(registry_text)
    assert summarize(*parts) == summarize(*parts)


def test_empty_document_summary():
    summary = summarize(PropertyHeader(), [], [])
    assert summary.current_owner == "확인필요"
    assert summary.owner_receipt_date == ""
    assert summary.total_mortgage == "0"
    assert summary.total_lease == "0"
    assert summary.mortgage_count == 0
    assert summary.warnings == []


def test_unparseable_amount_counts_as_zero():
    section_b = [
        EncumbranceEntry(rank="1", purpose="근저당권설정", claim_amount="N/A"),
        EncumbranceEntry(rank="2", purpose="근저당권설정", claim_amount="100000000"),
    ]
    summary = summarize(PropertyHeader(), [], section_b)
    assert summary.mortgage_count == 2
    assert summary.total_mortgage == "100000000"


def test_warnings_are_independent():
    section_a = [
        OwnershipEntry(rank="4", purpose="가압류"),
        OwnershipEntry(rank="5", purpose="임의경매개시결정"),
    ]
    section_b = [EncumbranceEntry(rank="3", purpose="처분금지가처분")]
    assert build_warnings(section_a, section_b) == [
        WARNING_SEIZURE, WARNING_AUCTION, WARNING_INJUNCTION,
    ]


def test_cancelled_entries_raise_no_warnings():
    section_a = [OwnershipEntry(rank="4", purpose="압류", status=EntryStatus.CANCELLED)]
    section_b = [EncumbranceEntry(rank="3", purpose="가처분", status=EntryStatus.CANCELLED)]
    assert build_warnings(section_a, section_b) == []
