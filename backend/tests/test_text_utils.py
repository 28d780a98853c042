import pytest

from domain.enums import EntryStatus
from parsers.common.cancellation import CancellationDetector
from parsers.common.text_utils import (
    clean_text, extract_receipt_number, format_currency, normalize_amount,
    normalize_date, parse_amount, parse_date_iso, parse_id_fragment,
    split_lines, to_camel, to_dict,
)
from parsers.registry.record import OwnershipEntry


@pytest.mark.parametrize("text, expected", [
    ("금231,000,000원", 231000000),
    ("채권최고액 금120,000,000원", 120000000),
    ("", 0),
    ("N/A", 0),
    (None, 0),
    (50000000, 50000000),
    (True, 0),
    (float("nan"), 0),
    (float("inf"), 0),
    (1.5e8, 150000000),
])
def test_parse_amount(text, expected):
    assert parse_amount(text) == expected


def test_normalize_amount_returns_digit_string():
    assert normalize_amount("금231,000,000원") == "231000000"
    assert normalize_amount("") == "0"


def test_format_currency():
    assert format_currency("231000000") == "231,000,000원"
    assert format_currency("0") == ""


@pytest.mark.parametrize("text, expected", [
    ("2024년8월22일", "2024-08-22"),
    ("2024년 8월 2일 매매", "2024-08-02"),
    ("2024.8.22", "2024-08-22"),
    ("날짜 없음", ""),
    (None, ""),
])
def test_parse_date_iso(text, expected):
    assert parse_date_iso(text) == expected


def test_normalize_date_accepts_iso():
    assert normalize_date("2020-6-5") == "2020-06-05"
    assert normalize_date("2020년6월5일") == "2020-06-05"
    assert normalize_date(None) == ""


def test_receipt_number_and_id_fragment():
    assert extract_receipt_number("제12345호") == "12345"
    assert extract_receipt_number("접수 777") == "777"
    assert extract_receipt_number("소유권이전") == ""
    assert extract_receipt_number("역삼동 101호") == ""
    assert parse_id_fragment("소유자 이영희 800101-2******") == "800101-2******"
    assert parse_id_fragment("이영희") == ""


def test_clean_text_removes_watermark():
    assert clean_text("  열 람 용  김철수\n  ") == "김철수"


def test_split_lines_drops_page_noise():
    text = "[집합건물] 서울특별시 강남구\n\n1\n소유권이전\n열람일시 : 2024년1월1일\n1/3\n"
    assert split_lines(text) == ["1", "소유권이전"]


def test_to_dict_camel_case():
    entry = OwnershipEntry(rank="1", right_holder="김철수", status=EntryStatus.CANCELLED)
    d = to_dict(entry, camel=True)
    assert d["rightHolder"] == "김철수"
    assert d["status"] == "말소"
    assert to_camel("active_count_a") == "activeCountA"


def test_cancellation_detector():
    detector = CancellationDetector(rule_glyphs=False)
    assert detector.is_cancelled_line("1번근저당권설정등기말소")
    assert detector.is_cancelled_line("2020년6월15일 해지")
    assert not detector.is_cancelled_line("── 소유권이전 ──")

    assert CancellationDetector(rule_glyphs=True).is_cancelled_line("── 소유권이전 ──")
