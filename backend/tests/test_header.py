from parsers.registry.header import parse_property_header
from parsers.registry.sections import split_sections


def test_parse_property_header(registry_text):
    sections = split_sections(registry_text)
    header = parse_property_header(sections.header, sections.title)

    assert header.unique_number == "1146-2010-012345"
    assert header.location == "서울특별시 강남구 역삼동 123-45"
    assert header.road_address == "서울특별시 강남구 테헤란로 100"
    assert header.building_name == "래미안아파트 제101동 제5층 제502호"
    assert header.structure.startswith("철근콘크리트구조")
    assert header.exclusive_area == "84.97㎡"
    assert header.land_right_type == "소유권대지권"
    assert header.land_right_ratio == "12345.6분의 45.12"
    assert header.declared_owner_name == ""


def test_declared_owner_in_title():
    header = parse_property_header("", "【표제부】\n등기명의인 박민수\n")
    assert header.declared_owner_name == "박민수"


def test_explicit_declared_owner_wins():
    header = parse_property_header("", "등기명의인 박민수", declared_owner="")
    assert header.declared_owner_name == ""


def test_empty_text_gives_defaults():
    header = parse_property_header("", "")
    assert header.unique_number == ""
    assert header.location == ""
    assert header.exclusive_area == ""
