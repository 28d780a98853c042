"""
등기부등본 (Property Registry) 파서 플러그인

등기부등본 텍스트를 표제부, 갑구, 을구로 나누어 구조화하고
현재 소유자와 근저당/전세 요약을 계산한다.
"""
from parsers.registry.v2_0_0 import RegistryParserV2

PARSER_CLASSES = [RegistryParserV2]
