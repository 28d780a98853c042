import json

import pytest


SAMPLE_REGISTRY_TEXT = """등기사항전부증명서(말소사항 포함) - 집합건물
[집합건물] 서울특별시 강남구 역삼동 123-45 래미안아파트 제101동 제5층 제502호
고유번호 1146-2010-012345

【 표 제 부 】 ( 1동의 건물의 표시 )
서울특별시 강남구 역삼동 123-45
[도로명주소] 서울특별시 강남구 테헤란로 100
철근콘크리트구조 (철근)콘크리트지붕 15층 아파트
( 전유부분의 건물의 표시 )
제5층 제502호
철근콘크리트구조 84.97㎡
대지권종류 소유권대지권
대지권비율 12345.6분의 45.12

【 갑 구 】 ( 소유권에 관한 사항 )
순위번호 등 기 목 적 접 수 등 기 원 인 권리자 및 기타사항
1
소유권보존
2010년3월2일
제12345호
소유자 김철수 700101-1******
서울특별시 강남구 역삼동 123-45
2
소유권이전청구권가등기
2019년5월10일
제5000호
2019년5월9일 매매예약
가등기권자 김영수 750505-1******
3
소유권이전
2020년6월15일
제23456호
2020년5월1일 매매
소유자 이영희 800101-2******
서울특별시 서초구 반포동 1-1

【 을 구 】 ( 소유권 이외의 권리에 관한 사항 )
순위번호 등 기 목 적 접 수 등 기 원 인 권리자 및 기타사항
1
근저당권설정
2018년1월10일
제1000호
2018년1월9일 설정계약
채권최고액 금120,000,000원
채무자 김철수
근저당권자 주식회사국민은행
2
1번근저당권설정등기말소
2020년6월15일
제23457호
2020년6월15일 해지
3
근저당권설정
2020년6월15일
제23458호
2020년6월15일 설정계약
채권최고액 금231,000,000원
채무자 이영희
근저당권자 주식회사신한은행
4
전세권설정
2021년2월1일
제3000호
2021년1월20일 설정계약
전세금 금300,000,000원
전세권자 박민수
"""


MODEL_PAYLOAD = {
    "header": {
        "uniqueNumber": "1146-2010-012345",
        "location": "서울특별시 강남구 역삼동 123-45",
        "declaredOwnerName": "김영수",
    },
    "ownershipEntries": [
        {"rank": "1", "purpose": "소유권이전청구권가등기", "receiptDate": "2019년5월10일",
         "rightHolder": "김영수", "status": "유효"},
        {"rank": "2", "purpose": "소유권이전", "receiptDate": "2020-06-15",
         "rightHolder": "이영희", "idNumber": "800101-2******",
         "address": "서울특별시 서초구 반포동", "status": "유효"},
    ],
    "encumbranceEntries": [
        {"rank": "1", "purpose": "근저당권설정", "claimAmount": "금231,000,000원",
         "rightHolder": "주식회사신한은행", "status": "유효"},
        {"rank": "2", "purpose": "근저당권설정", "claimAmount": 50000000,
         "rightHolder": "주식회사국민은행", "status": "말소"},
    ],
}


@pytest.fixture
def registry_text():
    return SAMPLE_REGISTRY_TEXT


@pytest.fixture
def model_payload():
    return json.loads(json.dumps(MODEL_PAYLOAD))


@pytest.fixture
def model_response(model_payload):
    """코드펜스와 설명문이 섞인 모델 응답"""
    return "분석 결과입니다.\n```json\n" + json.dumps(model_payload, ensure_ascii=False) + "\n```\n"
