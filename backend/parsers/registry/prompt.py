"""모델 추출용 지시 프롬프트"""

REGISTRY_EXTRACTION_PROMPT = """다음은 한국 등기부 등본(등기사항전부증명서) PDF입니다.
이 PDF를 정확히 분석하여 모든 정보를 추출하고 JSON 형식으로 반환해주세요.

**중요 지침:**
1. PDF의 모든 페이지, 모든 텍스트와 표를 행별로 정확히 읽어주세요
2. 날짜는 YYYY-MM-DD 형식으로 변환하세요 (예: 2024년8월22일 → 2024-08-22)
3. 금액은 숫자만 추출하세요 (예: 금231,000,000원 → 231000000)
4. 말소된 항목(실선, 취소선, 말소 표시)은 "말소", 유효한 항목은 "유효"로 표시하세요
5. 섹션 구분: 【표제부】, 【갑구】, 【을구】를 기준으로 구분하세요
6. 순위번호는 부기등기를 포함해 그대로 추출하세요 (예: "1", "9-1")
7. 주민등록번호는 마스킹된 형태 그대로 추출하세요 (예: 123456-1*****)
8. 표제부에 소유자(등기명의인)가 적혀 있으면 declaredOwnerName에 넣으세요
9. 갑구의 가등기(소유권이전청구권가등기, 소유권이전담보가등기 등) 항목은 provisional을 true로 표시하세요

**반환 형식 (정확히 이 형식으로):**
{
  "header": {
    "uniqueNumber": "1234-5678-901234",
    "location": "소재지번",
    "roadAddress": "도로명주소",
    "buildingName": "건물명칭 (동/층/호 포함)",
    "structure": "건물구조",
    "exclusiveArea": "84.9918㎡",
    "landRightRatio": "18191.7분의 55.5162",
    "landRightType": "소유권대지권",
    "declaredOwnerName": ""
  },
  "ownershipEntries": [
    {
      "rank": "1",
      "purpose": "소유권보존",
      "receiptDate": "2018-01-18",
      "receiptNumber": "123",
      "registrationCause": "2018년1월18일 매매",
      "rightHolder": "권리자 이름",
      "idNumber": "123456-1*****",
      "address": "주소",
      "status": "유효",
      "provisional": false
    }
  ],
  "encumbranceEntries": [
    {
      "rank": "5",
      "purpose": "근저당권설정",
      "receiptDate": "2022-08-12",
      "receiptNumber": "456",
      "registrationCause": "2022년8월12일 설정계약",
      "claimAmount": "144000000",
      "debtor": "채무자/전세권자",
      "rightHolder": "근저당권자/채권자",
      "status": "유효"
    }
  ]
}

**중요:**
- 반드시 유효한 JSON만 반환하고 다른 설명이나 주석은 포함하지 마세요
- provisional을 제외한 모든 필드는 문자열로 반환하세요 (숫자 필드도 문자열)
- 정보가 없으면 빈 문자열 "" 또는 빈 배열 []을 반환하세요"""
