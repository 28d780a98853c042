"""PDF 텍스트 추출 유틸리티 (pdfplumber 기반)

레이아웃 정보 없이 문서 전체를 하나의 선형 텍스트로 만든다.
"""
import io

import pdfplumber


def is_watermark_char(obj: dict) -> bool:
    """pdfplumber 문자 객체가 워터마크인지 판별 (회색 색상 기반)"""
    if obj.get('object_type') != 'char':
        return False
    color = obj.get('non_stroking_color')
    if isinstance(color, (tuple, list)) and len(color) >= 3:
        return all(0.5 < c < 1.0 for c in color[:3])
    return False


def filter_watermark(page):
    """페이지에서 워터마크 문자를 제거한 필터링된 페이지 반환"""
    return page.filter(lambda obj: not is_watermark_char(obj))


def extract_text(pdf_buffer: bytes, max_pages: int = 0) -> str:
    """PDF 전체(또는 앞 max_pages 페이지) 텍스트를 페이지 순서대로 연결"""
    page_texts = []
    with pdfplumber.open(io.BytesIO(pdf_buffer)) as pdf:
        pages = pdf.pages[:max_pages] if max_pages else pdf.pages
        for page in pages:
            page_texts.append(filter_watermark(page).extract_text() or "")
    return '\n'.join(page_texts)
