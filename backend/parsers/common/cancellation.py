"""텍스트 기반 말소 감지"""
from typing import Optional, Tuple

from config import settings


class CancellationDetector:
    """행 단위 말소 토큰 감지.

    레이아웃 정보(붉은 선)가 없는 선형 텍스트 전용이다. 실선 문자는
    장식용 대시와 구분되지 않으므로 명시적으로 켠 경우에만 본다.
    """

    TOKENS: Tuple[str, ...] = ('말소', '해지')
    RULE_GLYPHS: Tuple[str, ...] = ('──', '—')

    def __init__(self, rule_glyphs: Optional[bool] = None):
        if rule_glyphs is None:
            rule_glyphs = settings.CANCELLATION_RULE_GLYPHS
        self.markers = self.TOKENS + (self.RULE_GLYPHS if rule_glyphs else ())

    def is_cancelled_line(self, line: str) -> bool:
        return any(marker in line for marker in self.markers)
