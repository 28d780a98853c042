"""
모델 응답 JSON 복구

모델 응답(자유 텍스트)에서 JSON 객체 하나를 찾아 파싱한다.
1. 코드펜스 제거
2. 문자열 리터럴을 인식하는 중괄호 균형 추출
3. 파싱 실패 시 단계별 복구 (후행 쉼표 → 제어문자 → 주석 → 닫는 괄호 보충)
4. 최상위 형태 검증 (누락/잘못된 타입은 빈 값으로 보정)

네트워크/파일 I/O 없음.
"""
import json
import re
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Tuple

from loguru import logger

from config import settings
from domain.exceptions import FatalInputError, MalformedStructuredOutputError


CODE_FENCE_RE = re.compile(r'```[ \t]*[A-Za-z0-9_-]*[ \t]*\r?\n?')
TRAILING_COMMA_RE = re.compile(r',(\s*[}\]])')
LINE_COMMENT_RE = re.compile(r'//[^\n]*')
BLOCK_COMMENT_RE = re.compile(r'/\*.*?\*/', re.DOTALL)
WHITESPACE_RUN_RE = re.compile(r'\s+')

_CONTROL_ESCAPES = {'\n': '\\n', '\r': '\\r', '\t': '\\t'}


class Segment(NamedTuple):
    """JSON 텍스트 조각. is_string이면 따옴표 포함 문자열 리터럴"""
    text: str
    is_string: bool
    terminated: bool = True


def segment_json_text(text: str) -> List[Segment]:
    """텍스트를 문자열 리터럴/그 외 구간으로 분할.

    이스케이프된 따옴표(\\")는 문자열 상태를 바꾸지 않는다. 중괄호 추출과
    모든 복구 단계가 이 분할 하나를 공유한다.
    """
    segments: List[Segment] = []
    start = 0
    in_string = False
    escaped = False
    for i, ch in enumerate(text):
        if in_string:
            if escaped:
                escaped = False
            elif ch == '\\':
                escaped = True
            elif ch == '"':
                segments.append(Segment(text[start:i + 1], True))
                start = i + 1
                in_string = False
        elif ch == '"':
            if i > start:
                segments.append(Segment(text[start:i], False))
            start = i
            in_string = True
    if start < len(text):
        if in_string:
            segments.append(Segment(text[start:], True, terminated=False))
        else:
            segments.append(Segment(text[start:], False))
    return segments


def _map_code(text: str, transform: Callable[[str], str]) -> str:
    """문자열 리터럴 밖 구간에만 transform 적용"""
    return ''.join(
        seg.text if seg.is_string else transform(seg.text)
        for seg in segment_json_text(text)
    )


# ==================== 추출 ====================

def strip_code_fences(text: str) -> str:
    """```json ... ``` 코드펜스 표식 제거"""
    return CODE_FENCE_RE.sub('', text.strip()).strip()


def extract_json_object(text: str) -> Optional[str]:
    """첫 '{'부터 깊이 0으로 돌아오는 '}'까지 추출.

    문자열 안의 중괄호는 세지 않는다. 닫히지 않으면 나머지 전체를 반환한다.
    """
    start = text.find('{')
    if start == -1:
        return None
    depth = 0
    offset = start
    for seg in segment_json_text(text[start:]):
        if not seg.is_string:
            for i, ch in enumerate(seg.text):
                if ch == '{':
                    depth += 1
                elif ch == '}':
                    depth -= 1
                    if depth == 0:
                        return text[start:offset + i + 1]
        offset += len(seg.text)
    return text[start:]


# ==================== 복구 단계 ====================

def remove_trailing_commas(text: str) -> str:
    """'}' / ']' 앞 후행 쉼표 제거 (변화가 없을 때까지 반복)"""
    def _strip(code: str) -> str:
        previous = None
        while previous != code:
            previous = code
            code = TRAILING_COMMA_RE.sub(r'\1', code)
        return code

    previous = None
    while previous != text:
        previous = text
        text = _map_code(text, _strip)
    return text


def _escape_controls(literal: str) -> str:
    out = []
    for ch in literal:
        if ch in _CONTROL_ESCAPES:
            out.append(_CONTROL_ESCAPES[ch])
        elif ord(ch) < 0x20:
            continue
        else:
            out.append(ch)
    return ''.join(out)


def normalize_control_chars(text: str) -> str:
    """리터럴 밖 공백 연속은 한 칸으로, 리터럴 안 원시 개행/탭은 이스케이프"""
    parts = []
    for seg in segment_json_text(text):
        if seg.is_string:
            parts.append(_escape_controls(seg.text))
        else:
            parts.append(WHITESPACE_RUN_RE.sub(' ', seg.text))
    return ''.join(parts)


def strip_comments(text: str) -> str:
    """리터럴 밖 // 및 /* */ 주석 제거"""
    return _map_code(
        text, lambda code: LINE_COMMENT_RE.sub('', BLOCK_COMMENT_RE.sub('', code))
    )


def close_unbalanced(text: str) -> str:
    """출력이 잘린 경우 열린 문자열/괄호를 닫는다"""
    stack = []
    segments = segment_json_text(text)
    for seg in segments:
        if seg.is_string:
            continue
        for ch in seg.text:
            if ch in '{[':
                stack.append('}' if ch == '{' else ']')
            elif ch in '}]' and stack:
                stack.pop()
    if segments and segments[-1].is_string and not segments[-1].terminated:
        text += '"'
    if not stack:
        return text
    text = text.rstrip().rstrip(',')
    return text + ''.join(reversed(stack))


REPAIR_PASSES: Tuple[Callable[[str], str], ...] = (
    remove_trailing_commas,
    normalize_control_chars,
    strip_comments,
    remove_trailing_commas,
    close_unbalanced,
)


# ==================== 파싱 ====================

def _excerpt(text: str, pos: int, radius: int) -> str:
    pos = max(0, min(pos, len(text)))
    return text[max(0, pos - radius):pos + radius]


def recover_json(text: str, max_attempts: Optional[int] = None) -> Any:
    """모델 응답 텍스트에서 JSON 객체를 복구하여 반환.

    Raises:
        FatalInputError: 입력이 문자열이 아님
        MalformedStructuredOutputError: 모든 복구 시도 실패
    """
    if not isinstance(text, str):
        raise FatalInputError(text)
    if max_attempts is None:
        max_attempts = settings.JSON_REPAIR_MAX_ATTEMPTS
    radius = settings.JSON_ERROR_EXCERPT_CHARS

    candidate = extract_json_object(strip_code_fences(text))
    if candidate is None:
        raise MalformedStructuredOutputError(
            "JSON 객체를 찾을 수 없습니다", attempts=0, excerpt=text[:radius * 2]
        )

    attempts = 0
    last_error: Optional[json.JSONDecodeError] = None
    last_text = candidate
    passes = iter(REPAIR_PASSES)
    while attempts < max_attempts:
        attempts += 1
        try:
            value = json.loads(candidate)
            if attempts > 1:
                logger.debug(f"JSON 복구 성공 ({attempts}회 시도)")
            return value
        except json.JSONDecodeError as e:
            last_error = e
            last_text = candidate
        repair = next(passes, None)
        if repair is None:
            break
        candidate = repair(candidate)

    raise MalformedStructuredOutputError(
        last_error.msg if last_error else "알 수 없는 오류",
        attempts=attempts,
        excerpt=_excerpt(last_text, last_error.pos if last_error else 0, radius),
    )


# ==================== 형태 검증 ====================

HEADER_KEYS = ('header', 'basicInfo')
OWNERSHIP_KEYS = ('ownershipEntries', 'sectionA')
ENCUMBRANCE_KEYS = ('encumbranceEntries', 'sectionB')


def _pick(payload: Dict[str, Any], keys: Tuple[str, ...]):
    for key in keys:
        if key in payload:
            return key, payload[key]
    return keys[0], None


def validate_shape(value: Any) -> Dict[str, Any]:
    """최상위 형태 보정: header 객체 + 두 배열. 실패 대신 빈 값으로 대체"""
    if not isinstance(value, dict):
        logger.warning(f"모델 응답 최상위가 객체가 아님: {type(value).__name__} → 빈 객체로 대체")
        value = {}

    result: Dict[str, Any] = {}
    key, header = _pick(value, HEADER_KEYS)
    if not isinstance(header, dict):
        logger.warning(f"'{key}' 누락 또는 객체 아님 → 빈 객체로 대체")
        header = {}
    result['header'] = header

    for out_key, keys in (('ownershipEntries', OWNERSHIP_KEYS),
                          ('encumbranceEntries', ENCUMBRANCE_KEYS)):
        key, entries = _pick(value, keys)
        if not isinstance(entries, list):
            logger.warning(f"'{key}' 누락 또는 배열 아님 → 빈 배열로 대체")
            entries = []
        result[out_key] = entries
    return result


def recover_registry_payload(text: str, max_attempts: Optional[int] = None) -> Dict[str, Any]:
    """JSON 복구 + 등기부 형태 검증"""
    return validate_shape(recover_json(text, max_attempts))
