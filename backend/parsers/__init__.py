"""
등기 문서 파서 플러그인 레지스트리

  parsers/
    common/      텍스트 정규화, JSON 복구, PDF 텍스트 추출
    registry/    document_type = "registry" (PARSER_CLASSES export)

플러그인 패키지는 PARSER_CLASSES: List[Type[BaseParser]]를 노출한다.
버전 문자열은 'v' 접두어 유무와 무관하게 같은 파서를 가리킨다.
"""
import importlib
from pathlib import Path
from typing import Dict, List, Tuple, Type
from loguru import logger

from domain.exceptions import ParserNotFoundError
from parsers.base import BaseParser, DocumentTypeInfo, ParseResult


# {document_type: {version: ParserClass}}
_plugin_registry: Dict[str, Dict[str, Type[BaseParser]]] = {}
_discovered = False

DETECTION_SAMPLE_CHARS = 2000
MIN_DETECTION_CONFIDENCE = 0.1


def register_parser(cls: Type[BaseParser]) -> None:
    info = cls.document_type_info()
    version = cls.parser_version()
    _plugin_registry.setdefault(info.type_id, {})[version] = cls
    logger.debug(f"파서 등록: {info.type_id} v{version} ({info.display_name})")


def _plugin_packages() -> List[str]:
    root = Path(__file__).parent
    return [
        d.name for d in sorted(root.iterdir())
        if d.is_dir() and not d.name.startswith('_') and d.name != 'common'
        and (d / '__init__.py').exists()
    ]


def discover_plugins() -> None:
    """하위 패키지의 PARSER_CLASSES를 한 번만 등록"""
    global _discovered
    if _discovered:
        return
    for name in _plugin_packages():
        try:
            module = importlib.import_module(f"parsers.{name}")
        except ImportError as e:
            logger.warning(f"파서 플러그인 로드 실패 '{name}': {e}")
            continue
        for cls in getattr(module, 'PARSER_CLASSES', []):
            register_parser(cls)
    _discovered = True


def _version_sort_key(v: str) -> Tuple[int, ...]:
    """'v2.0.0' → (2, 0, 0)"""
    return tuple(int(x) for x in v.lstrip("v").split('.') if x.isdigit())


def _latest(versions: Dict[str, Type[BaseParser]]) -> str:
    return max(versions, key=_version_sort_key)


def get_parser(document_type: str = "registry", version: str = "latest") -> BaseParser:
    discover_plugins()
    versions = _plugin_registry.get(document_type, {})
    resolved = _latest(versions) if versions and version == "latest" else version.lstrip("v")
    if resolved not in versions:
        raise ParserNotFoundError(document_type, resolved)
    return versions[resolved]()


def detect_document_type(text_sample: str) -> Tuple[str, float]:
    """추출 텍스트 앞부분으로 문서 타입 판별 → (document_type, confidence)

    Raises:
        ValueError: 어떤 파서도 최소 신뢰도를 넘지 못함
    """
    discover_plugins()
    sample = text_sample[:DETECTION_SAMPLE_CHARS]
    scores = [
        (versions[_latest(versions)].can_parse(sample), doc_type)
        for doc_type, versions in _plugin_registry.items()
    ]
    if scores:
        confidence, doc_type = max(scores)
        if confidence >= MIN_DETECTION_CONFIDENCE:
            return doc_type, confidence
    raise ValueError("문서 타입을 감지할 수 없습니다. 매칭되는 파서가 없습니다.")


def list_document_types() -> List[DocumentTypeInfo]:
    discover_plugins()
    return [versions[_latest(versions)].document_type_info() for versions in _plugin_registry.values()]


def list_versions(document_type: str) -> List[str]:
    discover_plugins()
    return sorted(_plugin_registry.get(document_type, {}), key=_version_sort_key)
