"""등기부 PDF 변환 유스케이스: 모델 우선, 실패 시 텍스트 파서로 대체"""
import time
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from loguru import logger

from application.ports.model_extraction import ModelExtractionPort
from application.ports.parser_service import DocumentParserPort
from domain.enums import ExtractionStrategy
from domain.exceptions import DomainError, ModelNotConfiguredError
from parsers.registry.pipeline import parse_model_response
from parsers.registry.record import NEEDS_REVIEW


@dataclass
class ConvertDocumentInput:
    file_name: str
    file_content: bytes = b""
    strategy: ExtractionStrategy = ExtractionStrategy.AUTO
    document_type: str = "registry"
    parser_version: str = "latest"
    raw_text: Optional[str] = None  # 이미 추출된 텍스트가 있으면 PDF 추출 생략


@dataclass
class ConvertDocumentOutput:
    success: bool
    request_id: str
    strategy_used: Optional[ExtractionStrategy] = None
    data: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    errors: List[str] = field(default_factory=list)
    processing_time: float = 0.0
    output_file_name: Optional[str] = None


def suggest_output_file_name(data: Dict[str, Any], timestamp: Optional[int] = None) -> str:
    """등기부등본_{소유자}_{타임스탬프}.xlsx (소유자 미상이면 '변환')"""
    owner = (data.get("summary") or {}).get("currentOwner") or ""
    if owner == NEEDS_REVIEW:
        owner = ""
    owner = owner or (data.get("header") or {}).get("declaredOwnerName") or "변환"
    if timestamp is None:
        timestamp = int(time.time() * 1000)
    return f"등기부등본_{owner}_{timestamp}.xlsx"


class ConvertDocumentUseCase:
    def __init__(self, parser_service: DocumentParserPort,
                 model_service: Optional[ModelExtractionPort] = None):
        self._parser = parser_service
        self._model = model_service

    async def _convert_with_model(self, input: ConvertDocumentInput) -> Dict[str, Any]:
        if self._model is None:
            raise ModelNotConfiguredError()
        response_text = await self._model.extract(input.file_content)
        return parse_model_response(response_text).to_dict()

    def _convert_with_text(self, input: ConvertDocumentInput) -> Dict[str, Any]:
        if input.raw_text is not None:
            result = self._parser.parse_text(input.document_type, input.raw_text, input.parser_version)
        else:
            result = self._parser.parse(input.document_type, input.file_content, input.parser_version)
        return result.data

    async def execute(self, input: ConvertDocumentInput) -> ConvertDocumentOutput:
        request_id = str(uuid.uuid4())
        start = time.perf_counter()
        errors: List[str] = []
        strategy = ExtractionStrategy(input.strategy)

        # 모델은 PDF 원본이 있어야 호출 가능
        use_model = strategy == ExtractionStrategy.MODEL or (
            strategy == ExtractionStrategy.AUTO and self._model is not None and bool(input.file_content)
        )

        if use_model:
            try:
                data = await self._convert_with_model(input)
                return self._completed(request_id, ExtractionStrategy.MODEL, data, errors, start)
            except DomainError as e:
                if strategy == ExtractionStrategy.MODEL:
                    logger.error(f"[{request_id}] 모델 변환 실패: {e}")
                    return ConvertDocumentOutput(
                        success=False, request_id=request_id, error=str(e), errors=[str(e)],
                        processing_time=time.perf_counter() - start,
                    )
                logger.warning(f"[{request_id}] 모델 변환 실패, 텍스트 파서로 대체: {e}")
                errors.append(str(e))

        try:
            data = self._convert_with_text(input)
        except Exception as e:
            logger.error(f"[{request_id}] 텍스트 변환 실패 ({input.file_name}): {e}")
            errors.append(str(e))
            return ConvertDocumentOutput(
                success=False, request_id=request_id, error=str(e), errors=errors,
                processing_time=time.perf_counter() - start,
            )
        return self._completed(request_id, ExtractionStrategy.TEXT, data, errors, start)

    @staticmethod
    def _completed(request_id: str, strategy: ExtractionStrategy, data: Dict[str, Any],
                   errors: List[str], start: float) -> ConvertDocumentOutput:
        elapsed = time.perf_counter() - start
        logger.info(f"[{request_id}] 변환 완료 ({strategy.value}, {elapsed:.2f}초)")
        return ConvertDocumentOutput(
            success=True, request_id=request_id, strategy_used=strategy, data=data,
            errors=errors, processing_time=elapsed,
            output_file_name=suggest_output_file_name(data),
        )
