"""Gemini generateContent 클라이언트 (PDF inline 전송)"""
import asyncio
import base64
from typing import Any, Dict, Optional

import httpx
from loguru import logger

from application.ports.model_extraction import ModelExtractionPort
from config import settings
from domain.exceptions import FileTooLargeError, ModelExtractionError, ModelNotConfiguredError
from parsers.registry.prompt import REGISTRY_EXTRACTION_PROMPT


class GeminiClient(ModelExtractionPort):
    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None,
                 timeout: Optional[float] = None, max_retries: Optional[int] = None,
                 backoff_base: float = 2.0, prompt: str = REGISTRY_EXTRACTION_PROMPT,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_key = settings.GEMINI_API_KEY if api_key is None else api_key
        self.model = model or settings.GEMINI_MODEL
        self.timeout = timeout or settings.GEMINI_TIMEOUT
        self.max_retries = max_retries or settings.GEMINI_RETRY_COUNT
        self.backoff_base = backoff_base
        self.prompt = prompt
        self._transport = transport

    @property
    def url(self) -> str:
        return settings.GEMINI_API_URL.format(model=self.model)

    def _build_body(self, pdf_buffer: bytes) -> Dict[str, Any]:
        return {
            "contents": [{
                "parts": [
                    {"inline_data": {"mime_type": "application/pdf",
                                     "data": base64.b64encode(pdf_buffer).decode()}},
                    {"text": self.prompt},
                ]
            }],
            "generationConfig": {
                "temperature": settings.GEMINI_TEMPERATURE,
                "topK": 40,
                "topP": 0.95,
                "maxOutputTokens": settings.GEMINI_MAX_OUTPUT_TOKENS,
            },
        }

    @staticmethod
    def _response_json(response: httpx.Response) -> Dict[str, Any]:
        """200인데 본문이 JSON이 아닌 경우 (프록시 오류 페이지 등)"""
        try:
            return response.json()
        except ValueError:
            raise ModelExtractionError(
                f"Gemini API 응답이 JSON이 아닙니다: {response.text[:200]}"
            )

    @staticmethod
    def _response_text(payload: Dict[str, Any]) -> str:
        try:
            return payload["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            raise ModelExtractionError("Gemini API 응답 형식이 올바르지 않습니다.")

    async def extract(self, pdf_buffer: bytes) -> str:
        if not self.api_key:
            raise ModelNotConfiguredError()
        if len(pdf_buffer) > settings.MAX_FILE_SIZE:
            raise FileTooLargeError(len(pdf_buffer), settings.MAX_FILE_SIZE)

        logger.info(f"Gemini API로 PDF 전송 ({len(pdf_buffer) / 1024 / 1024:.2f}MB, {self.model})")
        body = self._build_body(pdf_buffer)
        error = None

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            for attempt in range(self.max_retries):
                logger.info(f"Gemini API 호출 시도 {attempt + 1}/{self.max_retries}")
                try:
                    response = await client.post(
                        self.url, json=body, params={"key": self.api_key},
                        headers={"Content-Type": "application/json"},
                    )
                    if response.is_success:
                        text = self._response_text(self._response_json(response))
                        logger.debug(f"Gemini 응답 길이: {len(text)}")
                        return text
                    error = f"HTTP {response.status_code}: {response.text[:200]}"
                except httpx.TimeoutException:
                    error = f"요청 시간 초과 ({self.timeout}초)"
                except httpx.RequestError as e:
                    error = str(e)
                logger.warning(f"Gemini 시도 {attempt + 1} 실패: {error}")
                if attempt < self.max_retries - 1:
                    await asyncio.sleep(self.backoff_base ** (attempt + 1) if self.backoff_base else 0)

        logger.error(f"Gemini API 최종 실패: {error}")
        raise ModelExtractionError(f"Gemini API 호출 실패: {error}")
