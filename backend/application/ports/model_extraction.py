"""외부 모델 추출 포트 인터페이스"""
from abc import ABC, abstractmethod


class ModelExtractionPort(ABC):
    @abstractmethod
    async def extract(self, pdf_buffer: bytes) -> str:
        """PDF를 모델에 보내고 응답 텍스트(JSON 후보)를 반환"""
        ...
