"""Gemini 모델 추출 인프라"""
from infrastructure.gemini.client import GeminiClient
