"""LLM Module - generative scoring providers and interfaces."""
from core.llm.interfaces import (
    ScoringProvider,
    ScoringProviderError,
    ProviderTimeoutError,
    MalformedProviderResponseError,
)
from core.llm.openai_service import OpenAIService

__all__ = [
    'ScoringProvider',
    'ScoringProviderError',
    'ProviderTimeoutError',
    'MalformedProviderResponseError',
    'OpenAIService',
]
