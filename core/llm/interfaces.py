"""
LLM Provider Interface - Abstract base for generative scoring providers.

This module defines the interface for compatibility-scoring services (OpenAI,
Ollama or any OpenAI-compatible endpoint) and the errors they raise.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict


class ScoringProviderError(Exception):
    """Base error for a failed provider call (quota, auth, server error)."""
    pass


class ProviderTimeoutError(ScoringProviderError):
    """The provider did not answer within the per-call timeout."""
    pass


class MalformedProviderResponseError(ScoringProviderError):
    """The provider answered, but the body could not be read as a JSON object."""
    pass


class ScoringProvider(ABC):
    """
    Abstract Interface for generative compatibility-scoring providers.
    """

    @abstractmethod
    def is_available(self) -> bool:
        """
        Capability flag: True when the provider is configured (e.g. a credential is present).
        """
        pass

    @abstractmethod
    def request_compatibility(self, profile_summary: str, job_summary: str) -> Dict[str, Any]:
        """
        Ask the provider for a holistic compatibility judgment.

        Args:
            profile_summary: Serialized candidate summary (no identifiers)
            job_summary: Serialized job summary

        Returns:
            Parsed JSON object, expected to carry a numeric 'compatibility_score'

        Raises:
            ScoringProviderError: On timeout, transport, quota or parse failure
        """
        pass
