"""
Pytest configuration and fixtures.

This file provides pytest-specific configuration and fixtures.
For standard test utilities, see tests/__init__.py
"""

from unittest.mock import MagicMock

import pytest

from core.config_loader import MatchingConfig, NotificationConfig
from core.matcher.service import MatchOrchestrator
from core.scorer.service import RuleBasedScorer
from notification.service import MessagingGateway


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Keep developer credentials out of config-driven tests."""
    for key in (
        "OPENAI_API_KEY", "LLM_BASE_URL", "LLM_SCORING_MODEL", "NOVU_API_KEY",
        "NOTIFICATION_WEBHOOK_URL", "MATCHING_MAX_WORKERS", "NURSEMATCH_DATA_FILE",
        "NURSEMATCH_CONFIG", "WEB_HOST", "WEB_PORT",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def rule_scorer():
    return RuleBasedScorer()


@pytest.fixture
def gateway():
    """Messaging gateway double that records notify_top_match calls."""
    return MagicMock(spec=MessagingGateway)


@pytest.fixture
def orchestrator(rule_scorer, gateway):
    """Rule-based orchestrator with a mock gateway."""
    return MatchOrchestrator(
        rule_scorer=rule_scorer,
        gateway=gateway,
        config=MatchingConfig(max_workers=4),
        notification_config=NotificationConfig()
    )
