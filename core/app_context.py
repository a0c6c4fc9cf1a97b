import logging
from dataclasses import dataclass
from typing import Optional

from core.config_loader import AppConfig, LlmConfig, NotificationConfig
from core.llm.openai_service import OpenAIService
from core.matcher.matching_service import MatchingService
from core.matcher.service import MatchOrchestrator
from core.scorer.ai_scorer import AIAssistedScorer
from core.scorer.service import RuleBasedScorer
from notification.service import NotificationService
from stores.base import JobStore, ProfileStore
from stores.memory import InMemoryJobStore, InMemoryProfileStore, load_seed_data

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Application context container that holds all wired dependencies.

    Single source of truth for service instantiation, shared by the web
    backend and the CLI.
    """
    config: AppConfig
    ai_service: OpenAIService
    rule_scorer: RuleBasedScorer
    ai_scorer: AIAssistedScorer
    orchestrator: MatchOrchestrator
    matching_service: MatchingService
    notification_service: Optional[NotificationService] = None

    @classmethod
    def build(
        cls,
        config: AppConfig,
        profile_store: Optional[ProfileStore] = None,
        job_store: Optional[JobStore] = None
    ) -> "AppContext":
        """Build an AppContext from config.

        Args:
            config: Loaded application configuration
            profile_store: Profile store override (defaults to the seeded in-memory store)
            job_store: Job store override (defaults to the seeded in-memory store)

        Returns:
            Fully wired AppContext instance
        """
        # Stores
        if profile_store is None or job_store is None:
            seeded_profiles, seeded_jobs = cls._build_stores(config)
            if profile_store is None:
                profile_store = seeded_profiles
            if job_store is None:
                job_store = seeded_jobs

        # Scorers
        rule_scorer = RuleBasedScorer(config.matching.scorer)
        ai_service = cls._build_ai_service(config.llm)
        ai_scorer = AIAssistedScorer(ai_service, rule_scorer)
        if ai_scorer.is_available():
            logger.info(f"AI-assisted scoring enabled (model: {ai_service.scoring_model})")
        else:
            logger.info("AI-assisted scoring unavailable; using rule-based scoring")

        # Notification Service (lazy - only if enabled)
        notification_service = cls._build_notification_service(config.notifications)

        orchestrator = MatchOrchestrator(
            rule_scorer=rule_scorer,
            ai_scorer=ai_scorer,
            gateway=notification_service,
            config=config.matching,
            notification_config=config.notifications
        )
        matching_service = MatchingService(profile_store, job_store, orchestrator)

        return cls(
            config=config,
            ai_service=ai_service,
            rule_scorer=rule_scorer,
            ai_scorer=ai_scorer,
            orchestrator=orchestrator,
            matching_service=matching_service,
            notification_service=notification_service
        )

    def shutdown(self) -> None:
        """Drain queued notifications."""
        if self.notification_service is not None:
            self.notification_service.shutdown(wait=True)

    @staticmethod
    def _build_stores(config: AppConfig):
        if config.data_file:
            return load_seed_data(config.data_file)
        logger.warning("No data_file configured; starting with empty stores")
        return InMemoryProfileStore(), InMemoryJobStore()

    @staticmethod
    def _build_ai_service(llm_config: LlmConfig) -> OpenAIService:
        """Build OpenAI service from LLM configuration."""
        model_config = {
            'scoring_model': llm_config.scoring_model,
            'scoring_temperature': llm_config.scoring_temperature,
            'request_timeout_seconds': llm_config.request_timeout_seconds,
            'max_attempts': llm_config.max_attempts,
        }

        return OpenAIService(
            api_key=llm_config.api_key,
            base_url=llm_config.base_url,
            model_config=model_config,
            enabled=llm_config.enabled
        )

    @staticmethod
    def _build_notification_service(
        notification_config: NotificationConfig
    ) -> Optional[NotificationService]:
        """Build notification service if enabled in config."""
        if not notification_config or not notification_config.enabled:
            return None
        return NotificationService.from_config(notification_config)
