import yaml
import os
import logging
from typing import Optional, Dict, Any
from pydantic import BaseModel, Field, model_validator

logger = logging.getLogger(__name__)


class LlmConfig(BaseModel):
    """Generative scoring provider settings (any OpenAI-compatible endpoint)."""
    enabled: bool = True
    base_url: Optional[str] = None
    api_key: Optional[str] = None
    scoring_model: str = "gpt-4o-mini"
    scoring_temperature: float = 0.0  # 0.0 = as deterministic as the provider allows
    request_timeout_seconds: float = Field(default=15.0, gt=0)
    max_attempts: int = Field(default=2, ge=1)  # Only rate-limit/connection errors are retried


class ScorerConfig(BaseModel):
    """
    Configuration for the RuleBasedScorer.

    The four component weights form the score budget and must sum to 100.
    """
    weight_certifications: float = Field(default=40.0, ge=0)
    weight_skills: float = Field(default=30.0, ge=0)
    weight_experience: float = Field(default=20.0, ge=0)
    weight_affinity: float = Field(default=10.0, ge=0)

    @model_validator(mode="after")
    def _check_budget(self) -> "ScorerConfig":
        total = (
            self.weight_certifications
            + self.weight_skills
            + self.weight_experience
            + self.weight_affinity
        )
        if abs(total - 100.0) > 1e-6:
            raise ValueError(f"Scorer weights must sum to 100, got {total}")
        return self


class MatchingConfig(BaseModel):
    """
    Top-level matching configuration.
    """
    max_workers: int = Field(default=4, ge=1)  # Fan-out cap per candidate
    scorer: ScorerConfig = Field(default_factory=ScorerConfig)


class NotificationConfig(BaseModel):
    """
    Configuration for the top-match notification.
    """
    enabled: bool = True
    min_score_threshold: float = 70.0  # Notify when the top match reaches this score

    # Channel: "novu", "webhook" or "log"
    channel: str = "log"
    webhook_url: Optional[str] = None
    novu_api_key: Optional[str] = None
    novu_api_url: str = "https://api.novu.co/v1/events/trigger"
    novu_workflow_id: str = "job-match-found"
    request_timeout_seconds: int = 10
    base_url: Optional[str] = None  # Base URL for job links in notification bodies

    # Send from a background worker instead of inline
    use_async_queue: bool = True

    # Cool-down per (candidate, job); off unless explicitly enabled
    deduplication_enabled: bool = False
    resend_interval_hours: int = 24


class WebConfig(BaseModel):
    """Web server configuration."""
    host: str = "0.0.0.0"
    port: int = 8080


class AppConfig(BaseModel):
    llm: LlmConfig = Field(default_factory=LlmConfig)
    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    notifications: NotificationConfig = Field(default_factory=NotificationConfig)
    web: WebConfig = Field(default_factory=WebConfig)
    data_file: Optional[str] = None  # YAML seed for the in-memory stores


def _set_nested(data: Dict[str, Any], section: str, key: str, value: Any) -> None:
    if section not in data or data[section] is None:
        data[section] = {}
    data[section][key] = value


def _apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    """Apply environment variable overrides to the raw configuration."""
    env_api_key = os.environ.get("OPENAI_API_KEY")
    if env_api_key:
        _set_nested(data, "llm", "api_key", env_api_key)

    env_llm_base_url = os.environ.get("LLM_BASE_URL")
    if env_llm_base_url:
        _set_nested(data, "llm", "base_url", env_llm_base_url)

    env_scoring_model = os.environ.get("LLM_SCORING_MODEL")
    if env_scoring_model:
        _set_nested(data, "llm", "scoring_model", env_scoring_model)

    env_novu_key = os.environ.get("NOVU_API_KEY")
    if env_novu_key:
        _set_nested(data, "notifications", "novu_api_key", env_novu_key)

    env_webhook_url = os.environ.get("NOTIFICATION_WEBHOOK_URL")
    if env_webhook_url:
        _set_nested(data, "notifications", "webhook_url", env_webhook_url)

    env_max_workers = os.environ.get("MATCHING_MAX_WORKERS")
    if env_max_workers:
        _set_nested(data, "matching", "max_workers", int(env_max_workers))

    env_data_file = os.environ.get("NURSEMATCH_DATA_FILE")
    if env_data_file:
        data["data_file"] = env_data_file

    if "WEB_HOST" in os.environ:
        _set_nested(data, "web", "host", os.environ["WEB_HOST"])

    if "WEB_PORT" in os.environ:
        _set_nested(data, "web", "port", int(os.environ["WEB_PORT"]))

    return data


def load_config(config_path: str = "config.yaml") -> AppConfig:
    # If not found at relative path (e.g. running from another directory), try project root
    if not os.path.exists(config_path):
        base_dir = os.path.dirname(os.path.abspath(__file__))
        config_path = os.path.join(base_dir, "..", "config.yaml")

    data: Dict[str, Any] = {}
    if os.path.exists(config_path):
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}
    else:
        logger.info("No config.yaml found, using defaults")

    data = _apply_env_overrides(data)

    # Relative seed paths are resolved against the config file location
    data_file = data.get("data_file")
    if data_file and not os.path.isabs(data_file) and not os.path.exists(data_file):
        data["data_file"] = os.path.join(os.path.dirname(os.path.abspath(config_path)), data_file)

    return AppConfig(**data)
