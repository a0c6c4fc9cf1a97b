#!/usr/bin/env python3
"""
Notification Channels

Channel implementations behind a single interface:
- NovuChannel: triggers a Novu workflow for the candidate (subscriber)
- WebhookChannel: POSTs a JSON payload to a configured URL
- LogChannel: dry-run channel that only logs

Usage:
    from notification.channels import NotificationChannelFactory

    channel = NotificationChannelFactory.get_channel('webhook', config)
    channel.send(recipient, subject, body, metadata)
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional
import logging
import urllib.parse

import requests

from core.config_loader import NotificationConfig

logger = logging.getLogger(__name__)


class RateLimitException(Exception):
    """Raised when a channel provider answers with HTTP 429."""

    def __init__(self, message: str, retry_after: Optional[int] = None):
        super().__init__(message)
        self.retry_after = retry_after


def _validate_webhook_url(url: str) -> bool:
    """Accept only absolute http(s) URLs with a hostname."""
    try:
        parsed = urllib.parse.urlparse(url)
    except ValueError:
        return False
    if parsed.scheme not in ('http', 'https'):
        logger.error(f"Invalid URL scheme: {parsed.scheme}")
        return False
    if not parsed.hostname:
        logger.error("URL missing hostname")
        return False
    return True


def _mask_recipient(recipient: str) -> str:
    """Mask a recipient identifier for safe logging."""
    if not recipient:
        return "***"
    if len(recipient) <= 4:
        return "***"
    return f"***{recipient[-4:]}"


def _raise_for_rate_limit(response: requests.Response, channel_type: str) -> None:
    if response.status_code == 429:
        retry_after = response.headers.get('Retry-After')
        raise RateLimitException(
            f"{channel_type} rate limited",
            retry_after=int(retry_after) if retry_after and retry_after.isdigit() else None
        )


class NotificationChannel(ABC):
    """
    Abstract base class for all notification channels.
    """

    @property
    @abstractmethod
    def channel_type(self) -> str:
        """Return the channel type identifier."""
        pass

    @abstractmethod
    def send(self, recipient: str, subject: str, body: str, metadata: Dict[str, Any]) -> bool:
        """
        Send a notification through this channel.

        Args:
            recipient: Target recipient (candidate id / subscriber id)
            subject: Notification subject/title
            body: Notification body
            metadata: Additional channel-specific metadata

        Returns:
            True if sent successfully, False otherwise

        Raises:
            RateLimitException: When the provider rate limits the request
            requests.RequestException: On transport or HTTP errors
        """
        pass

    def validate_config(self) -> bool:
        """
        Validate that the channel is properly configured.
        """
        return True


class LogChannel(NotificationChannel):
    """Dry-run channel: records the notification in the application log."""

    @property
    def channel_type(self) -> str:
        return 'log'

    def send(self, recipient: str, subject: str, body: str, metadata: Dict[str, Any]) -> bool:
        logger.info(f"[dry-run] Notification for {_mask_recipient(recipient)}: {subject}")
        return True


class WebhookChannel(NotificationChannel):
    """Generic JSON webhook channel."""

    def __init__(self, webhook_url: Optional[str] = None, timeout_seconds: int = 10):
        self.webhook_url = webhook_url
        self.timeout_seconds = timeout_seconds

    @property
    def channel_type(self) -> str:
        return 'webhook'

    def validate_config(self) -> bool:
        return bool(self.webhook_url) and _validate_webhook_url(self.webhook_url)

    def send(self, recipient: str, subject: str, body: str, metadata: Dict[str, Any]) -> bool:
        if not self.validate_config():
            logger.error("Webhook not configured - notifications.webhook_url not set or invalid")
            return False

        payload = {
            'recipient': recipient,
            'subject': subject,
            'body': body,
            'data': metadata.get('event_payload', {}),
        }

        response = requests.post(self.webhook_url, json=payload, timeout=self.timeout_seconds)
        _raise_for_rate_limit(response, self.channel_type)
        response.raise_for_status()

        logger.info(f"Webhook notification sent for {_mask_recipient(recipient)}")
        return True


class NovuChannel(NotificationChannel):
    """Novu workflow trigger; the candidate id is the Novu subscriber id."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_url: str = "https://api.novu.co/v1/events/trigger",
        workflow_id: str = "job-match-found",
        timeout_seconds: int = 10
    ):
        self.api_key = api_key
        self.api_url = api_url
        self.workflow_id = workflow_id
        self.timeout_seconds = timeout_seconds

    @property
    def channel_type(self) -> str:
        return 'novu'

    def validate_config(self) -> bool:
        return bool(self.api_key) and _validate_webhook_url(self.api_url)

    def send(self, recipient: str, subject: str, body: str, metadata: Dict[str, Any]) -> bool:
        if not self.validate_config():
            logger.error("Novu not configured - NOVU_API_KEY not set")
            return False

        payload = {
            'name': self.workflow_id,
            'to': {'subscriberId': recipient},
            'payload': metadata.get('event_payload', {}),
        }
        headers = {'Authorization': f'ApiKey {self.api_key}'}

        response = requests.post(self.api_url, json=payload, headers=headers, timeout=self.timeout_seconds)
        _raise_for_rate_limit(response, self.channel_type)
        response.raise_for_status()

        logger.info(f"Novu workflow '{self.workflow_id}' triggered for {_mask_recipient(recipient)}")
        return True


class NotificationChannelFactory:
    """Builds the configured channel."""

    _CHANNELS = ('novu', 'webhook', 'log')

    @classmethod
    def available_channels(cls):
        return list(cls._CHANNELS)

    @staticmethod
    def get_channel(channel_type: str, config: Optional[NotificationConfig] = None) -> NotificationChannel:
        config = config or NotificationConfig()
        channel_type = (channel_type or '').strip().lower()

        if channel_type == 'novu':
            return NovuChannel(
                api_key=config.novu_api_key,
                api_url=config.novu_api_url,
                workflow_id=config.novu_workflow_id,
                timeout_seconds=config.request_timeout_seconds
            )
        if channel_type == 'webhook':
            return WebhookChannel(
                webhook_url=config.webhook_url,
                timeout_seconds=config.request_timeout_seconds
            )
        if channel_type == 'log':
            return LogChannel()

        raise ValueError(f"Unsupported channel type: {channel_type}")
