#!/usr/bin/env python3
"""
Notification Service - the messaging gateway for top-match notifications.

Sending is fire-and-forget: in async mode the send is handed to a single
background worker and notify_top_match() returns at once; in sync mode it
runs inline. Either way channel failures are logged and swallowed, so a
notification problem never reaches the caller of the matching engine.

Usage:
    from notification.service import NotificationService

    service = NotificationService.from_config(config.notifications)
    service.notify_top_match(MatchNotification(
        candidate_id="user-123",
        job_id="job-456",
        score=88,
        job_title="ICU Nurse",
        facility_name="St. Mary's"
    ))
"""

import logging
import uuid
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Dict, Any

from core.config_loader import NotificationConfig
from notification.channels import NotificationChannel, NotificationChannelFactory, RateLimitException
from notification.message_builder import MatchNotification, NotificationMessageBuilder
from notification.tracker import NotificationTracker

logger = logging.getLogger(__name__)


class MessagingGateway(ABC):
    """
    Outbound notification boundary used by the match orchestrator.
    """

    @abstractmethod
    def notify_top_match(self, notification: MatchNotification) -> Optional[str]:
        """
        Dispatch a top-match notification without waiting for delivery.

        Returns:
            Notification ID if dispatched, None if suppressed
        """
        pass


class NotificationService(MessagingGateway):
    """
    Messaging gateway backed by a NotificationChannel.

    This service coordinates:
    1. Optional deduplication (via NotificationTracker)
    2. Message building (via NotificationMessageBuilder)
    3. Background or inline delivery through the channel
    """

    def __init__(
        self,
        channel: NotificationChannel,
        base_url: Optional[str] = None,
        use_async_queue: bool = True,
        tracker: Optional[NotificationTracker] = None
    ):
        """
        Initialize notification service.

        Args:
            channel: Channel used for delivery
            base_url: Base URL for job links in notification bodies
            use_async_queue: Send from a background worker instead of inline
            tracker: Optional deduplication tracker (None disables deduplication)
        """
        self.channel = channel
        self.base_url = base_url
        self.tracker = tracker
        self.async_mode = use_async_queue

        if use_async_queue:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="notification")
        else:
            logger.info("Async queue disabled via config. Using sync mode.")
            self._executor = None

    @classmethod
    def from_config(cls, config: NotificationConfig) -> "NotificationService":
        """Build the service and its channel from NotificationConfig."""
        channel = NotificationChannelFactory.get_channel(config.channel, config)
        if not channel.validate_config():
            logger.warning(f"Notification channel '{channel.channel_type}' is not fully configured")

        tracker = None
        if config.deduplication_enabled:
            tracker = NotificationTracker(resend_interval_hours=config.resend_interval_hours)

        return cls(
            channel=channel,
            base_url=config.base_url,
            use_async_queue=config.use_async_queue,
            tracker=tracker
        )

    def notify_top_match(self, notification: MatchNotification) -> Optional[str]:
        """
        Send a top-match notification, deduplicated when a tracker is set.

        Returns:
            Notification ID if sent/queued, None if suppressed or not dispatched
        """
        if self.tracker is not None and not self.tracker.should_send(notification.dedup_key):
            return None

        notification_id = str(uuid.uuid4())
        notification_data = {
            'notification_id': notification_id,
            'recipient': notification.candidate_id,
            'subject': NotificationMessageBuilder.build_subject(notification),
            'body': NotificationMessageBuilder.build_body(notification, self.base_url),
            'metadata': {
                'event_payload': NotificationMessageBuilder.build_event_payload(notification),
                'job_id': notification.job_id,
                'score': notification.score,
            },
            'dedup_key': notification.dedup_key,
        }

        if self.async_mode:
            try:
                self._executor.submit(process_notification_task, self.channel, notification_data, self.tracker)
            except RuntimeError as e:
                # Executor already shut down
                logger.error(f"Failed to queue notification {notification_id}: {e}")
                return None
            logger.info(f"Queued notification {notification_id} via {self.channel.channel_type}")
        else:
            process_notification_task(self.channel, notification_data, self.tracker)

        return notification_id

    def shutdown(self, wait: bool = True) -> None:
        """Stop the background worker, optionally draining queued sends."""
        if self._executor is not None:
            self._executor.shutdown(wait=wait)


def process_notification_task(
    channel: NotificationChannel,
    notification_data: Dict[str, Any],
    tracker: Optional[NotificationTracker] = None
) -> bool:
    """
    Deliver one notification. Never raises.

    Returns:
        True if the channel reported success
    """
    notification_id = notification_data['notification_id']
    logger.info(f"Processing notification {notification_id} via {channel.channel_type}")

    try:
        success = channel.send(
            notification_data['recipient'],
            notification_data['subject'],
            notification_data['body'],
            notification_data.get('metadata', {})
        )
    except RateLimitException as e:
        logger.error(
            f"Notification {notification_id} rate limited by {channel.channel_type} "
            f"(retry after {e.retry_after or 'unknown'}s); not retrying"
        )
        return False
    except Exception as e:
        logger.error(f"Failed to process notification {notification_id}: {e}", exc_info=True)
        return False

    if success:
        logger.info(f"Notification {notification_id} sent successfully")
        if tracker is not None:
            tracker.record(notification_data['dedup_key'])
    else:
        logger.error(f"Notification {notification_id} failed to send")

    return success
