"""
Notification Module

Messaging gateway for top-match notifications, with pluggable channels and
optional deduplication.

Usage:
    from notification import NotificationService, MatchNotification

    service = NotificationService.from_config(config.notifications)
    service.notify_top_match(MatchNotification(
        candidate_id='user123',
        job_id='job456',
        score=85,
        job_title='ICU Nurse',
        facility_name='General Hospital'
    ))
"""

from notification.channels import (
    NotificationChannel,
    NovuChannel,
    WebhookChannel,
    LogChannel,
    NotificationChannelFactory,
    RateLimitException,
)

from notification.tracker import NotificationTracker

from notification.message_builder import (
    MatchNotification,
    NotificationMessageBuilder,
)

from notification.service import (
    MessagingGateway,
    NotificationService,
    process_notification_task,
)

__all__ = [
    # Channels
    'NotificationChannel',
    'NovuChannel',
    'WebhookChannel',
    'LogChannel',
    'NotificationChannelFactory',
    'RateLimitException',
    # Tracker
    'NotificationTracker',
    # Messages
    'MatchNotification',
    'NotificationMessageBuilder',
    # Service
    'MessagingGateway',
    'NotificationService',
    'process_notification_task',
]
