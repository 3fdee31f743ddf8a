"""
Notifications Package

This package contains the outbound notification sinks:
- base: sink interface, null sink and the shared HTTP delivery logic
- sinks: Discord, Slack and Telegram destinations
"""

from levanta_webhook.config import Settings
from levanta_webhook.notifications.base import (
    HTTPNotificationSink,
    NotificationError,
    NotificationSink,
    NullSink,
)
from levanta_webhook.notifications.sinks import DiscordSink, SlackSink, TelegramSink


def build_notification_sink(settings: Settings) -> NotificationSink:
    """
    Pick the sink from configuration, first configured one wins.

    Order: Discord, Slack, Telegram, then no sink at all.
    """
    timeout = settings.notification_timeout

    if settings.discord_webhook_url:
        return DiscordSink(settings.discord_webhook_url, timeout=timeout)
    if settings.slack_webhook_url:
        return SlackSink(settings.slack_webhook_url, timeout=timeout)
    if settings.telegram_configured:
        return TelegramSink(
            settings.telegram_bot_token,
            settings.telegram_chat_id,
            timeout=timeout
        )
    return NullSink()


__all__ = [
    "build_notification_sink",
    "DiscordSink",
    "HTTPNotificationSink",
    "NotificationError",
    "NotificationSink",
    "NullSink",
    "SlackSink",
    "TelegramSink",
]
