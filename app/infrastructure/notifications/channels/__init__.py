"""Notification channel implementations."""

from infrastructure.notifications.channels.base import (
    ChatNotifier,
    EmailNotifier,
    NotificationChannel,
)
from infrastructure.notifications.channels.chat import ChatChannel
from infrastructure.notifications.channels.email import EmailChannel

__all__ = [
    "NotificationChannel",
    "ChatNotifier",
    "EmailNotifier",
    "ChatChannel",
    "EmailChannel",
]
