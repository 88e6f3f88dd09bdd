"""Slack Integration Package.

Contains the incoming webhook notifier used by the chat notification channel.
"""

from .webhook import SlackWebhookNotifier

__all__ = ["SlackWebhookNotifier"]
