"""Notify module for sending templated emails through the GC Notify API."""

from .client import (
    epoch_seconds,
    create_jwt_token,
    create_authorization_header,
    NotifyClient,
)
from .email import NotifyEmailNotifier

__all__ = [
    "epoch_seconds",
    "create_jwt_token",
    "create_authorization_header",
    "NotifyClient",
    "NotifyEmailNotifier",
]
