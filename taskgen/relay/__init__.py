"""Webhook relay package."""

from .webhook import RelayResponse, WebhookRelay

__all__ = ["RelayResponse", "WebhookRelay"]
