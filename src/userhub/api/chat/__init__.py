"""Broadcast chat channel."""

from userhub.api.chat.registry import BroadcastRelay, ConnectionRegistry

__all__ = ["BroadcastRelay", "ConnectionRegistry"]
