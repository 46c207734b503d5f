"""Notifications API package."""

from notifier.api.routes import router

__all__ = ["router"]
