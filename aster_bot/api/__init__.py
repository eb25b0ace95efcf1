"""Status API: read-only reporting and stop/close commands."""

from aster_bot.api.server import create_app, serve_in_background

__all__ = ["create_app", "serve_in_background"]
