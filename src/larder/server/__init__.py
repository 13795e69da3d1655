"""ASGI application factory and dependencies for the Larder server."""

from larder.server.app import app, create_app

__all__ = ["app", "create_app"]
