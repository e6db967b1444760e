"""Flask JSON API for playing against the computer in a browser."""

from .app import create_app

__all__ = ["create_app"]
