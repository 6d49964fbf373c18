"""HTTP surface for the live TV backend."""

from arguslive.api.app import app, create_app

__all__ = ["app", "create_app"]
