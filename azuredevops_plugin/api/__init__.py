"""FastAPI surface of the plugin."""

from .main import create_app

__all__ = ["create_app"]
