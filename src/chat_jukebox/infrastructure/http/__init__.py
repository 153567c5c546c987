"""HTTP API built on FastAPI."""

from chat_jukebox.infrastructure.http.app import create_app

__all__ = ["create_app"]
