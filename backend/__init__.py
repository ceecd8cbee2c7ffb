"""Backend package exposing the Stockpile FastAPI application."""

from .main import app

__all__ = ["app"]
