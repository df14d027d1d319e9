"""Routers module - FastAPI route handlers"""

from . import config, editors, logs, selection

__all__ = ["config", "editors", "logs", "selection"]
