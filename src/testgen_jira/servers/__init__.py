"""HTTP facade for testgen-jira."""

from .app import create_app
from .registry import ConnectionRegistry

__all__ = ["create_app", "ConnectionRegistry"]
