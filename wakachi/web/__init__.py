"""FastAPI application exposing tokenization over HTTP."""

from .app import create_app
from .state import ServiceState, build_state

__all__ = ["create_app", "ServiceState", "build_state"]
