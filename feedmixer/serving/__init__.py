"""HTTP serving layer."""

from .api import create_app
from .responses import build_envelope, compose_response, render_envelope

__all__ = ["build_envelope", "compose_response", "create_app", "render_envelope"]
