"""
API route modules.
"""

from scene_mapper.api.routes import scenes

__all__ = ["scenes"]
