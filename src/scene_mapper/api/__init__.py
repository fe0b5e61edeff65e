"""HTTP API for Scene Mapper."""

from scene_mapper.api.main import app, create_app

__all__ = ["app", "create_app"]
