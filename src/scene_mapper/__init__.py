"""
Scene Mapper: Forensic Scene Interpretation and Rendering

This package turns free-form crime scene descriptions into a structured
scene graph of elements and relations, and drives the animated, filterable
presentation of that graph.
"""

__version__ = "0.1.0"
__author__ = "Scene Mapper Team"

from scene_mapper.config import get_settings

__all__ = ["get_settings", "__version__"]
