"""
Invitation animation package
"""

from .scene import Material, PlaneGeometry, SceneArena, SceneNode, Texture, Vector3
from .trifold import TriFoldOptions, TriFoldPaper, ease_in_out_cubic

__all__ = [
    "Material",
    "PlaneGeometry",
    "SceneArena",
    "SceneNode",
    "Texture",
    "Vector3",
    "TriFoldOptions",
    "TriFoldPaper",
    "ease_in_out_cubic"
]
