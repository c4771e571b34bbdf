"""
Minimal scene graph stored as an arena of nodes.

Nodes reference their parent by index instead of holding child objects, so
releasing a subtree is a walk over indices and every geometry, material and
texture is released exactly once.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Protocol, Sequence, Tuple


@dataclass
class Vector3:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass
class Disposable:
    disposed: bool = field(default=False, init=False)

    def dispose(self) -> None:
        self.disposed = True


@dataclass
class PlaneGeometry(Disposable):
    width: float = 1.0
    height: float = 1.0


@dataclass
class Texture(Disposable):
    source: str = ""
    # (x, y, width, height) region of the source image
    crop: Optional[Tuple[float, float, float, float]] = None


@dataclass
class Material(Disposable):
    color: int = 0xFFFFFF
    opacity: float = 1.0
    transparent: bool = False
    side: str = "front"
    texture: Optional[Texture] = None
    depth_write: bool = True
    blending: str = "normal"
    flat_shading: bool = False

    def clone(self) -> "Material":
        cloned = copy.copy(self)
        cloned.disposed = False
        return cloned

    def dispose(self) -> None:
        if self.texture is not None:
            self.texture.dispose()
        super().dispose()


@dataclass
class SceneNode:
    name: str
    parent: Optional[int] = None
    position: Vector3 = field(default_factory=Vector3)
    rotation: Vector3 = field(default_factory=Vector3)
    scale: Vector3 = field(default_factory=lambda: Vector3(1.0, 1.0, 1.0))
    geometry: Optional[PlaneGeometry] = None
    material: Optional[Material] = None

    @property
    def is_mesh(self) -> bool:
        return self.geometry is not None


class Raycaster(Protocol):
    """Anything that can hit-test nodes of an arena"""

    def intersect_objects(
        self, arena: "SceneArena", indices: Sequence[int], recursive: bool = False
    ) -> list:
        ...


class SceneArena:
    """Owns every node; released slots stay ``None`` so indices remain stable"""

    def __init__(self):
        self._slots: List[Optional[SceneNode]] = []

    def __len__(self) -> int:
        return sum(1 for node in self._slots if node is not None)

    def add(self, node: SceneNode, parent: Optional[int] = None) -> int:
        if parent is not None:
            self.get(parent)
        node.parent = parent
        self._slots.append(node)
        return len(self._slots) - 1

    def get(self, index: int) -> SceneNode:
        if index < 0 or index >= len(self._slots) or self._slots[index] is None:
            raise KeyError(f"No live scene node at index {index}")
        return self._slots[index]

    def is_live(self, index: int) -> bool:
        return 0 <= index < len(self._slots) and self._slots[index] is not None

    def children(self, index: int) -> List[int]:
        return [
            i for i, node in enumerate(self._slots)
            if node is not None and node.parent == index
        ]

    def descendants(self, index: int) -> Iterator[int]:
        """Depth-first walk below ``index``"""
        for child in self.children(index):
            yield child
            yield from self.descendants(child)

    def release(self, index: int) -> None:
        """Release a node and its subtree, disposing their GPU-side resources"""
        for child in list(self.descendants(index)) + [index]:
            node = self._slots[child]
            if node is None:
                continue
            if node.geometry is not None and not node.geometry.disposed:
                node.geometry.dispose()
            if node.material is not None and not node.material.disposed:
                node.material.dispose()
            self._slots[child] = None

    def dispose(self) -> None:
        for index, node in enumerate(self._slots):
            if node is not None:
                self.release(index)
