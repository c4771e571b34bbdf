"""
Letter-style tri-fold paper used for the animated invitation.

The paper is three panels: a center panel and two side panels hinged on its
edges. A single ``fold_progress`` value (0 open, 1 closed) drives the panel
angles, the gap between the folded layers and the opacity of the drop and
crease shadows. The host render loop owns the timing: after ``toggle_fold``
it calls ``advance(now)`` once per frame until it returns False.
"""

from __future__ import annotations

import logging
import math
import time
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from .scene import (
    Material,
    PlaneGeometry,
    Raycaster,
    SceneArena,
    SceneNode,
    Texture,
    Vector3,
)

logger = logging.getLogger(__name__)

DROP_SHADOW_MAX_OPACITY = 0.15
CREASE_MIN_OPACITY = 0.0
CREASE_MAX_OPACITY = 0.6
RIGHT_PANEL_Z_BIAS = 0.002
DEFAULT_SEAL_PIXELS = 512.0


def ease_in_out_cubic(t: float) -> float:
    if t < 0.5:
        return 4 * t * t * t
    return 1 - math.pow(-2 * t + 2, 3) / 2


def _monotonic_ms() -> float:
    return time.perf_counter() * 1000.0


@dataclass
class TriFoldOptions:
    width: float = 2.0
    height: float = 3.0
    fold_duration: float = 1000.0  # ms
    front_color: int = 0xFFFFFF
    back_color: int = 0xF5F5F0
    center_ratio: float = 2.0
    fold_gap: float = 0.015
    rest_angle: float = 0.0


class TriFoldPaper:
    def __init__(
        self,
        options: Optional[TriFoldOptions] = None,
        clock: Callable[[], float] = _monotonic_ms,
    ):
        self.options = options or TriFoldOptions()
        self.clock = clock

        self.is_folded = False
        self.is_animating = False
        self.fold_progress = 0.0
        self.target_progress = 0.0
        self.animation_start_time: Optional[float] = None
        self.animation_start_progress = 0.0
        self.disposed = False

        self.side_width = self.options.width / (2 + self.options.center_ratio)
        self.center_width = self.side_width * self.options.center_ratio

        self.arena = SceneArena()
        self.root = self.arena.add(SceneNode("paper"))
        self.seal_left_half: Optional[int] = None
        self.seal_right_half: Optional[int] = None
        self.seal_size: Optional[float] = None
        self._click_callback: Optional[Callable[[], None]] = None

        self._create_panels()
        self._create_shadows()

    # -------- construction --------

    def _mesh(self, name, parent, geometry, material, x=0.0, z=0.0) -> int:
        return self.arena.add(
            SceneNode(name, position=Vector3(x, 0.0, z), geometry=geometry, material=material),
            parent,
        )

    def _create_panels(self) -> None:
        side_geometry = PlaneGeometry(self.side_width, self.options.height)
        center_geometry = PlaneGeometry(self.center_width, self.options.height)
        front = Material(color=self.options.front_color, side="front", flat_shading=True)
        back = Material(color=self.options.back_color, side="back", flat_shading=True)

        # Side groups pivot on the hinge shared with the center panel
        self.left_panel_group = self.arena.add(
            SceneNode("left-group", position=Vector3(-self.center_width / 2)), self.root
        )
        self.left_panel = self._mesh("left-front", self.left_panel_group, side_geometry, front,
                                     x=-self.side_width / 2)
        self.left_panel_back = self._mesh("left-back", self.left_panel_group, side_geometry, back,
                                          x=-self.side_width / 2)

        self.center_panel = self._mesh("center-front", self.root, center_geometry, front.clone())
        self.center_panel_back = self._mesh("center-back", self.root, center_geometry, back.clone())

        self.right_panel_group = self.arena.add(
            SceneNode("right-group", position=Vector3(self.center_width / 2)), self.root
        )
        self.right_panel = self._mesh("right-front", self.right_panel_group, side_geometry,
                                      front.clone(), x=self.side_width / 2)
        self.right_panel_back = self._mesh("right-back", self.right_panel_group, side_geometry,
                                           back.clone(), x=self.side_width / 2)

    def _create_shadows(self) -> None:
        shadow = Material(color=0x000000, transparent=True, opacity=0.0, depth_write=False)
        offset = self.center_width / 2 - self.side_width / 2

        # Drop shadows cast by the side panels onto the center panel
        self.left_shadow = self._mesh(
            "left-shadow", self.root, PlaneGeometry(self.side_width, self.options.height),
            shadow.clone(), x=-offset, z=0.001,
        )
        self.right_shadow = self._mesh(
            "right-shadow", self.root, PlaneGeometry(self.side_width, self.options.height),
            shadow.clone(), x=offset, z=0.001,
        )

        # Crease shadows: narrow gradient strips on both sides of each hinge
        crease_width = self.side_width * 0.001
        crease_geometry = PlaneGeometry(crease_width, self.options.height)
        crease = Material(
            transparent=True,
            opacity=0.0,
            depth_write=False,
            blending="multiply",
            texture=Texture(source="crease-gradient"),
        )

        self.crease_center_left = self._mesh(
            "crease-center-left", self.root, crease_geometry, crease.clone(),
            x=-self.center_width / 2 + crease_width / 2, z=0.002,
        )
        self._flip_gradient(self.crease_center_left)
        self.crease_left_panel = self._mesh(
            "crease-left-panel", self.left_panel_group, crease_geometry, crease.clone(),
            x=-crease_width / 2, z=0.002,
        )
        self.crease_center_right = self._mesh(
            "crease-center-right", self.root, crease_geometry, crease.clone(),
            x=self.center_width / 2 - crease_width / 2, z=0.002,
        )
        self.crease_right_panel = self._mesh(
            "crease-right-panel", self.right_panel_group, crease_geometry, crease.clone(),
            x=crease_width / 2, z=0.002,
        )
        self._flip_gradient(self.crease_right_panel)

        self.crease_shadows = [
            self.crease_center_left,
            self.crease_left_panel,
            self.crease_center_right,
            self.crease_right_panel,
        ]

    def _flip_gradient(self, index: int) -> None:
        node = self.arena.get(index)
        node.rotation.z = math.pi
        node.scale.x = -1.0

    # -------- seal --------

    @staticmethod
    def _svg_pixels(root: ET.Element) -> Tuple[float, float]:
        def parse(value):
            if not value:
                return None
            value = value.strip().lower().removesuffix("px")
            try:
                number = float(value)
            except ValueError:
                return None
            return number if number > 0 else None

        width = parse(root.get("width"))
        height = parse(root.get("height"))
        view_box = root.get("viewBox")
        if (width is None or height is None) and view_box:
            parts = view_box.replace(",", " ").split()
            if len(parts) == 4:
                width = width or parse(parts[2])
                height = height or parse(parts[3])
        return width or DEFAULT_SEAL_PIXELS, height or DEFAULT_SEAL_PIXELS

    def set_seal(self, svg_path, size: float = 1.0) -> bool:
        """Attach a wax seal split in two halves, one on each side panel.

        When the paper folds the halves meet over the center panel.
        """
        if self.disposed:
            return False

        try:
            svg_root = ET.fromstring(Path(svg_path).read_text(encoding="utf-8"))
        except (OSError, ET.ParseError) as e:
            logger.error(f"Failed to load seal {svg_path}: {e}")
            return False

        image_width, image_height = self._svg_pixels(svg_root)
        half_pixels = image_width / 2
        half_width = size / 2

        for index in (self.seal_left_half, self.seal_right_half):
            if index is not None and self.arena.is_live(index):
                self.arena.release(index)

        self.seal_size = size
        halves = (
            (self.left_panel_group, 0.0, half_width / 2 - self.center_width / 2),
            (self.right_panel_group, half_pixels, self.center_width / 2 - half_width / 2),
        )
        indices = []
        for parent, crop_x, x in halves:
            material = Material(
                transparent=True,
                side="double",
                texture=Texture(source=str(svg_path), crop=(crop_x, 0.0, half_pixels, image_height)),
            )
            index = self._mesh("seal", parent, PlaneGeometry(half_width, size), material, x=x, z=-0.01)
            self.arena.get(index).rotation.y = math.pi
            indices.append(index)

        self.seal_left_half, self.seal_right_half = indices
        return True

    # -------- folding --------

    def toggle_fold(self, now: Optional[float] = None) -> bool:
        """Start a transition to the opposite state; ignored while one is running"""
        if self.is_animating:
            return False

        self.is_folded = not self.is_folded
        self.target_progress = 1.0 if self.is_folded else 0.0
        self.animation_start_time = self.clock() if now is None else now
        self.animation_start_progress = self.fold_progress
        self.is_animating = True

        self.advance(self.animation_start_time)
        return True

    def fold(self, now: Optional[float] = None) -> bool:
        if self.is_folded or self.is_animating:
            return False
        return self.toggle_fold(now)

    def unfold(self, now: Optional[float] = None) -> bool:
        if not self.is_folded or self.is_animating:
            return False
        return self.toggle_fold(now)

    def advance(self, now: Optional[float] = None) -> bool:
        """Step the running transition; returns whether it is still animating"""
        if not self.is_animating:
            return False

        now = self.clock() if now is None else now
        elapsed = now - self.animation_start_time
        duration = self.options.fold_duration

        t = 1.0 if duration <= 0 else min(max(elapsed / duration, 0.0), 1.0)
        eased = ease_in_out_cubic(t)
        self.fold_progress = (
            self.animation_start_progress
            + (self.target_progress - self.animation_start_progress) * eased
        )

        if elapsed >= duration:
            self.fold_progress = self.target_progress
            self.is_animating = False

        self._apply_fold_transform()
        return self.is_animating

    def set_fold_progress(self, progress: float) -> None:
        """Jump to a fold state without animating"""
        self.fold_progress = max(0.0, min(1.0, progress))
        self._apply_fold_transform()
        self.is_folded = progress >= 1

    @property
    def left_rotation(self) -> float:
        return self.arena.get(self.left_panel_group).rotation.y

    @property
    def right_rotation(self) -> float:
        return self.arena.get(self.right_panel_group).rotation.y

    def _apply_fold_transform(self) -> None:
        if self.disposed:
            return

        progress = self.fold_progress
        rest = self.options.rest_angle
        left_rotation = -rest + progress * (math.pi + rest)
        z_offset = progress * self.options.fold_gap

        left = self.arena.get(self.left_panel_group)
        right = self.arena.get(self.right_panel_group)
        left.rotation.y = left_rotation
        right.rotation.y = -left_rotation
        left.position.z = z_offset
        right.position.z = z_offset + RIGHT_PANEL_Z_BIAS

        drop_opacity = progress * DROP_SHADOW_MAX_OPACITY
        for index in (self.left_shadow, self.right_shadow):
            self.arena.get(index).material.opacity = drop_opacity

        crease_opacity = CREASE_MIN_OPACITY + progress * (CREASE_MAX_OPACITY - CREASE_MIN_OPACITY)
        for index in self.crease_shadows:
            self.arena.get(index).material.opacity = crease_opacity

    # -------- interaction --------

    def on_click(self, callback: Callable[[], None]) -> None:
        self._click_callback = callback

    def handle_click(self, raycaster: Raycaster) -> bool:
        """Invoke the click callback when the ray hits any part of the paper"""
        if self.disposed:
            return False
        hits = raycaster.intersect_objects(self.arena, self.arena.children(self.root), recursive=True)
        if hits:
            if self._click_callback:
                self._click_callback()
            return True
        return False

    def dispose(self) -> None:
        if self.disposed:
            return
        self.arena.dispose()
        self.is_animating = False
        self.disposed = True

    def meshes(self) -> List[SceneNode]:
        return [
            self.arena.get(i) for i in self.arena.descendants(self.root)
            if self.arena.get(i).is_mesh
        ]
