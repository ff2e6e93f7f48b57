#!/usr/bin/env python3
"""
Camera utilities for projecting 3D world positions onto the 2D viewport.

Two projections are supported, matching the viewer's camera presets:
- "top": looks down the z axis, screen shows (x, y)
- "side": looks along the y axis, screen shows (x, z)

With dynamic zoom on, fit() keeps every body inside the field of view.
"""
import math
from typing import Iterable, Tuple

from .constants import (
    DEFAULT_METERS_PER_PIXEL,
    MAX_METERS_PER_PIXEL,
    MIN_METERS_PER_PIXEL,
    VIEW_HEIGHT,
    VIEW_WIDTH,
    ZOOM_MARGIN,
)
from .vector_utils import Vec3, clamp

PROJECTIONS = ("top", "side")


class Camera2D:
    """
    Simple camera that maps world coordinates (meters) to screen pixels.
    """

    def __init__(self, center=(0.0, 0.0), meters_per_pixel=DEFAULT_METERS_PER_PIXEL):
        self.center = [center[0], center[1]]
        self.mpp = meters_per_pixel
        self.viewport_size = (VIEW_WIDTH, VIEW_HEIGHT)
        self.projection = "top"
        self.dynamic_zoom = True

    def set_viewport_size(self, w: int, h: int) -> None:
        self.viewport_size = (w, h)

    def set_projection(self, projection: str) -> None:
        if projection not in PROJECTIONS:
            raise ValueError(f"Unknown projection {projection!r}")
        self.projection = projection
        self.center = [0.0, 0.0]
        self.mpp = DEFAULT_METERS_PER_PIXEL

    def project(self, pos: Vec3) -> Tuple[float, float]:
        if self.projection == "side":
            return (pos[0], pos[2])
        return (pos[0], pos[1])

    def world_to_screen(self, pos: Vec3) -> Tuple[int, int]:
        wx, wy = self.project(pos)
        cx, cy = self.center
        px = (wx - cx) / self.mpp + self.viewport_size[0] / 2
        # Screen y grows downward
        py = self.viewport_size[1] / 2 - (wy - cy) / self.mpp
        return (int(px), int(py))

    def fit(self, positions: Iterable[Vec3]) -> None:
        """
        Zoom out so every position is visible, centred on the origin.

        Never zooms in past the default scale.
        """
        half_w = self.viewport_size[0] / 2
        half_h = self.viewport_size[1] / 2
        mpp = DEFAULT_METERS_PER_PIXEL
        for pos in positions:
            wx, wy = self.project(pos)
            if not (math.isfinite(wx) and math.isfinite(wy)):
                continue
            mpp = max(mpp, abs(wx) * ZOOM_MARGIN / half_w, abs(wy) * ZOOM_MARGIN / half_h)
        self.center = [0.0, 0.0]
        self.mpp = clamp(mpp, MIN_METERS_PER_PIXEL, MAX_METERS_PER_PIXEL)

    def zoom(self, factor: float) -> None:
        factor = clamp(factor, 0.05, 20.0)
        self.dynamic_zoom = False
        self.mpp = clamp(self.mpp * (1.0 / factor), MIN_METERS_PER_PIXEL, MAX_METERS_PER_PIXEL)
