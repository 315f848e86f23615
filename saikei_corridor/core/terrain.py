# ==============================================================================
# Saikei Corridor - Road Corridor Geometry Kernel
# Copyright (c) 2025 Michael Yoder / Desert Springs Civil Engineering PLLC
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
#
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
# You should have received a copy of the GNU General Public License along with this program. If not, see <https://www.gnu.org/licenses/>.
#
# Primary Author: Michael Yoder
# Company: Desert Springs Civil Engineering PLLC
# ==============================================================================

"""
Terrain
=======

The kernel sees existing ground only as a height function z = h(x, y). It
must be pure, defined over the whole plane and cheap to call; the daylight
solver and the volume estimator call it many times per rebuild.

This module supplies a few ready-made height functions and a gridded
terrain with bilinear interpolation.
"""

import math
from typing import Callable, Tuple

import numpy as np

from .logging_config import get_logger

logger = get_logger(__name__)

HeightFunction = Callable[[float, float], float]


def flat_terrain(elevation: float = 0.0) -> HeightFunction:
    """Horizontal plane at a fixed elevation."""
    elevation = float(elevation)

    def height(x: float, y: float) -> float:
        return elevation

    return height


def planar_terrain(z0: float = 0.0, grade_x: float = 0.0, grade_y: float = 0.0) -> HeightFunction:
    """Inclined plane z = z0 + grade_x * x + grade_y * y."""

    def height(x: float, y: float) -> float:
        return z0 + grade_x * x + grade_y * y

    return height


def undulating_terrain(x: float, y: float) -> float:
    """Smooth rolling test surface: a central hill on a gentle ripple."""
    return (
        0.6 * math.sin(0.5 * x) * math.cos(0.4 * y)
        + 0.8 * math.exp(-0.04 * (x * x + y * y))
        + 0.25 * math.sin(0.25 * x + 0.15 * y)
    )


class GridTerrain:
    """
    Regular elevation grid with bilinear interpolation.

    Rows run along y and columns along x. Queries outside the grid take the
    value of the nearest edge, so the height function is total.

    Attributes:
        heights: 2D array (rows = y, columns = x)
        origin: (x, y) of heights[0, 0]
        spacing: (dx, dy) cell size

    Example:
        >>> grid = GridTerrain([[0.0, 1.0], [2.0, 3.0]], spacing=(10.0, 10.0))
        >>> grid(5.0, 5.0)
        1.5
    """

    def __init__(self, heights, origin: Tuple[float, float] = (0.0, 0.0),
                 spacing: Tuple[float, float] = (1.0, 1.0)):
        self.heights = np.asarray(heights, dtype=float)
        if self.heights.ndim != 2 or min(self.heights.shape) < 1:
            raise ValueError(f"heights must be a non-empty 2D grid, got shape {self.heights.shape}")
        if spacing[0] <= 0 or spacing[1] <= 0:
            raise ValueError(f"spacing must be positive, got {spacing}")
        if not np.all(np.isfinite(self.heights)):
            raise ValueError("heights must be finite")

        self.origin = (float(origin[0]), float(origin[1]))
        self.spacing = (float(spacing[0]), float(spacing[1]))

        logger.debug(
            "Grid terrain %dx%d at %s, spacing %s",
            self.heights.shape[1], self.heights.shape[0], self.origin, self.spacing
        )

    @classmethod
    def from_function(cls, height: HeightFunction, x_range: Tuple[float, float],
                      y_range: Tuple[float, float], spacing: float = 1.0) -> "GridTerrain":
        """Sample a height function onto a grid covering the given ranges."""
        nx = max(2, int(math.ceil((x_range[1] - x_range[0]) / spacing)) + 1)
        ny = max(2, int(math.ceil((y_range[1] - y_range[0]) / spacing)) + 1)
        xs = x_range[0] + spacing * np.arange(nx)
        ys = y_range[0] + spacing * np.arange(ny)
        heights = np.array([[height(x, y) for x in xs] for y in ys])
        return cls(heights, origin=(x_range[0], y_range[0]), spacing=(spacing, spacing))

    @property
    def shape(self) -> Tuple[int, int]:
        return self.heights.shape

    @property
    def extent(self) -> Tuple[float, float, float, float]:
        """(min_x, min_y, max_x, max_y)"""
        rows, cols = self.heights.shape
        x0, y0 = self.origin
        return (x0, y0, x0 + (cols - 1) * self.spacing[0], y0 + (rows - 1) * self.spacing[1])

    def _cell(self, value: float, origin: float, step: float, count: int) -> Tuple[int, float]:
        u = (value - origin) / step
        u = min(max(u, 0.0), count - 1)
        i = min(int(u), max(count - 2, 0))
        return i, u - i

    def __call__(self, x: float, y: float) -> float:
        rows, cols = self.heights.shape
        i, tx = self._cell(x, self.origin[0], self.spacing[0], cols)
        j, ty = self._cell(y, self.origin[1], self.spacing[1], rows)

        i1 = min(i + 1, cols - 1)
        j1 = min(j + 1, rows - 1)
        h = self.heights

        bottom = h[j, i] * (1.0 - tx) + h[j, i1] * tx
        top = h[j1, i] * (1.0 - tx) + h[j1, i1] * tx
        return float(bottom * (1.0 - ty) + top * ty)

    def __repr__(self) -> str:
        return f"GridTerrain(shape={self.heights.shape}, origin={self.origin}, spacing={self.spacing})"


__all__ = [
    "HeightFunction",
    "flat_terrain",
    "planar_terrain",
    "undulating_terrain",
    "GridTerrain",
]
