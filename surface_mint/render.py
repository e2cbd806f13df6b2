"""
CPU rasterizer for the displaced plane.

Scene layout: orthographic camera with a 1024x1024 world-unit frustum at
(256, 512, 256) looking at the origin; the plane lies flat (rotated -90 deg
about X), lowered to y=-100, and vertices are pushed up along +Y by the
heightfield. Quads are Lambert shaded and filled back to front with
cv2.fillPoly.
"""
from typing import Sequence, Tuple

import cv2
import numpy as np

from .surface import PLANE_SIZE

FRUSTUM_WIDTH, FRUSTUM_HEIGHT = 1024.0, 1024.0
CAMERA_POSITION = (256.0, 512.0, 256.0)
CAMERA_TARGET = (0.0, 0.0, 0.0)
CAMERA_UP = (0.0, 1.0, 0.0)
PLANE_Y = -100.0

LIGHT_DIR = (-0.4, 0.8, 0.45)
AMBIENT = 0.35
SUBPIXEL_BITS = 4


def _normalize(v) -> np.ndarray:
    v = np.asarray(v, dtype=np.float64)
    n = np.linalg.norm(v)
    return v / n if n > 0 else v


def camera_basis(position=CAMERA_POSITION, target=CAMERA_TARGET, up=CAMERA_UP):
    """(right, up, forward) unit vectors of a camera looking at target."""
    forward = _normalize(np.subtract(target, position))
    right = _normalize(np.cross(forward, up))
    true_up = np.cross(right, forward)
    return right, true_up, forward


def plane_vertices(heights: np.ndarray) -> np.ndarray:
    """World positions (rows, cols, 3) of the displaced plane."""
    rows, cols = heights.shape
    half = PLANE_SIZE / 2.0
    xs = np.linspace(-half, half, cols)
    # row 0 is the far edge of the plane (local +y -> world -z)
    zs = np.linspace(-half, half, rows)
    X, Z = np.meshgrid(xs, zs)
    Y = PLANE_Y + heights
    return np.stack([X, Y, Z], axis=-1)


def project(points: np.ndarray, size: int) -> Tuple[np.ndarray, np.ndarray]:
    """Orthographic projection to pixel coordinates; also returns view depth."""
    right, up, forward = camera_basis()
    rel = points - np.asarray(CAMERA_POSITION)
    cx = rel @ right
    cy = rel @ up
    depth = rel @ forward
    px = (cx / FRUSTUM_WIDTH + 0.5) * size
    py = (0.5 - cy / FRUSTUM_HEIGHT) * size
    return np.stack([px, py], axis=-1), depth


def vertex_normals(heights: np.ndarray) -> np.ndarray:
    rows, cols = heights.shape
    dz = PLANE_SIZE / max(1, rows - 1)
    dx = PLANE_SIZE / max(1, cols - 1)
    dh_dz, dh_dx = np.gradient(heights, dz, dx)
    n = np.stack([-dh_dx, np.ones_like(heights), -dh_dz], axis=-1)
    return n / np.linalg.norm(n, axis=-1, keepdims=True)


def shade(normals: np.ndarray, light=LIGHT_DIR, ambient: float = AMBIENT) -> np.ndarray:
    lambert = np.clip(normals @ _normalize(light), 0.0, 1.0)
    return ambient + (1.0 - ambient) * lambert


def render_surface(heights: np.ndarray, surface_rgb: Sequence[float],
                   background_rgb: Sequence[float], size: int) -> np.ndarray:
    """Render the heightfield to a float32 (size, size, 3) RGB image in 0..1."""
    bg = np.clip(np.asarray(background_rgb, dtype=np.float64), 0.0, 1.0)
    canvas = np.empty((size, size, 3), dtype=np.uint8)
    canvas[:] = np.round(bg * 255.0).astype(np.uint8)

    verts = plane_vertices(heights)
    screen, depth = project(verts, size)
    light = shade(vertex_normals(heights))

    # quad corners: (r,c) (r,c+1) (r+1,c+1) (r+1,c)
    quads = np.stack([
        screen[:-1, :-1], screen[:-1, 1:], screen[1:, 1:], screen[1:, :-1],
    ], axis=2).reshape(-1, 4, 2)
    quad_depth = (depth[:-1, :-1] + depth[:-1, 1:] + depth[1:, 1:] + depth[1:, :-1]).ravel()
    quad_light = ((light[:-1, :-1] + light[:-1, 1:] + light[1:, 1:] + light[1:, :-1]) * 0.25).ravel()

    surf = np.clip(np.asarray(surface_rgb, dtype=np.float64), 0.0, 1.0)
    colors = np.clip(quad_light[:, None] * surf[None, :] * 255.0, 0, 255).round().astype(np.int32)
    pts = np.round(quads * (1 << SUBPIXEL_BITS)).astype(np.int32)

    # farthest first
    order = np.argsort(-quad_depth, kind="stable")
    for i in order:
        c = colors[i]
        cv2.fillPoly(canvas, [pts[i]], (int(c[0]), int(c[1]), int(c[2])), shift=SUBPIXEL_BITS)

    return canvas.astype(np.float32) / 255.0
