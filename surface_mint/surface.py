"""
Heightfield evaluation for the displaced plane.

Each active layer is fractal Perlin noise (noise.pnoise2) sampled over the
plane's uv grid. The second layer is domain-warped by the first and the third
by the second, so more layers give a more folded surface. The last evaluated
layer, normalized to 0..1 and scaled by uHeight, is the vertical displacement.
"""
from typing import Mapping

import numpy as np
from noise import pnoise2

PLANE_SIZE = 512.0


def plane_uv(segments: int):
    """uv grid of a (segments+1)^2 plane, row 0 at v=1 (far edge)."""
    n = segments + 1
    t = np.linspace(0.0, 1.0, n)
    u, v = np.meshgrid(t, t[::-1])
    return u, v


def fbm(x: np.ndarray, y: np.ndarray, octaves: int, gain: float, lacunarity: float,
        base: int = 0) -> np.ndarray:
    """Elementwise fractal Perlin noise; zero octaves gives a flat layer."""
    if int(octaves) < 1:
        return np.zeros_like(x, dtype=np.float64)
    xs = x.ravel()
    ys = y.ravel()
    values = np.fromiter(
        (pnoise2(float(px), float(py), octaves=int(octaves), persistence=float(gain),
                 lacunarity=float(lacunarity), base=base)
         for px, py in zip(xs, ys)),
        dtype=np.float64, count=xs.size)
    return values.reshape(x.shape)


def normalize01(h: np.ndarray) -> np.ndarray:
    lo = float(h.min())
    span = float(h.max()) - lo
    if span <= 1e-12:
        return np.zeros_like(h)
    return (h - lo) / span


def heightfield(uniforms: Mapping[str, object], segments: int) -> np.ndarray:
    """Vertical displacement per vertex, shape (segments+1, segments+1)."""
    freq = uniforms["uNoiseFrequency"]
    octaves = uniforms["uOctaves"]
    lac = uniforms["uLacunarity"]
    gain = uniforms["uGain"]
    offset = float(uniforms["uRandOffset"])

    u, v = plane_uv(segments)

    h = fbm(u * freq[0] + offset, v * freq[0] + offset, octaves[0], gain[0], lac[0], base=0)
    if uniforms["uSecondLayer"]:
        h = fbm(u * freq[1] + offset + h, v * freq[1] + offset + h,
                octaves[1], gain[1], lac[1], base=1)
    if uniforms["uThirdLayer"]:
        h = fbm(u * freq[2] + offset + h, v * freq[2] + offset + h,
                octaves[2], gain[2], lac[2], base=2)

    return normalize01(h) * float(uniforms["uHeight"])
