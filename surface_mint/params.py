"""
Shader uniform generation.

The layer count picks one of three branches. Each branch draws noise
frequency, octave count, lacunarity and gain per layer, several of them
conditioned on earlier draws so the surface stays readable (high lacunarity
gets low gain and so on). The draw order is part of the mint: changing it
changes every piece.
"""
from dataclasses import dataclass, asdict
from typing import Dict, Tuple

from .color import Palette
from .fxrand import FXRand

Vec3 = Tuple[float, float, float]
IVec3 = Tuple[int, int, int]


@dataclass(frozen=True)
class SurfaceParams:
    noise_frequency: Vec3
    octaves: IVec3
    lacunarity: Vec3
    gain: Vec3
    height: float
    second_layer: bool
    third_layer: bool

    @property
    def layer_count(self) -> int:
        return 1 + int(self.second_layer) + int(self.third_layer)

    def to_dict(self) -> dict:
        return asdict(self)


def _one_layer(rand: FXRand) -> SurfaceParams:
    fx = rand.num(2.5, 10.0)
    ox = rand.int(2, 8)
    lx = rand.num(4.0, 6.0) if fx < 5 else rand.num(2.0, 4.0)
    gx = rand.num(0.03, 0.1) if lx > 8.0 else rand.num(0.05, 0.3)
    height = rand.num(150, 300)
    return SurfaceParams(
        noise_frequency=(fx, 0.0, 0.0),
        octaves=(ox, 0, 0),
        lacunarity=(lx, 0.0, 0.0),
        gain=(gx, 0.0, 0.0),
        height=height,
        second_layer=False,
        third_layer=False,
    )


# variant -> (fx range, fy range, octave y range, fx split, lac.y below split,
#             lac.y above split, lac.x gain threshold)
_TWO_LAYER_VARIANTS = {
    1: ((0.5, 2.0), (10.0, 15.0), (2, 6), 1.5, (4.0, 6.0), (0.0, 4.0), 8.0),
    2: ((2.0, 10.0), (1.0, 7.0), (3, 6), 4.5, (4.0, 8.0), (0.0, 4.0), 8.0),
    3: ((1.0, 4.0), (5.0, 15.0), (3, 7), 1.0, (5.0, 10.0), (2.0, 5.0), 5.0),
}


def _two_layers(rand: FXRand) -> SurfaceParams:
    variant = rand.int(1, 3)
    fx_range, fy_range, oy_range, split, lac_lo, lac_hi, gain_split = _TWO_LAYER_VARIANTS[variant]

    fx = rand.num(*fx_range)
    fy = rand.num(*fy_range)
    ox = rand.int(2, 6)
    oy = rand.int(*oy_range)
    lx = rand.num(4.0, 16.0)
    ly = rand.num(*lac_lo) if fx < split else rand.num(*lac_hi)
    gx = rand.num(0.05, 0.1) if lx > gain_split else rand.num(0.1, 0.2)
    gy = rand.num(0.1, 0.2) if ly > 2.0 else rand.num(0.2, 0.5)
    height = rand.num(100, 350)
    return SurfaceParams(
        noise_frequency=(fx, fy, 0.0),
        octaves=(ox, oy, 0),
        lacunarity=(lx, ly, 0.0),
        gain=(gx, gy, 0.0),
        height=height,
        second_layer=True,
        third_layer=False,
    )


def _three_layers(rand: FXRand) -> SurfaceParams:
    fx = rand.num(3.0, 6.0)
    fy = rand.num(3.0, 7.0)
    fz = rand.num(2.0, 3.0) if fy > 5.0 else rand.num(3.0, 5.0)

    octaves = (rand.int(3, 5), rand.int(3, 5), rand.int(3, 5))

    lx = rand.num(4.0, 5.0) if fx < 2.5 else rand.num(2.0, 4.0)
    ly = rand.num(3.0, 5.0) if fx < 2.5 else rand.num(1.0, 3.0)
    lz = rand.num(2.0, 10.0)

    gx = rand.num(0.05, 0.1) if lx > 4.0 else rand.num(0.1, 0.2)
    gy = rand.num(0.15, 0.2) if ly > 4.0 else rand.num(0.1, 0.4)
    if lz > 4.0:
        gz = rand.num(0.1, 0.2)
    elif fz > 5.0:
        gz = rand.num(0.1, 0.15)
    else:
        gz = rand.num(0.2, 0.5)

    height = rand.num(200, 350)
    return SurfaceParams(
        noise_frequency=(fx, fy, fz),
        octaves=octaves,
        lacunarity=(lx, ly, lz),
        gain=(gx, gy, gz),
        height=height,
        second_layer=True,
        third_layer=True,
    )


def generate_params(layer_count: int, rand: FXRand) -> SurfaceParams:
    if layer_count == 1:
        return _one_layer(rand)
    if layer_count == 2:
        return _two_layers(rand)
    return _three_layers(rand)


def build_uniforms(params: SurfaceParams, palette: Palette, rand: FXRand,
                   segments: int) -> Dict[str, object]:
    """Full uniform map handed to the surface evaluator. Draws uRandOffset."""
    return {
        "uNoiseFrequency": list(params.noise_frequency),
        "uOctaves": list(params.octaves),
        "uLacunarity": list(params.lacunarity),
        "uGain": list(params.gain),
        "uSecondLayer": params.second_layer,
        "uThirdLayer": params.third_layer,
        "uHeight": params.height,
        "uResolution": [segments, segments],
        "uRandOffset": rand.num(0, 512),
        "uColor": list(palette.surface_rgb()),
    }
