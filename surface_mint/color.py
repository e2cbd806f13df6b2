from dataclasses import dataclass
from typing import Tuple

from .features import Features
from .fxrand import FXRand

HSL = Tuple[float, float, float]
RGB = Tuple[float, float, float]


def hsl_to_rgb(h: float, s: float, l: float) -> RGB:
    """HSL (h in degrees, s/l in 0..1) -> (r,g,b) in 0..1. Hue wraps around the wheel."""
    a = s * min(l, 1.0 - l)

    def f(n: int) -> float:
        k = (n + h / 30.0) % 12.0
        return l - a * max(min(k - 3.0, 9.0 - k, 1.0), -1.0)

    return (f(0), f(8), f(4))


def rgb01_to_hex(c: RGB) -> str:
    """(r,g,b) in 0..1 -> '#rrggbb'"""
    r = int(round(max(0.0, min(1.0, c[0])) * 255))
    g = int(round(max(0.0, min(1.0, c[1])) * 255))
    b = int(round(max(0.0, min(1.0, c[2])) * 255))
    return f"#{r:02x}{g:02x}{b:02x}"


@dataclass(frozen=True)
class Palette:
    background: HSL
    surface: HSL

    def background_rgb(self) -> RGB:
        return hsl_to_rgb(*self.background)

    def surface_rgb(self) -> RGB:
        return hsl_to_rgb(*self.surface)

    def to_dict(self) -> dict:
        return {
            "background": {"hsl": list(self.background), "hex": rgb01_to_hex(self.background_rgb())},
            "surface": {"hsl": list(self.surface), "hex": rgb01_to_hex(self.surface_rgb())},
        }


def generate_color_palette(features: Features, rand: FXRand) -> Palette:
    """
    Derive the background and surface colors from the palette mode.

    A coin flip picks the contrast direction: when it lands true the background
    is darker and less saturated and the surface brighter and more colorful,
    otherwise the other way around.
    """
    r = rand.bool(0.5)

    saturation1 = rand.num(0.4, 0.6) if r else rand.num(0.6, 0.95)
    lightness1 = rand.num(0.1, 0.55) if r else rand.num(0.6, 0.95)

    saturation2 = rand.num(0.7, 1.0) if r else rand.num(0.4, 0.7)
    lightness2 = rand.num(0.55, 0.9) if r else rand.num(0.35, 0.55)

    hue1 = rand.num(0, 360)

    if features.palette == "Mono":
        hue2 = hue1
    elif features.palette == "Analogous":
        # neighbour on the wheel, either side
        hue2 = hue1 + (rand.num(-60, -30) if rand.bool(0.5) else rand.num(30, 60))
    elif features.palette == "Complementary":
        hue2 = hue1 + 180
    else:
        # BlackWhite: hue is irrelevant
        hue1 = hue2 = 0.0
        saturation1 = saturation2 = 0.0
        lightness1 = 0.05 if r else 0.9
        lightness2 = 0.95 if r else 0.5

    return Palette(background=(hue1, saturation1, lightness1),
                   surface=(hue2, saturation2, lightness2))
