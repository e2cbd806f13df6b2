import json
from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np
from PIL import Image

from .color import Palette, generate_color_palette, rgb01_to_hex
from .console import say
from .features import Features, generate_features
from .fxrand import FXRand, random_hash
from .params import SurfaceParams, build_uniforms, generate_params
from .postprocess import post_process
from .render import render_surface
from .settings import RenderSettings
from .surface import heightfield


@dataclass
class MintResult:
    hash: str
    features: Features
    palette: Palette
    params: SurfaceParams
    uniforms: Dict[str, object]
    image: np.ndarray  # (H,W,3) float32, 0..1

    def to_dict(self) -> dict:
        return {
            "hash": self.hash,
            "features": self.features.to_dict(),
            "palette": self.palette.to_dict(),
            "uniforms": self.uniforms,
        }


def derive(fxhash: str, settings: RenderSettings):
    """
    Every random draw of the piece, in mint order: features, palette, surface
    params, then the uniform offset. Nothing is rendered here.
    """
    rand = FXRand(fxhash)
    features = generate_features(rand, settings.palettes)
    palette = generate_color_palette(features, rand)
    params = generate_params(features.layer, rand)
    uniforms = build_uniforms(params, palette, rand, settings.segments)
    return features, palette, params, uniforms


def mint(fxhash: Optional[str] = None, settings: Optional[RenderSettings] = None,
         verbose: bool = False) -> MintResult:
    settings = (settings or RenderSettings()).validated()
    fxhash = fxhash or random_hash()

    features, palette, params, uniforms = derive(fxhash, settings)
    if verbose:
        say("🎲", "HASH", f"Hash: {fxhash}")
        say("🎨", "ART", f"Palette: {features.palette} "
                         f"(background {rgb01_to_hex(palette.background_rgb())}, "
                         f"surface {rgb01_to_hex(palette.surface_rgb())})")
        say("⛰️", "LAYERS", f"Layers: {features.layer}")

    heights = heightfield(uniforms, settings.segments)
    image = render_surface(heights, palette.surface_rgb(), palette.background_rgb(), settings.size)
    if settings.post:
        image = post_process(image, settings)

    return MintResult(hash=fxhash, features=features, palette=palette, params=params,
                      uniforms=uniforms, image=image)


def to_uint8(image: np.ndarray) -> np.ndarray:
    return np.clip(image * 255.0, 0, 255).round().astype(np.uint8)


def save_image(result: MintResult, output_path: str) -> None:
    Image.fromarray(to_uint8(result.image)).save(output_path)


def save_features(result: MintResult, output_path: str) -> None:
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(result.to_dict(), f, ensure_ascii=False, indent=2)
