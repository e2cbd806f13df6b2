import json
import os
from dataclasses import dataclass, field, fields, replace
from typing import Optional, Tuple

from .features import PALETTE_MODES, validate_palettes

# Defaults
DEFAULT_SIZE = 4096
DEFAULT_SEGMENTS = 400
BLUR_SPACING = 1.0 / 4096.0  # uv units, a slight blur only
FILM_NOISE = 0.15
FILM_SCANLINES = 0.025
FILM_SCANLINE_COUNT = 0
FILM_GRAYSCALE = False


class SettingsError(ValueError):
    pass


@dataclass(frozen=True)
class RenderSettings:
    size: int = DEFAULT_SIZE
    segments: int = DEFAULT_SEGMENTS
    palettes: Tuple[str, ...] = field(default=PALETTE_MODES)
    post: bool = True
    blur_spacing: float = BLUR_SPACING
    film_noise: float = FILM_NOISE
    film_scanlines: float = FILM_SCANLINES
    film_scanline_count: int = FILM_SCANLINE_COUNT
    film_grayscale: bool = FILM_GRAYSCALE

    def validated(self) -> "RenderSettings":
        for name in ("size", "segments", "film_scanline_count"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise SettingsError(f"{name} must be an integer, got {value!r}")
        for name in ("blur_spacing", "film_noise", "film_scanlines"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise SettingsError(f"{name} must be a number, got {value!r}")
        for name in ("post", "film_grayscale"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise SettingsError(f"{name} must be true or false, got {value!r}")
        if isinstance(self.palettes, str) or not isinstance(self.palettes, (tuple, list)):
            raise SettingsError(f"palettes must be a list of names, got {self.palettes!r}")
        if not all(isinstance(p, str) for p in self.palettes):
            raise SettingsError(f"palettes must be a list of names, got {self.palettes!r}")

        if self.size < 1:
            raise SettingsError(f"size must be positive, got {self.size}")
        if self.segments < 1:
            raise SettingsError(f"segments must be positive, got {self.segments}")
        if self.blur_spacing < 0:
            raise SettingsError(f"blur_spacing must be >= 0, got {self.blur_spacing}")
        if self.film_scanline_count < 0:
            raise SettingsError(f"film_scanline_count must be >= 0, got {self.film_scanline_count}")
        try:
            palettes = validate_palettes(self.palettes)
        except ValueError as e:
            raise SettingsError(str(e)) from e
        return replace(self, blur_spacing=float(self.blur_spacing), film_noise=float(self.film_noise),
                       film_scanlines=float(self.film_scanlines), palettes=palettes)

    def override(self, **changes) -> "RenderSettings":
        """Apply non-None overrides (e.g. CLI flags) and re-validate."""
        changes = {k: v for k, v in changes.items() if v is not None}
        return replace(self, **changes).validated()


def load_settings(path: Optional[str] = None) -> RenderSettings:
    """
    Load render settings from a JSON object file. Keys are the RenderSettings
    field names; anything left out keeps its default. No path means defaults.
    """
    if not path:
        return RenderSettings().validated()
    if not os.path.exists(path):
        raise FileNotFoundError(f"Settings file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise SettingsError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise SettingsError(f"{path} must contain a JSON object")

    known = {f.name for f in fields(RenderSettings)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise SettingsError(f"Unknown setting(s) in {path}: {', '.join(unknown)}")

    if "palettes" in data:
        pal = data["palettes"]
        if isinstance(pal, str):
            data["palettes"] = (pal,)
        elif isinstance(pal, list):
            data["palettes"] = tuple(pal)
    return RenderSettings(**data).validated()
