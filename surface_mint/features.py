from dataclasses import dataclass
from typing import Dict, Sequence, Union

from .fxrand import FXRand

PALETTE_MODES = ("BlackWhite", "Mono", "Analogous", "Complementary")


@dataclass(frozen=True)
class Features:
    palette: str
    layer: int

    def to_dict(self) -> Dict[str, Union[str, int]]:
        """Published feature map of the mint."""
        return {"Palette": self.palette, "Layer": self.layer}


def validate_palettes(palettes: Sequence[str]) -> tuple:
    pool = tuple(palettes)
    if not pool:
        raise ValueError("Palette pool is empty")
    unknown = [p for p in pool if p not in PALETTE_MODES]
    if unknown:
        raise ValueError(f"Unknown palette mode(s): {', '.join(unknown)}. "
                         f"Choose from {', '.join(PALETTE_MODES)}")
    return pool


def generate_features(rand: FXRand, palettes: Sequence[str] = PALETTE_MODES) -> Features:
    pool = validate_palettes(palettes)
    palette = rand.choice(pool)
    # one layer is the rare case
    layer = 1 if rand.bool(0.2) else rand.int(2, 3)
    return Features(palette=palette, layer=layer)
