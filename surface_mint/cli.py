import argparse
import json
import os
import sys

from .console import say
from .features import PALETTE_MODES
from .fxrand import random_hash
from .mint import derive, mint, save_features, save_image
from .settings import SettingsError, load_settings

DEFAULT_OUTPUT = "surface_mint.png"


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="surface-mint",
        description="Render one still frame of a seeded, noise-displaced surface.")
    p.add_argument("--hash", default=None, help="Mint hash ('oo' + 49 base58 chars). Random if omitted")
    p.add_argument("--output", default=DEFAULT_OUTPUT, help="Path to save output PNG")
    p.add_argument("--features-out", default=None, help="Path to write features/uniforms JSON")
    p.add_argument("--config", default=None, help="JSON file with render settings")
    p.add_argument("--size", type=int, default=None, help="Output size in pixels (square)")
    p.add_argument("--segments", type=int, default=None, help="Plane subdivisions per side")
    p.add_argument("--palettes", nargs="+", default=None, choices=PALETTE_MODES,
                   help="Pool of palette modes to draw from")
    p.add_argument("--no-post", action="store_true", help="Skip blur and film passes")
    p.add_argument("--preview", action="store_true", help="Show the result in a window")
    p.add_argument("--print-features", action="store_true",
                   help="Print features and uniforms for the hash and exit without rendering")
    return p


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(args.config).override(
            size=args.size,
            segments=args.segments,
            palettes=tuple(args.palettes) if args.palettes else None,
            post=False if args.no_post else None,
        )
    except (SettingsError, FileNotFoundError) as e:
        say("❌", "X", str(e))
        return 1

    fxhash = args.hash or random_hash()

    try:
        if args.print_features:
            features, palette, params, uniforms = derive(fxhash, settings)
            print(json.dumps({"hash": fxhash, "features": features.to_dict(),
                              "palette": palette.to_dict(), "uniforms": uniforms}, indent=2))
            return 0
        result = mint(fxhash, settings, verbose=True)
    except ValueError as e:
        say("❌", "X", str(e))
        return 1

    out_dir = os.path.dirname(os.path.abspath(args.output))
    os.makedirs(out_dir, exist_ok=True)
    save_image(result, args.output)
    if args.features_out:
        save_features(result, args.features_out)
        say("📊", "CHART", f"Features: {args.features_out}")
    say("💾", "SAVE", f"Saved: {args.output}")

    if args.preview:
        from .preview import show_preview
        show_preview(result.image)
    return 0


if __name__ == "__main__":
    sys.exit(main())
