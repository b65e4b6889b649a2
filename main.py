#!/usr/bin/env python3
"""Falling-objects scene: parameters → MP4."""

import argparse
import logging
import sys
from typing import List, Optional

from fallscene.modules.config import PRESETS, AssetKind, CompositionConfig
from fallscene.pipeline import FallingScenePipeline
from fallscene.shared.constants import (
    DEFAULT_FPS, DEFAULT_OUTPUT_DIR, DEFAULT_TOTAL_FRAMES,
    DEFAULT_VIDEO_HEIGHT, DEFAULT_VIDEO_WIDTH,
)
from fallscene.shared.errors import FallsceneError, InvalidConfiguration

log = logging.getLogger("fallscene")

_OVERRIDES = {
    "spawn_count": "spawn_count",
    "seed": "seed",
    "fall_speed": "fall_speed",
    "item_scale": "item_scale",
    "asset": "asset_source",
    "background": "background_color",
}


def _args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Deterministic falling-objects video renderer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python main.py --preset showcase\n"
            "  python main.py --asset public/leaf.png --spawn-count 120 --seed 7\n"
            "  python main.py --asset-kind model --asset star.glb --frames 150\n"
        ),
    )
    p.add_argument("--preset", choices=sorted(PRESETS), default="default")
    p.add_argument("--spawn-count", type=int)
    p.add_argument("--seed", type=int)
    p.add_argument("--fall-speed", type=float)
    p.add_argument("--item-scale", type=float)
    p.add_argument("--asset-kind", choices=[k.value for k in AssetKind])
    p.add_argument("--asset", help="image/model path or URL")
    p.add_argument("--background", help="CSS colour, e.g. '#00ff00'")
    p.add_argument("--public-dir", default="public",
                   help="directory that '/...' asset paths resolve against (default: public)")
    p.add_argument("--model-sprite", help="image drawn in place of model assets")
    p.add_argument("--fps", type=int, default=DEFAULT_FPS)
    p.add_argument("--frames", type=int, default=DEFAULT_TOTAL_FRAMES)
    p.add_argument("--width", type=int, default=DEFAULT_VIDEO_WIDTH)
    p.add_argument("--height", type=int, default=DEFAULT_VIDEO_HEIGHT)
    p.add_argument("--output-dir", default=DEFAULT_OUTPUT_DIR)
    p.add_argument("--name", default="falling_objects")
    p.add_argument("-v", "--verbose", action="store_true")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s  %(levelname)-8s  %(message)s", datefmt="%H:%M:%S")

    changes = {field: getattr(args, arg) for arg, field in _OVERRIDES.items()
               if getattr(args, arg) is not None}
    if args.asset_kind is not None:
        changes["asset_kind"] = AssetKind(args.asset_kind)
    config = PRESETS[args.preset].with_overrides(**changes)
    composition = CompositionConfig(fps=args.fps, total_frames=args.frames,
                                    width=args.width, height=args.height,
                                    output_dir=args.output_dir)

    pipeline = FallingScenePipeline(config, composition, public_dir=args.public_dir,
                                    model_sprite=args.model_sprite)
    try:
        result = pipeline.run(args.name)
    except InvalidConfiguration as exc:
        for problem in exc.problems:
            print(f"error: {problem}", file=sys.stderr)
        return 2
    except FallsceneError as exc:
        log.error("%s", exc)
        return 1

    print(f"\nvideo  → {result['video_path']}")
    print(f"spawns : {result['spawn_count']}  frames: {result['frame_count']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
