import argparse
import logging
import sys
from pathlib import Path
import os
os.environ['PYGAME_HIDE_SUPPORT_PROMPT'] = "hide"

# Ensure repo root is on sys.path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from const import CAM_INDEX, FPS, IMAGE_DIR, SCREEN_H, SCREEN_W
from floatspace.api.config import EngineConfig
from floatspace.app.loader import available_sketches
from floatspace.app.loop import run_sketch


def parse_screen(value: str) -> tuple[int, int]:
    try:
        w, h = map(int, value.lower().split("x"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected WxH, got {value!r}")
    if w <= 0 or h <= 0:
        raise argparse.ArgumentTypeError("screen size must be positive")
    return w, h


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Floatspace launcher")
    parser.add_argument("--sketch", required=True, choices=available_sketches(),
                        help="Sketch folder name under sketches/")
    parser.add_argument("--screen", type=parse_screen, default=(SCREEN_W, SCREEN_H),
                        help="Window size WxH, e.g. 1280x720")
    parser.add_argument("--cam-index", type=int, default=CAM_INDEX, help="OpenCV camera index")
    parser.add_argument("--images", default=str(ROOT / IMAGE_DIR),
                        help="Directory of reference images to sample colors from")
    parser.add_argument("--no-pose", action="store_true", help="Disable body pose detection")
    parser.add_argument("--mirror", action="store_true", help="Mirror the window horizontally")
    parser.add_argument("--fps", type=int, default=FPS)
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    cfg = EngineConfig(
        screen_size=args.screen,
        cam_index=args.cam_index,
        image_dir=args.images,
        pose_enabled=not args.no_pose,
        mirror=args.mirror,
        fps=args.fps,
    )
    run_sketch(args.sketch, cfg)


if __name__ == "__main__":
    main()
