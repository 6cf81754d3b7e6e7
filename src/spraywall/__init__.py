"""
Spray Wall v1.0

Mark climbing problems on a photo of a spray wall: tap a hold to trace
it, tap again to recolor or number it, long-press to remove it.

Usage:
    spraywall edit photo.jpg --type bouldering
    spraywall mark photo.jpg --type endurance --tap 120,80 --tap 200,150,2 --name "Warmup"
    spraywall list --type endurance

Or:
    python -m spraywall ...
"""

import argparse
import logging
import sys
from typing import List, Optional, Tuple

__version__ = "1.0.0"

from spraywall.config import load_settings
from spraywall.core.scheduling import ManualScheduler
from spraywall.gallery import ProblemGallery
from spraywall.io.store import JsonProblemStore
from spraywall.models import ProblemType
from spraywall.session import SprayWallSession


def parse_tap(value: str) -> Tuple[float, float, int]:
    """Parse ``x,y`` or ``x,y,count``."""
    parts = [p.strip() for p in value.split(",")]
    if len(parts) not in (2, 3):
        raise argparse.ArgumentTypeError(f"Expected x,y[,count], got {value!r}")
    try:
        x, y = float(parts[0]), float(parts[1])
        count = int(parts[2]) if len(parts) == 3 else 1
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected x,y[,count], got {value!r}") from None
    if count < 1:
        raise argparse.ArgumentTypeError(f"Tap count must be at least 1, got {count}")
    return (x, y, count)


def replay_tap(session: SprayWallSession, scheduler: ManualScheduler,
               x: float, y: float, count: int = 1):
    """Feed ``count`` quick taps at (x, y) and let the sequence commit."""
    settings = session.settings
    press_ms = settings.tap_max_duration_ms / 4
    gap_ms = min(settings.tap_window_ms, settings.click_commit_ms) / 4
    for i in range(count):
        if i:
            scheduler.advance(gap_ms)
        session.pointer_down(x, y)
        scheduler.advance(press_ms)
        session.pointer_up()
    scheduler.advance(settings.click_commit_ms)


def replay_long_press(session: SprayWallSession, scheduler: ManualScheduler,
                      x: float, y: float):
    session.pointer_down(x, y)
    scheduler.advance(session.settings.long_press_ms)
    session.pointer_up()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spraywall",
        description="Spray Wall - mark climbing problems on a wall photo"
    )
    parser.add_argument("--store", "-s", type=str,
                        help="Problem store directory (default from settings)")
    parser.add_argument("--config", "-c", type=str,
                        help="Settings file (default ~/.spraywall.json)")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--version", "-v", action="version",
                        version=f"Spray Wall {__version__}")

    sub = parser.add_subparsers(dest="command", required=True)

    edit = sub.add_parser("edit", help="Open the editor window")
    edit.add_argument("image", nargs="?", help="Wall photo to open")
    edit.add_argument("--type", "-t", default="bouldering", help="bouldering or endurance")

    mark = sub.add_parser("mark", help="Mark holds without a window and save")
    mark.add_argument("image", help="Wall photo")
    mark.add_argument("--type", "-t", default="bouldering", help="bouldering or endurance")
    mark.add_argument("--tap", type=parse_tap, action="append", default=[],
                      help="Tap at x,y[,count] in display pixels (repeatable)")
    mark.add_argument("--press", type=parse_tap, action="append", default=[],
                      help="Long press at x,y after the taps (repeatable)")
    mark.add_argument("--name", "-n", default="", help="Problem name")
    mark.add_argument("--tags", default="", help="Comma separated tags")

    listing = sub.add_parser("list", help="List saved problems")
    listing.add_argument("--type", "-t", default="bouldering", help="bouldering or endurance")

    return parser


def _mark(args, settings, store) -> int:
    scheduler = ManualScheduler()
    errors: List[str] = []
    with SprayWallSession(args.type, store=store, scheduler=scheduler,
                          settings=settings, on_error=errors.append) as session:
        if not session.load_image(args.image):
            print(errors[-1], file=sys.stderr)
            return 1
        for x, y, count in args.tap:
            replay_tap(session, scheduler, x, y, count)
        for x, y, _ in args.press:
            replay_long_press(session, scheduler, x, y)

        problem = session.save(args.name, args.tags.split(","))
        if problem is None:
            print(errors[-1], file=sys.stderr)
            return 1
        print(f"Saved {problem.problem_id} '{problem.name}' "
              f"with {len(session.annotations)} holds")
    return 0


def _list(args, settings, store) -> int:
    errors: List[str] = []
    gallery = ProblemGallery(store, settings.owner_id, args.type, on_error=errors.append)
    if not gallery.refresh():
        print(errors[-1], file=sys.stderr)
        return 1
    for problem in gallery.problems:
        tags = f" [{', '.join(problem.tags)}]" if problem.tags else ""
        print(f"{problem.problem_id}  {problem.created_at}  {problem.name}{tags}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Run the command line interface."""
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    settings = load_settings(args.config)
    store = JsonProblemStore(args.store or settings.store_dir)

    try:
        args.type = ProblemType.parse(args.type)
    except ValueError as e:
        print(e, file=sys.stderr)
        return 2

    if args.command == "edit":
        # Imported here so headless commands work without a display
        from spraywall.ui.canvas_view import run_editor
        run_editor(args.type, store, settings, image_path=args.image)
        return 0
    if args.command == "mark":
        return _mark(args, settings, store)
    return _list(args, settings, store)


__all__ = ["main", "replay_tap", "replay_long_press", "parse_tap", "__version__"]
