#!/usr/bin/env python3
"""
Generate app icons or App Store screenshots from the command line.

Usage:
    python resize_icons.py icons path/to/icon-1024.png --platform both
    python resize_icons.py screenshots shots/ extra.png --platform ios --fit crop
    python resize_icons.py sizes --mode screenshots --orientation landscape

When the default output folder cannot be created you are asked for another
one (disable with --no-prompt).
"""
import argparse
import logging
import os
import sys

from icon_resizer import config as cfg
from icon_resizer.exporter import run_icons, run_screenshots
from icon_resizer.imaging import FIT_MODES, RESAMPLE_FILTERS, ImageLoadError
from icon_resizer.output import ExportCancelled, OutputFolderError
from icon_resizer.sizes import IconSize, PlatformSelection, parse_mode, parse_orientation, sizes_for

PLATFORM_CHOICES = [p.value for p in PlatformSelection]


def prompt_for_folder(failed_folder):
    """Terminal stand-in for a folder picker. Returns None when left empty."""
    print(f"❌ Cannot write to {failed_folder}")
    try:
        answer = input("Choose where to save (empty to cancel): ").strip()
    except EOFError:
        return None
    return os.path.expanduser(answer) or None


def expand_sources(paths):
    """Expand directories into the image files they contain (sorted)."""
    sources = []
    for p in paths:
        if os.path.isdir(p):
            for name in sorted(os.listdir(p)):
                if name.lower().endswith(cfg.IMAGE_EXTENSIONS):
                    sources.append(os.path.join(p, name))
        else:
            sources.append(p)
    return sources


def print_result(result):
    print(f"\n✅ {result.message}")
    print(f"📂 Location: {result.output_folder}")
    for path in result.failed:
        print(f"   ❌ Failed: {path}")
    for source in result.skipped:
        print(f"   ⚠️  Skipped: {source}")


def cmd_icons(args, picker):
    if not os.path.exists(args.source):
        print(f"❌ Source image not found: {args.source}")
        return 1
    print("🔄 Resizing icons...")
    result = run_icons(args.source, args.platform, args.output, picker, args.resample)
    print_result(result)
    return 0 if not result.failed else 1


def cmd_screenshots(args, picker):
    sources = expand_sources(args.sources)
    if not sources:
        print("❌ No input screenshots found.")
        return 1
    print(f"🔄 Resizing {len(sources)} screenshot(s)...")
    result = run_screenshots(sources, args.platform, args.output, picker, args.resample, args.fit)
    print_result(result)
    return 0 if not result.failed else 1


def cmd_sizes(args, picker=None):
    mode = parse_mode(args.mode)
    orientation = parse_orientation(args.orientation)
    entries = sizes_for(mode, args.platform, orientation)
    for entry in entries:
        if isinstance(entry, IconSize):
            print(f"{entry.filename:<22} {entry.pixels:>4}x{entry.pixels:<4} {entry.idiom:<14} {entry.size}@{entry.scale_label}")
        else:
            print(f"{entry.name:<12} {entry.width:>4}x{entry.height:<4} {entry.label}")
    print(f"\nTotal: {len(entries)}")
    return 0


def build_parser():
    parser = argparse.ArgumentParser(description="Generate Apple app icons and App Store screenshots")
    parser.add_argument("--log-level", default=cfg.LOG_LEVEL, help="Logging level (default: %(default)s)")
    sub = parser.add_subparsers(dest="command", required=True)

    icons = sub.add_parser("icons", help="Generate iOS/macOS app icons with Contents.json")
    icons.add_argument("source", help="Path to source image (1024x1024 PNG recommended)")
    icons.add_argument("--platform", choices=PLATFORM_CHOICES, default="both")
    icons.add_argument("--output", "-o", default=None,
                       help=f"Output folder (default: {cfg.icons_folder()})")
    icons.add_argument("--resample", choices=list(RESAMPLE_FILTERS), default=cfg.RESAMPLE)
    icons.add_argument("--no-prompt", action="store_true", help="Fail instead of asking for a folder")
    icons.set_defaults(func=cmd_icons)

    shots = sub.add_parser("screenshots", help="Generate App Store screenshots")
    shots.add_argument("sources", nargs="+", help="Screenshot files or folders")
    shots.add_argument("--platform", choices=PLATFORM_CHOICES, default="ios")
    shots.add_argument("--fit", choices=FIT_MODES, default=cfg.SCREENSHOT_FIT)
    shots.add_argument("--output", "-o", default=None,
                       help=f"Output folder (default: {cfg.screenshots_folder()})")
    shots.add_argument("--resample", choices=list(RESAMPLE_FILTERS), default=cfg.RESAMPLE)
    shots.add_argument("--no-prompt", action="store_true", help="Fail instead of asking for a folder")
    shots.set_defaults(func=cmd_screenshots)

    sizes = sub.add_parser("sizes", help="Print a size table")
    sizes.add_argument("--mode", choices=["icons", "screenshots"], default="icons")
    sizes.add_argument("--platform", choices=PLATFORM_CHOICES, default="both")
    sizes.add_argument("--orientation", choices=["portrait", "landscape"], default="portrait")
    sizes.set_defaults(func=cmd_sizes)
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format='%(levelname)s: %(message)s')

    picker = None if getattr(args, "no_prompt", True) else prompt_for_folder
    try:
        return args.func(args, picker)
    except ExportCancelled:
        print("❌ Cancelled")
        return 2
    except (OutputFolderError, ImageLoadError, OSError, ValueError) as e:
        print(f"❌ Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
