"""Icon Resizer package.

Generates app icons (iOS / macOS asset catalogs) and App Store screenshots
from a single source image using fixed size tables.
"""

from .exporter import ExportResult, export_icons, export_screenshots, run_icons, run_screenshots
from .sizes import Mode, Orientation, PlatformSelection, sizes_for

__all__ = [
    "ExportResult",
    "export_icons",
    "export_screenshots",
    "run_icons",
    "run_screenshots",
    "Mode",
    "Orientation",
    "PlatformSelection",
    "sizes_for",
]
