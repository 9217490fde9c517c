# exporter.py
import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from PIL import Image

from . import config as _cfg
from . import manifest
from .imaging import (FIT_MODES, ImageLoadError, detect_orientation, load_image, resample_filter,
                      resize_exact, save_png)
from .output import FolderPicker, platform_folder, resolve_output_folder, unique_stems
from .sizes import Mode, PlatformSelection, icon_sizes, parse_platform, screenshot_sizes

logger = logging.getLogger(__name__)


@dataclass
class ExportResult:
    mode: Mode
    platform: PlatformSelection
    output_folder: str
    files: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    # Sources that could not be decoded (screenshots only)
    skipped: List[str] = field(default_factory=list)
    manifests: List[str] = field(default_factory=list)
    images: int = 0

    @property
    def count(self) -> int:
        return len(self.files)

    @property
    def message(self) -> str:
        if self.mode is Mode.ICONS:
            platform_text = "iOS + macOS" if self.platform is PlatformSelection.BOTH else self.platform.label
            return f"Generated {self.count} {platform_text} icons!"
        plural = "image" if self.images == 1 else "images"
        return f"Generated {self.count} screenshots from {self.images} {plural}!"


def _write(img: Image.Image, width: int, height: int, path: str, resample: str, fit: str = "stretch") -> bool:
    """Resize and save one output; a failing file is logged and reported, not fatal."""
    try:
        save_png(resize_exact(img, width, height, resample=resample, fit=fit), path)
        return True
    except OSError as e:
        logger.error(f"Failed to save {os.path.basename(path)}: {e}")
        return False


def export_icons(img: Image.Image, platform, output_folder: str, resample: Optional[str] = None) -> ExportResult:
    """
    Write every icon of the selected platform(s) plus a Contents.json per folder.

    With `both`, iOS and macOS icons go to `iOS/` and `macOS/` under
    `output_folder`; a single platform writes straight into it. Folder creation
    errors propagate (the whole export fails); single file errors do not.
    """
    selection = parse_platform(platform)
    resample = resample or _cfg.RESAMPLE
    resample_filter(resample)
    result = ExportResult(Mode.ICONS, selection, output_folder, images=1)

    width, height = img.size
    if width != height:
        logger.warning(f"Source image is {width}x{height}, not square; icons will be stretched")
    if min(width, height) < _cfg.RECOMMENDED_ICON_SOURCE:
        logger.warning(f"Source image is smaller than {_cfg.RECOMMENDED_ICON_SOURCE}px; large icons will be upscaled")

    for single in selection.platforms:
        folder = platform_folder(output_folder, single, selection)
        os.makedirs(folder, exist_ok=True)

        written = []
        for icon in icon_sizes(single):
            path = os.path.join(folder, icon.filename)
            if _write(img, icon.pixels, icon.pixels, path, resample):
                written.append(icon)
                result.files.append(path)
            else:
                result.failed.append(path)

        result.manifests.append(manifest.write_contents(folder, written))
        logger.info(f"Wrote {len(written)} icons to {folder}")

    return result


def export_screenshots(images: Sequence[Tuple[str, Image.Image]], platform, output_folder: str,
                       resample: Optional[str] = None, fit: Optional[str] = None) -> ExportResult:
    """
    Write every screenshot size for each (name, image) pair.

    The size table is picked per image from its orientation. Outputs land in
    `<output_folder>/<size name>/<stem>.png`.
    """
    selection = parse_platform(platform)
    resample = resample or _cfg.RESAMPLE
    fit = fit or _cfg.SCREENSHOT_FIT
    resample_filter(resample)
    if fit not in FIT_MODES:
        raise ValueError(f"Unknown fit mode: {fit!r} (expected one of {', '.join(FIT_MODES)})")
    result = ExportResult(Mode.SCREENSHOTS, selection, output_folder, images=len(images))

    stems = unique_stems(name for name, _ in images)
    for stem, (name, img) in zip(stems, images):
        orientation = detect_orientation(img)
        logger.info(f"{os.path.basename(name)}: {img.size[0]}x{img.size[1]} ({orientation.value})")
        for size in screenshot_sizes(selection, orientation):
            folder = os.path.join(output_folder, size.name)
            os.makedirs(folder, exist_ok=True)
            path = os.path.join(folder, size.filename(stem))
            if _write(img, size.width, size.height, path, resample, fit):
                result.files.append(path)
            else:
                result.failed.append(path)

    return result


def try_load_image(source):
    """Decode one source; returns (image, None) or (None, error)."""
    try:
        return load_image(source), None
    except ImageLoadError as e:
        return None, e


def load_images(sources: Sequence, max_workers: Optional[int] = None):
    """
    Decode all sources concurrently and wait for every one of them.

    Returns (loaded, skipped): `loaded` is a list of (source, image) in input
    order, `skipped` lists the sources that failed to decode.
    """
    if not sources:
        return [], []
    workers = max(1, min(max_workers or _cfg.LOAD_WORKERS, len(sources)))
    with ThreadPoolExecutor(max_workers=workers) as pool:
        outcomes = list(pool.map(try_load_image, sources))

    loaded, skipped = [], []
    for source, (img, error) in zip(sources, outcomes):
        if img is None:
            logger.warning(f"Skipping {source}: {error}")
            skipped.append(str(source))
        else:
            loaded.append((source, img))
    return loaded, skipped


def run_icons(source, platform=PlatformSelection.BOTH, output_folder: Optional[str] = None,
              picker: Optional[FolderPicker] = None, resample: Optional[str] = None) -> ExportResult:
    """Full icon flow: decode the source, resolve the folder, export."""
    start_time = time.time()
    img = load_image(source)
    folder = resolve_output_folder(output_folder or _cfg.icons_folder(), picker)
    result = export_icons(img, platform, folder, resample)
    logger.info(f"{result.message} in {round((time.time() - start_time) * 1000)}ms → {folder}")
    return result


def run_screenshots(sources: Sequence, platform=PlatformSelection.IOS, output_folder: Optional[str] = None,
                    picker: Optional[FolderPicker] = None, resample: Optional[str] = None,
                    fit: Optional[str] = None) -> ExportResult:
    """Full screenshot flow; undecodable sources are skipped, none at all is an error."""
    start_time = time.time()
    loaded, skipped = load_images(sources)
    if not loaded:
        raise ImageLoadError("No valid images to export")
    folder = resolve_output_folder(output_folder or _cfg.screenshots_folder(), picker)
    named = [(str(source), img) for source, img in loaded]
    result = export_screenshots(named, platform, folder, resample, fit)
    result.skipped.extend(skipped)
    logger.info(f"{result.message} in {round((time.time() - start_time) * 1000)}ms → {folder}")
    return result
