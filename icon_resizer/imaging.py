"""
Pillow helpers: decode a source image, resample it to an exact pixel box
and encode the result as PNG.
"""
import io
import logging
import os
from typing import Tuple, Union

from PIL import Image, ImageOps, UnidentifiedImageError

from .sizes import Orientation

logger = logging.getLogger(__name__)

RESAMPLE_FILTERS = {
    "nearest": Image.Resampling.NEAREST,
    "bilinear": Image.Resampling.BILINEAR,
    "bicubic": Image.Resampling.BICUBIC,
    "lanczos": Image.Resampling.LANCZOS,
}

FIT_MODES = ("stretch", "crop", "pad")


class ImageLoadError(Exception):
    """Raised when a source cannot be decoded as an image."""


def load_image(source: Union[str, bytes, "os.PathLike", io.IOBase]) -> Image.Image:
    """
    Decode `source` (path, raw bytes or binary file object) into an RGBA image.

    The pixel data is loaded eagerly so the returned image does not keep the
    underlying file open.
    """
    if isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(source)
    try:
        with Image.open(source) as img:
            img.load()
            # honor EXIF orientation
            return ImageOps.exif_transpose(img).convert("RGBA")
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        name = source if isinstance(source, (str, os.PathLike)) else "upload"
        raise ImageLoadError(f"Could not load image from {name}: {e}") from e


def resample_filter(name: str):
    try:
        return RESAMPLE_FILTERS[name.lower()]
    except (KeyError, AttributeError):
        raise ValueError(f"Unknown resample filter: {name!r} (expected one of {', '.join(RESAMPLE_FILTERS)})")


def _crop_to_aspect(img: Image.Image, width: int, height: int) -> Image.Image:
    src_w, src_h = img.size
    target_ratio = width / height
    if src_w / src_h > target_ratio:
        # too wide -> crop sides
        new_w = max(1, int(round(src_h * target_ratio)))
        x0 = (src_w - new_w) // 2
        return img.crop((x0, 0, x0 + new_w, src_h))
    # too tall -> crop top/bottom
    new_h = max(1, int(round(src_w / target_ratio)))
    y0 = (src_h - new_h) // 2
    return img.crop((0, y0, src_w, y0 + new_h))


def _pad_to_box(img: Image.Image, width: int, height: int, resample) -> Image.Image:
    src_w, src_h = img.size
    factor = min(width / src_w, height / src_h)
    new_w = max(1, min(width, int(round(src_w * factor))))
    new_h = max(1, min(height, int(round(src_h * factor))))
    resized = img.resize((new_w, new_h), resample)
    canvas = Image.new("RGBA", (width, height), (0, 0, 0, 0))
    canvas.paste(resized, ((width - new_w) // 2, (height - new_h) // 2))
    return canvas


def resize_exact(img: Image.Image, width: int, height: int,
                 resample: str = "lanczos", fit: str = "stretch") -> Image.Image:
    """
    Resample `img` to exactly `width` x `height` pixels.

    Args:
        img: Source image (any mode; converted to RGBA)
        width, height: Target pixel dimensions
        resample: Pillow filter name, see RESAMPLE_FILTERS
        fit: "stretch" scales straight into the box, "crop" center-crops to
             the box aspect ratio first, "pad" letterboxes on transparency

    Returns:
        New RGBA image of the requested size
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Invalid target size {width}x{height}")
    flt = resample_filter(resample)
    if img.mode != "RGBA":
        img = img.convert("RGBA")

    if fit == "stretch":
        return img.resize((width, height), flt)
    if fit == "crop":
        return _crop_to_aspect(img, width, height).resize((width, height), flt)
    if fit == "pad":
        return _pad_to_box(img, width, height, flt)
    raise ValueError(f"Unknown fit mode: {fit!r} (expected one of {', '.join(FIT_MODES)})")


def save_png(img: Image.Image, path: str) -> str:
    img.save(path, "PNG", optimize=True)
    return path


def detect_orientation(image_or_size: Union[Image.Image, Tuple[int, int]]) -> Orientation:
    """Portrait only when strictly taller than wide; square counts as landscape."""
    if isinstance(image_or_size, Image.Image):
        width, height = image_or_size.size
    else:
        width, height = image_or_size
    if height > width:
        return Orientation.PORTRAIT
    return Orientation.LANDSCAPE
