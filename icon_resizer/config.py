"""
Config file to hold runtime options for the resizer and its FastAPI service.
Values come from environment variables; flags passed to `run_server.py` or
`resize_icons.py` overwrite these before any work starts.
"""
import os

# Runtime-configurable options; prefer environment variables for portability.
UPLOAD_TOKEN = os.getenv("UPLOAD_TOKEN")
ALLOW_REMOTE = os.getenv("ALLOW_REMOTE", "False").lower() in ("1", "true", "yes")
RELOAD = os.getenv("RELOAD", "False").lower() in ("1", "true", "yes")
ALLOW_ORIGINS = os.getenv("ALLOW_ORIGINS")  # comma-separated list or None to keep defaults
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Default output location. Tried first; when it cannot be created the caller
# falls back to asking for a folder.
OUTPUT_FOLDER = os.getenv("OUTPUT_FOLDER", os.path.join(os.path.expanduser("~"), "Desktop", "IconResizer"))
ICONS_SUBFOLDER = os.getenv("ICONS_SUBFOLDER", "AppIcons")
SCREENSHOTS_SUBFOLDER = os.getenv("SCREENSHOTS_SUBFOLDER", "Screenshots")

# Pillow filter name: nearest, bilinear, bicubic or lanczos
RESAMPLE = os.getenv("RESAMPLE", "lanczos")
# How screenshots are fitted to their target box: stretch, crop or pad
SCREENSHOT_FIT = os.getenv("SCREENSHOT_FIT", "stretch")

# Threads used to decode multiple dropped images at once
LOAD_WORKERS = int(os.getenv("LOAD_WORKERS", "4"))

# Icons below this edge length are upscaled; we only warn about it
RECOMMENDED_ICON_SOURCE = 1024

IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg")


def icons_folder():
    return os.path.join(OUTPUT_FOLDER, ICONS_SUBFOLDER)


def screenshots_folder():
    return os.path.join(OUTPUT_FOLDER, SCREENSHOTS_SUBFOLDER)
