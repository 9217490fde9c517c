import logging
import os
from typing import Callable, Iterable, List, Optional

from .sizes import PLATFORM_NAMES, PlatformSelection, parse_platform

logger = logging.getLogger(__name__)

# Called with the folder that failed; returns a replacement or None to cancel
FolderPicker = Callable[[str], Optional[str]]


class OutputFolderError(Exception):
    """No usable output folder could be found."""

    def __init__(self, folder, reason=None):
        self.folder = folder
        self.reason = reason
        msg = f"Cannot write to output folder '{folder}'"
        if reason is not None:
            msg += f": {reason}"
        super().__init__(msg)


class ExportCancelled(Exception):
    """The folder picker was dismissed without a choice."""


def ensure_writable(folder: str) -> str:
    """Create `folder` (with parents) and make sure files can be written to it.

    Raises OSError when the folder cannot be created or is read-only.
    """
    folder = os.path.abspath(os.path.expanduser(folder))
    os.makedirs(folder, exist_ok=True)
    if not os.access(folder, os.W_OK | os.X_OK):
        raise PermissionError(f"Folder is not writable: {folder}")
    return folder


def resolve_output_folder(preferred: str, picker: Optional[FolderPicker] = None) -> str:
    """
    Return a writable output folder, trying `preferred` first.

    When `preferred` cannot be created the `picker` is asked for another
    location. Without a picker, or when the picked folder is unusable too,
    OutputFolderError is raised; an empty pick raises ExportCancelled.
    """
    try:
        return ensure_writable(preferred)
    except OSError as e:
        logger.warning(f"Default output folder '{preferred}' is not usable ({e})")
        if picker is None:
            raise OutputFolderError(preferred, e) from e

    chosen = picker(preferred)
    if not chosen:
        raise ExportCancelled("No output folder selected")
    try:
        folder = ensure_writable(chosen)
    except OSError as e:
        raise OutputFolderError(chosen, e) from e
    logger.info(f"Using picked output folder '{folder}'")
    return folder


def platform_folder(root: str, platform: PlatformSelection, selection) -> str:
    """Folder for one platform: a named subfolder when both are exported."""
    if parse_platform(selection) is PlatformSelection.BOTH:
        return os.path.join(root, PLATFORM_NAMES[platform])
    return root


def unique_stems(names: Iterable[str]) -> List[str]:
    """Output stems for a batch of source names, suffixing repeats with _1, _2, ...

    Repeats are matched case-insensitively, like the default macOS filesystem.
    """
    seen = set()
    stems = []
    for name in names:
        base = os.path.splitext(os.path.basename(name))[0] or "screenshot"
        stem = base
        i = 1
        while stem.lower() in seen:
            stem = f"{base}_{i}"
            i += 1
        seen.add(stem.lower())
        stems.append(stem)
    return stems
