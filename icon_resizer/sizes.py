"""
Size tables for every output the resizer can produce.

Icons follow the Xcode asset catalog layout (points x scale = pixels).
Screenshots follow the App Store Connect display classes; the tables are
declared in portrait and swapped for landscape sources.

Usage in other files:
    from .sizes import sizes_for, PlatformSelection, Mode
"""
from enum import Enum
from typing import List, NamedTuple, Optional


class Mode(str, Enum):
    ICONS = "icons"
    SCREENSHOTS = "screenshots"


class PlatformSelection(str, Enum):
    BOTH = "both"
    IOS = "ios"
    MACOS = "macos"

    @property
    def label(self) -> str:
        return _PLATFORM_LABELS[self]

    @property
    def platforms(self) -> List["PlatformSelection"]:
        """Expand `both` into the single platforms it stands for."""
        if self is PlatformSelection.BOTH:
            return [PlatformSelection.IOS, PlatformSelection.MACOS]
        return [self]


_PLATFORM_LABELS = {
    PlatformSelection.BOTH: "iOS + macOS",
    PlatformSelection.IOS: "iOS Only",
    PlatformSelection.MACOS: "macOS Only",
}

# Short names used for folders and status messages
PLATFORM_NAMES = {
    PlatformSelection.IOS: "iOS",
    PlatformSelection.MACOS: "macOS",
}


class Orientation(str, Enum):
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"


class IconSize(NamedTuple):
    name: str
    points: float
    scale: int
    idiom: str

    @property
    def pixels(self) -> int:
        return int(round(self.points * self.scale))

    @property
    def filename(self) -> str:
        return f"{self.name}.png"

    @property
    def size(self) -> str:
        # Xcode writes "20x20" but "83.5x83.5"
        pts = int(self.points) if float(self.points).is_integer() else self.points
        return f"{pts}x{pts}"

    @property
    def scale_label(self) -> str:
        return f"{self.scale}x"


class ScreenshotSize(NamedTuple):
    name: str
    width: int
    height: int
    label: str

    def rotated(self) -> "ScreenshotSize":
        return self._replace(width=self.height, height=self.width)

    def filename(self, stem: str) -> str:
        return f"{stem}.png"


# ============================================================================
# ICONS
# ============================================================================
IOS_ICON_SIZES = [
    # iPhone Notification
    IconSize("Icon-20@2x", 20, 2, "iphone"),
    IconSize("Icon-20@3x", 20, 3, "iphone"),
    # iPhone Settings
    IconSize("Icon-29@2x", 29, 2, "iphone"),
    IconSize("Icon-29@3x", 29, 3, "iphone"),
    # iPhone Spotlight
    IconSize("Icon-40@2x", 40, 2, "iphone"),
    IconSize("Icon-40@3x", 40, 3, "iphone"),
    # iPhone App
    IconSize("Icon-60@2x", 60, 2, "iphone"),
    IconSize("Icon-60@3x", 60, 3, "iphone"),
    # iPad Notification
    IconSize("Icon-20", 20, 1, "ipad"),
    # iPad Settings
    IconSize("Icon-29", 29, 1, "ipad"),
    # iPad Spotlight
    IconSize("Icon-40", 40, 1, "ipad"),
    # iPad App
    IconSize("Icon-76", 76, 1, "ipad"),
    IconSize("Icon-76@2x", 76, 2, "ipad"),
    # iPad Pro
    IconSize("Icon-83.5@2x", 83.5, 2, "ipad"),
    # App Store
    IconSize("Icon-1024", 1024, 1, "ios-marketing"),
]

MACOS_ICON_SIZES = [
    IconSize("icon_16x16", 16, 1, "mac"),
    IconSize("icon_16x16@2x", 16, 2, "mac"),
    IconSize("icon_32x32", 32, 1, "mac"),
    IconSize("icon_32x32@2x", 32, 2, "mac"),
    IconSize("icon_128x128", 128, 1, "mac"),
    IconSize("icon_128x128@2x", 128, 2, "mac"),
    IconSize("icon_256x256", 256, 1, "mac"),
    IconSize("icon_256x256@2x", 256, 2, "mac"),
    IconSize("icon_512x512", 512, 1, "mac"),
    IconSize("icon_512x512@2x", 512, 2, "mac"),
]

ICON_SIZES = {
    PlatformSelection.IOS: IOS_ICON_SIZES,
    PlatformSelection.MACOS: MACOS_ICON_SIZES,
}

# ============================================================================
# SCREENSHOTS (portrait; landscape sources get the rotated box)
# ============================================================================
IOS_SCREENSHOT_SIZES = [
    ScreenshotSize("iPhone-6.9", 1320, 2868, '6.9" Display (iPhone 16 Pro Max)'),
    ScreenshotSize("iPhone-6.5", 1284, 2778, '6.5" Display (iPhone 14 Plus)'),
    ScreenshotSize("iPhone-5.5", 1242, 2208, '5.5" Display (iPhone 8 Plus)'),
    ScreenshotSize("iPad-13", 2064, 2752, '13" Display (iPad Pro M4)'),
    ScreenshotSize("iPad-12.9", 2048, 2732, '12.9" Display (iPad Pro 2nd gen)'),
]

# Mac App Store only takes 16:10 landscape, so orientation is ignored here
MACOS_SCREENSHOT_SIZES = [
    ScreenshotSize("Mac-2880", 2880, 1800, "2880x1800 (Retina 15\")"),
    ScreenshotSize("Mac-2560", 2560, 1600, "2560x1600 (Retina 13\")"),
    ScreenshotSize("Mac-1440", 1440, 900, "1440x900"),
    ScreenshotSize("Mac-1280", 1280, 800, "1280x800"),
]


def parse_platform(value) -> PlatformSelection:
    """Accept an enum, its value ("ios") or its label ("iOS Only")."""
    if isinstance(value, PlatformSelection):
        return value
    text = str(value).strip().lower()
    for platform in PlatformSelection:
        if text in (platform.value, platform.label.lower()):
            return platform
    raise ValueError(f"Unknown platform: {value!r}")


def parse_mode(value) -> Mode:
    if isinstance(value, Mode):
        return value
    try:
        return Mode(str(value).strip().lower())
    except ValueError:
        raise ValueError(f"Unknown mode: {value!r}")


def parse_orientation(value) -> Orientation:
    if isinstance(value, Orientation):
        return value
    try:
        return Orientation(str(value).strip().lower())
    except ValueError:
        raise ValueError(f"Unknown orientation: {value!r}")


def icon_sizes(platform) -> List[IconSize]:
    """All icon entries for the selection, iOS first when both are selected."""
    selection = parse_platform(platform)
    sizes = []
    for single in selection.platforms:
        sizes.extend(ICON_SIZES[single])
    return sizes


def screenshot_sizes(platform, orientation) -> List[ScreenshotSize]:
    selection = parse_platform(platform)
    orientation = parse_orientation(orientation)
    sizes = []
    for single in selection.platforms:
        if single is PlatformSelection.MACOS:
            sizes.extend(MACOS_SCREENSHOT_SIZES)
        elif orientation is Orientation.LANDSCAPE:
            sizes.extend(s.rotated() for s in IOS_SCREENSHOT_SIZES)
        else:
            sizes.extend(IOS_SCREENSHOT_SIZES)
    return sizes


def sizes_for(mode, platform, orientation: Optional[Orientation] = None):
    """Dispatch a (mode, platform) selection to its size table."""
    mode = parse_mode(mode)
    if mode is Mode.ICONS:
        return icon_sizes(platform)
    return screenshot_sizes(platform, orientation or Orientation.PORTRAIT)
