"""Garden configuration: tunable ranges, viewport classes and their profiles.

Everything here is an immutable value. A Garden receives one GardenOptions at
construction and re-derives its active ViewportProfile whenever the surface
is resized; nothing reads configuration from module-level mutable state.
"""

from dataclasses import dataclass, field

MOBILE = "mobile"
TABLET = "tablet"
DESKTOP = "desktop"

# Fixed surface size used on desktop viewports
DESKTOP_SURFACE = (670, 625)


@dataclass(frozen=True)
class Range:
    """Inclusive numeric range used for random sampling."""

    min: float
    max: float

    def __post_init__(self) -> None:
        if self.min > self.max:
            raise ValueError(f"Range min {self.min} is greater than max {self.max}")


@dataclass(frozen=True)
class ColorOptions:
    """Per-channel sampling ranges for bloom colors (0-255)."""

    r: Range = Range(128, 255)
    g: Range = Range(0, 128)
    b: Range = Range(0, 128)


@dataclass(frozen=True)
class ViewportProfile:
    """Density and drawing parameters for one viewport class."""

    name: str
    density: int
    bloom_radius: Range
    petal_count: Range
    opacity: float
    stroke_width: float  # petal line width
    glow_blur: float  # petal shadow blur radius, in device pixels
    scale: float  # bloom max scale and heart curve scale
    seed_interval_ms: float  # heart seeding cadence
    heart_offset_y: float  # heart origin sits this far above the surface centre


def _default_profiles() -> dict[str, ViewportProfile]:
    return {
        MOBILE: ViewportProfile(
            name=MOBILE, density=5,
            bloom_radius=Range(4, 6), petal_count=Range(6, 10),
            opacity=0.15, stroke_width=1, glow_blur=2, scale=0.7,
            seed_interval_ms=80, heart_offset_y=30,
        ),
        TABLET: ViewportProfile(
            name=TABLET, density=7,
            bloom_radius=Range(6, 8), petal_count=Range(7, 12),
            opacity=0.1, stroke_width=2, glow_blur=4, scale=0.85,
            seed_interval_ms=50, heart_offset_y=55,
        ),
        DESKTOP: ViewportProfile(
            name=DESKTOP, density=10,
            bloom_radius=Range(8, 10), petal_count=Range(8, 15),
            opacity=0.1, stroke_width=3, glow_blur=6, scale=1.0,
            seed_interval_ms=50, heart_offset_y=55,
        ),
    }


@dataclass(frozen=True)
class HeartOptions:
    """Heart curve sweep and placement spacing."""

    start_angle: float = 10.0
    end_angle: float = 30.0
    step: float = 0.2
    x_scale: float = 19.5
    y_scale: float = 20.0
    spacing: float = 1.3  # minimum seed distance, in units of max bloom radius


@dataclass(frozen=True)
class GardenOptions:
    petal_stretch: Range = Range(0.1, 3.0)
    grow_factor: Range = Range(0.1, 1.0)
    frame_interval_ms: float = 1000 / 60
    color: ColorOptions = ColorOptions()
    breakpoints: tuple[int, int] = (480, 768)
    profiles: dict[str, ViewportProfile] = field(default_factory=_default_profiles)
    heart: HeartOptions = HeartOptions()
    color_retries: int = 100

    def viewport_class(self, width: float) -> str:
        """Bucket a viewport width into mobile, tablet or desktop."""
        mobile_max, tablet_max = self.breakpoints
        if width <= mobile_max:
            return MOBILE
        if width <= tablet_max:
            return TABLET
        return DESKTOP

    def profile_for(self, width: float) -> ViewportProfile:
        return self.profiles[self.viewport_class(width)]


def surface_size(viewport_width: int, viewport_height: int,
                 options: GardenOptions | None = None) -> tuple[int, int]:
    """Pick the garden surface size for a viewport, as the page layout did."""
    options = options or GardenOptions()
    viewport = options.viewport_class(viewport_width)
    if viewport == MOBILE:
        w = min(viewport_width - 20, 400)
        h = min(viewport_height - 200, 300)
    elif viewport == TABLET:
        w = min(viewport_width - 100, 550)
        h = min(viewport_height - 150, 450)
    else:
        w, h = DESKTOP_SURFACE
    return (max(1, int(w)), max(1, int(h)))
