"""Constants for scale, resolution and legend request calculations."""

import math
from enum import Enum


class UnknownUnitError(ValueError):
    """Raised when a linear unit has no meters-per-unit factor."""


class Units(str, Enum):
    """Linear units a map projection can be expressed in."""

    METERS = "m"
    DEGREES = "degrees"
    FEET = "ft"
    US_FEET = "us-ft"
    RADIANS = "radians"


# Radius of the normal sphere used for angular units
EARTH_RADIUS = 6370997

METERS_PER_UNIT: dict[Units, float] = {
    Units.METERS: 1.0,
    Units.DEGREES: 2 * math.pi * EARTH_RADIUS / 360,
    Units.FEET: 0.3048,
    Units.US_FEET: 1200 / 3937,
    Units.RADIANS: EARTH_RADIUS / (2 * math.pi),
}

# pyproj axis unit names -> Units
PROJECTION_UNIT_NAMES: dict[str, Units] = {
    "metre": Units.METERS,
    "meter": Units.METERS,
    "degree": Units.DEGREES,
    "foot": Units.FEET,
    "US survey foot": Units.US_FEET,
    "radian": Units.RADIANS,
}

# Screen assumptions (OGC standardized rendering pixel of 0.28mm)
DPI = 25.4 / 0.28
INCHES_PER_METER = 39.37

# Tolerance when matching a resolution back to its zoom index
ZOOM_EPSILON = 1e-10

# Scale rounding tiers: (upper bound exclusive, rounding step)
SCALE_ROUNDING_TIERS: list[tuple[float, int]] = [
    (100, 1),
    (10_000, 10),
    (1_000_000, 100),
    (math.inf, 1000),
]

# View settings
DEFAULT_PROJECTION = "EPSG:3857"
DEFAULT_UNITS = Units.METERS

# Legend graphic request settings
LEGEND_GRAPHIC_PARAMS: dict[str, str] = {
    "VERSION": "1.3.0",
    "SERVICE": "WMS",
    "REQUEST": "getLegendGraphic",
    "FORMAT": "image/png",
}

# Request parameter holding the WMS layer name(s)
LAYERS_PARAM = "LAYERS"

# Characters left unescaped in request strings
REQUEST_STRING_SAFE_CHARS = "/:,"
