"""Scale, resolution and zoom level conversion utilities."""

import logging
import math
from typing import Sequence

import numpy as np
import pyproj
from pyproj.exceptions import CRSError

from mapindex.core.config import (
    DEFAULT_UNITS,
    DPI,
    INCHES_PER_METER,
    METERS_PER_UNIT,
    PROJECTION_UNIT_NAMES,
    SCALE_ROUNDING_TIERS,
    ZOOM_EPSILON,
    UnknownUnitError,
    Units,
)
from mapindex.models.scene import View

logger = logging.getLogger(__name__)


class ScaleCalculator:
    """Conversions between cartographic scale, map resolution and zoom levels."""

    @staticmethod
    def meters_per_unit(units: Units | str) -> float:
        """
        Get the number of meters in one unit.

        Args:
            units: Linear unit, as Units member or its value ('m', 'degrees', ...)

        Returns:
            Meters per unit

        Raises:
            UnknownUnitError: If the unit is not known
        """
        try:
            return METERS_PER_UNIT[Units(units)]
        except ValueError:
            raise UnknownUnitError(
                f"Unknown unit: {units!r}. Valid units: {', '.join(u.value for u in Units)}"
            ) from None

    @staticmethod
    def resolution_for_scale(scale: float | str, units: Units | str) -> float:
        """
        Calculate the map resolution for a scale denominator.

        Args:
            scale: Scale denominator (e.g. 50000 for 1:50000)
            units: Units the resolution is expressed in

        Returns:
            Resolution in map units per pixel, or NaN if the unit is unknown
        """
        try:
            mpu = ScaleCalculator.meters_per_unit(units)
        except UnknownUnitError as e:
            logger.warning(str(e))
            return math.nan

        return float(scale) / (mpu * INCHES_PER_METER * DPI)

    @staticmethod
    def scale_for_resolution(resolution: float | str, units: Units | str) -> float:
        """
        Calculate the scale denominator for a map resolution.

        Args:
            resolution: Resolution in map units per pixel
            units: Units the resolution is expressed in

        Returns:
            Scale denominator, or NaN if the unit is unknown
        """
        try:
            mpu = ScaleCalculator.meters_per_unit(units)
        except UnknownUnitError as e:
            logger.warning(str(e))
            return math.nan

        return float(resolution) * mpu * INCHES_PER_METER * DPI

    @staticmethod
    def round_scale(scale: float | str) -> int:
        """
        Round a scale denominator for display, depending on its size.

        Below 100 the scale is rounded to an integer, below 10 000 to a
        multiple of 10, below 1 000 000 to a multiple of 100 and above that
        to a multiple of 1000. Halves round up.

        Args:
            scale: Exact scale denominator

        Returns:
            Rounded scale denominator

        Raises:
            ValueError: If the scale is not a number, negative or not finite
        """
        try:
            scale = float(scale)
        except (TypeError, ValueError):
            raise ValueError(f"Scale must be a number, got {scale!r}") from None

        if not math.isfinite(scale) or scale < 0:
            raise ValueError(f"Scale must be a finite, non-negative number, got {scale}")

        for upper_bound, step in SCALE_ROUNDING_TIERS:
            if scale < upper_bound:
                quotient = scale / step
                whole = math.floor(quotient)
                # Adding 0.5 before flooring would round 0.49999999999999994 up
                return (whole + (quotient - whole >= 0.5)) * step

        # Unreachable: the last tier is unbounded
        raise ValueError(f"No rounding tier for scale {scale}")

    @staticmethod
    def zoom_for_scale(
        scale: float | str, resolutions: Sequence[float], units: Units | str = DEFAULT_UNITS
    ) -> int:
        """
        Find the zoom level whose resolution best matches a scale.

        Ties are resolved in favour of the earlier entry of the ladder.

        Args:
            scale: Scale denominator
            resolutions: Resolution ladder of the view
            units: Units the resolutions are expressed in

        Returns:
            Index into resolutions; 0 for non-numeric, non-finite or negative scales

        Raises:
            ValueError: If resolutions is empty and the scale is valid
        """
        try:
            scale = float(scale)
        except (TypeError, ValueError):
            return 0

        if not math.isfinite(scale) or scale < 0:
            return 0

        if len(resolutions) == 0:
            raise ValueError("Resolutions must not be empty")

        resolution = ScaleCalculator.resolution_for_scale(scale, units)
        if math.isnan(resolution):
            logger.warning(f"Cannot determine zoom for scale {scale} in units {units!r}")
            return 0

        ladder = np.asarray(resolutions, dtype=float)
        closest = ladder[np.argmin(np.abs(ladder - resolution))]
        return int(np.flatnonzero(np.abs(ladder - closest) <= ZOOM_EPSILON)[0])

    @staticmethod
    def units_for_projection(projection: str) -> Units:
        """
        Determine the linear unit of a projection from its first axis.

        Args:
            projection: CRS identifier understood by pyproj (e.g. 'EPSG:4326')

        Returns:
            Units of the projection

        Raises:
            UnknownUnitError: If the projection or its unit cannot be resolved
        """
        try:
            crs = pyproj.CRS.from_user_input(projection)
        except CRSError as e:
            raise UnknownUnitError(f"Unknown projection: {projection}") from e

        if not crs.axis_info:
            raise UnknownUnitError(f"Projection {projection} has no axis information")

        unit_name = crs.axis_info[0].unit_name
        if unit_name not in PROJECTION_UNIT_NAMES:
            raise UnknownUnitError(f"Unsupported unit {unit_name!r} of projection {projection}")

        return PROJECTION_UNIT_NAMES[unit_name]

    @staticmethod
    def view_scale(view: View | None, rounded: bool = False) -> float | None:
        """
        Calculate the scale of a view at its current resolution.

        Args:
            view: The view, possibly not initialized yet
            rounded: Round the scale for display

        Returns:
            Scale denominator, or None if the view has no resolution
        """
        if view is None or not view.resolution:
            return None

        units = ScaleCalculator.units_for_projection(view.projection)
        scale = ScaleCalculator.scale_for_resolution(view.resolution, units)
        return ScaleCalculator.round_scale(scale) if rounded else scale
