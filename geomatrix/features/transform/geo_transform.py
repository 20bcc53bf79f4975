"""
geomatrix/features/transform/geo_transform.py

GDAL-style affine geotransform for pixel <-> world coordinate conversion.

A geotransform is six coefficients ``(c0, c1, c2, c3, c4, c5)``::

    x = c0 + px*c1 + py*c2
    y = c3 + px*c4 + py*c5

c0/c3 are the world position of the top-left pixel corner, c1/c5 the pixel
width/height (c5 negative for north-up rasters) and c2/c4 the row/column
rotation terms. The inverse is cached and recomputed on every update.
"""
from __future__ import annotations

from typing import Iterable, Sequence, Tuple

import math

import numpy as np
from affine import Affine

from geomatrix.globals import configs
from geomatrix.globals.logutil import warn, debug
from .errors import InvalidArgumentError, SingularTransformError

Point = Tuple[float, float]
BBox = Tuple[float, float, float, float]


def pixel_affine(width, height, *, xmin, ymin, xmax, ymax) -> Affine:
    """North-up affine that stretches a ``width`` x ``height`` image over an extent.

    Row 0 sits on ``ymax``, so the y pixel size comes out negative.
    """
    if width <= 0 or height <= 0:
        raise InvalidArgumentError(f"Extent fit needs a positive image size, got {width}x{height}.")
    if xmax <= xmin or ymax <= ymin:
        raise InvalidArgumentError(f"Empty extent: x {xmin}..{xmax}, y {ymin}..{ymax}.")
    return Affine(
        (xmax - xmin) / width, 0.0, xmin,
        0.0, -(ymax - ymin) / height, ymax,
    )


def _as_size(value, name: str) -> int:
    try:
        size = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidArgumentError(f"Image {name} must be a number, got {value!r}.") from exc
    if not size.is_integer() or size < 0:
        raise InvalidArgumentError(f"Image {name} must be a non-negative integer, got {value!r}.")
    return int(size)


def _pad_4x4(m3: np.ndarray) -> np.ndarray:
    """Embed a 2D affine into the 4x4 layout QMatrix4x4 expects (z passes through)."""
    m4 = np.identity(4)
    m4[0, 0], m4[0, 1], m4[0, 3] = m3[0, 0], m3[0, 1], m3[0, 2]
    m4[1, 0], m4[1, 1], m4[1, 3] = m3[1, 0], m3[1, 1], m3[1, 2]
    return m4


class AffineGeoTransform:
    """Six-coefficient geotransform plus the image extent it applies to.

    Construct one per hosting application and hand it to whatever needs it;
    there is no module-level instance.
    """

    def __init__(self, coefficients: Sequence[float] | None = None, width: int = 0, height: int = 0):
        self._coefficients = (0.0,) * configs.GEOTRANSFORM_SIZE
        self._inverse = (0.0,) * configs.GEOTRANSFORM_SIZE
        self._invertible = False
        self._is_set = False
        self.width = 0
        self.height = 0
        if coefficients is not None:
            self.set_transform(coefficients, width, height)

    def __repr__(self):
        return (f"{type(self).__name__}(coefficients={list(self._coefficients)}, "
                f"width={self.width}, height={self.height})")

    # --- state -------------------------------------------------------------
    @property
    def coefficients(self) -> Tuple[float, ...]:
        return self._coefficients

    @property
    def inverse(self) -> Tuple[float, ...]:
        """Inverse coefficients ``(inv0..inv5)``; stale when not :attr:`is_invertible`."""
        return self._inverse

    @property
    def is_set(self) -> bool:
        return self._is_set

    @property
    def is_invertible(self) -> bool:
        return self._invertible

    @property
    def determinant(self) -> float:
        c = self._coefficients
        return c[1] * c[5] - c[2] * c[4]

    @property
    def affine(self) -> Affine:
        """Forward map as an :class:`affine.Affine`."""
        return Affine.from_gdal(*self._coefficients)

    @property
    def inverse_affine(self) -> Affine:
        self._require_inverse()
        return Affine(*self._inverse)

    def to_gdal(self) -> Tuple[float, ...]:
        return self._coefficients

    # --- updates -----------------------------------------------------------
    def set_transform(self, coefficients: Iterable[float], width: int, height: int) -> None:
        """Store new coefficients and image size, then recompute the inverse.

        Raises :class:`InvalidArgumentError` (leaving the current state alone)
        if there are not exactly six finite coefficients or a dimension is not a
        non-negative integer.
        """
        try:
            coeffs = tuple(float(c) for c in coefficients)
        except (TypeError, ValueError) as exc:
            raise InvalidArgumentError(f"Geotransform coefficients must be numbers: {exc}") from exc

        if len(coeffs) != configs.GEOTRANSFORM_SIZE:
            warn(f"Expected {configs.GEOTRANSFORM_SIZE} geotransform coefficients, got {len(coeffs)}")
            raise InvalidArgumentError(
                f"Expected {configs.GEOTRANSFORM_SIZE} geotransform coefficients, got {len(coeffs)}."
            )
        if not all(math.isfinite(c) for c in coeffs):
            raise InvalidArgumentError(f"Geotransform coefficients must be finite, got {list(coeffs)}.")
        width, height = _as_size(width, "width"), _as_size(height, "height")

        self._coefficients = coeffs
        self.width = width
        self.height = height
        self._is_set = True
        debug(f"Geotransform set to {list(coeffs)} for a {width}x{height} image")
        self._compute_inverse()

    def from_gdal(self, origin_x, origin_y, pixel_width, pixel_height,
                  rotation_x=0.0, rotation_y=0.0, *, width: int, height: int) -> None:
        """Named-parameter form of :meth:`set_transform`."""
        self.set_transform(
            (origin_x, pixel_width, rotation_x, origin_y, rotation_y, pixel_height),
            width, height,
        )

    def from_extent(self, xmin, ymin, xmax, ymax, *, width: int, height: int) -> None:
        """North-up transform covering ``(xmin, ymin, xmax, ymax)`` with a ``width`` x ``height`` image."""
        a = pixel_affine(width, height, xmin=xmin, ymin=ymin, xmax=xmax, ymax=ymax)
        self.set_transform(a.to_gdal(), width, height)

    def from_corners(self, top_left: Point, top_right: Point, bottom_right: Point,
                     bottom_left: Point, *, width: int, height: int) -> None:
        """Derive the geotransform from the world positions of the image corners.

        Three corners fully determine an affine map; ``bottom_right`` is
        accepted for symmetry with :meth:`image_corners` but not used.
        """
        if width <= 0 or height <= 0:
            raise InvalidArgumentError(f"Corner fit needs a positive image size, got {width}x{height}.")
        (tlx, tly), (trx, try_), (blx, bly) = top_left, top_right, bottom_left
        self.set_transform(
            (
                tlx,
                (trx - tlx) / width,
                (blx - tlx) / height,
                tly,
                (try_ - tly) / width,
                (bly - tly) / height,
            ),
            width, height,
        )

    def _compute_inverse(self) -> None:
        c0, c1, c2, c3, c4, c5 = self._coefficients
        det = c1 * c5 - c2 * c4
        if not math.isfinite(det) or not abs(det) >= configs.SINGULAR_DET_EPSILON:
            # previous inverse values are kept but must not be used
            self._invertible = False
            warn(f"Geotransform matrix is singular (det={det:.3e}); world -> pixel is unavailable")
            return

        inv_det = 1.0 / det
        inv0 = c5 * inv_det
        inv1 = -c2 * inv_det
        inv3 = -c4 * inv_det
        inv4 = c1 * inv_det
        inv2 = -c0 * inv0 - c3 * inv1
        inv5 = -c0 * inv3 - c3 * inv4
        self._inverse = (inv0, inv1, inv2, inv3, inv4, inv5)
        self._invertible = True

    def _require_inverse(self) -> None:
        if not self._invertible:
            raise SingularTransformError(self.determinant)

    # --- queries -----------------------------------------------------------
    def pixel_to_world(self, px: float, py: float) -> Point:
        c0, c1, c2, c3, c4, c5 = self._coefficients
        return (c0 + px * c1 + py * c2, c3 + px * c4 + py * c5)

    def world_to_pixel(self, x: float, y: float) -> Point:
        """Map a world position back to (fractional) pixel coordinates.

        Raises :class:`SingularTransformError` if the last update left the
        matrix non-invertible.
        """
        self._require_inverse()
        i0, i1, i2, i3, i4, i5 = self._inverse
        return (i0 * x + i1 * y + i2, i3 * x + i4 * y + i5)

    def image_corners(self) -> list[Point]:
        """World positions of the top-left, top-right, bottom-right and bottom-left corners."""
        w, h = self.width, self.height
        return [self.pixel_to_world(px, py) for px, py in ((0, 0), (w, 0), (w, h), (0, h))]

    def bounding_box(self) -> BBox:
        """``(min_x, min_y, max_x, max_y)`` over :meth:`image_corners`."""
        if not self._is_set or self.width == 0 or self.height == 0:
            return (0.0, 0.0, 0.0, 0.0)
        corners = np.asarray(self.image_corners(), dtype=float)
        min_x, min_y = corners.min(axis=0)
        max_x, max_y = corners.max(axis=0)
        return (float(min_x), float(min_y), float(max_x), float(max_y))

    def transform_matrix(self) -> np.ndarray:
        """3x3 row-major pixel -> world matrix."""
        c0, c1, c2, c3, c4, c5 = self._coefficients
        return np.array([[c1, c2, c0],
                         [c4, c5, c3],
                         [0.0, 0.0, 1.0]])

    def inverse_matrix(self) -> np.ndarray:
        """3x3 row-major world -> pixel matrix."""
        self._require_inverse()
        i0, i1, i2, i3, i4, i5 = self._inverse
        return np.array([[i0, i1, i2],
                         [i3, i4, i5],
                         [0.0, 0.0, 1.0]])

    def transform_matrix4x4(self) -> np.ndarray:
        return _pad_4x4(self.transform_matrix())

    def inverse_matrix4x4(self) -> np.ndarray:
        return _pad_4x4(self.inverse_matrix())
