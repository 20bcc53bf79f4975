"""
geomatrix/features/transform/errors.py

Exceptions raised by the geotransform core.
"""


class GeoTransformError(Exception):
    """Base class for geotransform failures."""


class InvalidArgumentError(GeoTransformError, ValueError):
    """A transform update was rejected; the previous state is kept."""


class SingularTransformError(GeoTransformError, ArithmeticError):
    """The forward matrix cannot be inverted, so world -> pixel is unavailable."""

    def __init__(self, determinant: float, message: str | None = None):
        self.determinant = determinant
        super().__init__(message or f"Geotransform is singular (det={determinant:.3e}); cannot map world -> pixel.")
