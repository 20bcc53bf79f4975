from .errors import GeoTransformError, InvalidArgumentError, SingularTransformError
from .geo_transform import AffineGeoTransform, pixel_affine

__all__ = [
    "AffineGeoTransform",
    "pixel_affine",
    "GeoTransformError",
    "InvalidArgumentError",
    "SingularTransformError",
]
