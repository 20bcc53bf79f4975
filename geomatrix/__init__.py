from . import globals
from .globals import configs, directories

from .features.transform import (AffineGeoTransform,
                                 GeoTransformError,
                                 InvalidArgumentError,
                                 SingularTransformError)

__version__ = "0.1.0"

__all__ = [
    "AffineGeoTransform",
    "GeoTransformError",
    "InvalidArgumentError",
    "SingularTransformError",
]
