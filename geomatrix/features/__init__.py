from .transform import (AffineGeoTransform,
                        pixel_affine,
                        GeoTransformError,
                        InvalidArgumentError,
                        SingularTransformError)
