from .geotransform_bridge import GeoTransformBridge, register_qml_singleton
