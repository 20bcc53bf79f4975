"""
Docstring for geomatrix.features.overlays.geotransform_bridge

Defines GeoTransformBridge, a QObject that exposes an AffineGeoTransform to QML.

The bridge owns no math of its own: it converts between Qt value types
(QPointF, QMatrix4x4, lists) and the plain tuples of the core, and turns core
exceptions into signals so QML code can react to them.
"""
from __future__ import annotations

from PySide6.QtCore import QObject, QPointF, Property, Signal, Slot
from PySide6.QtGui import QMatrix4x4
from PySide6.QtQml import qmlRegisterSingletonInstance

from geomatrix.features.transform import (
    AffineGeoTransform,
    InvalidArgumentError,
    SingularTransformError,
)
from geomatrix.globals import configs
from geomatrix.globals.logutil import warn, info


class GeoTransformBridge(QObject):
    transformChanged = Signal()
    transformRejected = Signal(str)
    singularTransform = Signal()

    def __init__(self, transform: AffineGeoTransform | None = None, parent=None):
        super().__init__(parent)
        self._transform = transform if transform is not None else AffineGeoTransform()

    @property
    def transform(self) -> AffineGeoTransform:
        return self._transform

    def _apply(self, update, *args, **kwargs) -> bool:
        try:
            update(*args, **kwargs)
        except InvalidArgumentError as exc:
            warn(f"GeoTransformBridge: {exc}")
            self.transformRejected.emit(str(exc))
            return False
        self.transformChanged.emit()
        return True

    def _is_invertible(self) -> bool:
        return self._transform.is_invertible

    invertible = Property(bool, _is_invertible, notify=transformChanged)

    # --- updates -----------------------------------------------------------
    @Slot(list, int, int, result=bool)
    def setGeoTransform(self, coefficients, width, height):
        return self._apply(self._transform.set_transform, coefficients, width, height)

    @Slot(float, float, float, float, float, float, int, int, result=bool)
    def updateTransformFromGDAL(self, originX, originY, pixelWidth, pixelHeight,
                                rotationX, rotationY, imageWidth, imageHeight):
        return self._apply(
            self._transform.from_gdal,
            originX, originY, pixelWidth, pixelHeight, rotationX, rotationY,
            width=imageWidth, height=imageHeight,
        )

    @Slot(float, float, float, float, float, float, float, float, int, int, result=bool)
    def updateTransform(self, topLeftLon, topLeftLat, topRightLon, topRightLat,
                        bottomLeftLon, bottomLeftLat, bottomRightLon, bottomRightLat,
                        imageWidth, imageHeight):
        return self._apply(
            self._transform.from_corners,
            (topLeftLon, topLeftLat),
            (topRightLon, topRightLat),
            (bottomRightLon, bottomRightLat),
            (bottomLeftLon, bottomLeftLat),
            width=imageWidth, height=imageHeight,
        )

    # --- queries -----------------------------------------------------------
    @Slot(float, float, result=QPointF)
    def pixelToWorld(self, pixelX, pixelY):
        return QPointF(*self._transform.pixel_to_world(pixelX, pixelY))

    @Slot(float, float, result=QPointF)
    def worldToPixel(self, lon, lat):
        # (0, 0) is only meaningful together with the singularTransform signal
        try:
            return QPointF(*self._transform.world_to_pixel(lon, lat))
        except SingularTransformError as exc:
            warn(f"GeoTransformBridge: {exc}")
            self.singularTransform.emit()
            return QPointF(0.0, 0.0)

    @Slot(result=list)
    def getImageCorners(self):
        return [QPointF(x, y) for x, y in self._transform.image_corners()]

    @Slot(result=list)
    def getBoundingBox(self):
        return list(self._transform.bounding_box())

    @Slot(result=QMatrix4x4)
    def getTransformationMatrix(self):
        return QMatrix4x4(*self._transform.transform_matrix4x4().ravel().tolist())


def register_qml_singleton(
    bridge: GeoTransformBridge,
    uri: str = configs.QML_IMPORT_NAME,
    major: int = configs.QML_IMPORT_MAJOR_VERSION,
    minor: int = configs.QML_IMPORT_MINOR_VERSION,
    name: str = configs.QML_SINGLETON_NAME,
) -> int:
    """Expose ``bridge`` to QML as ``import <uri> <major>.<minor>`` / ``<name>``.

    The caller keeps ownership of ``bridge``; it must outlive the QML engine.
    """
    type_id = qmlRegisterSingletonInstance(GeoTransformBridge, uri, major, minor, name, bridge)
    if type_id < 0:
        raise RuntimeError(f"Failed to register QML singleton {uri}.{name}")
    info(f"Registered QML singleton {uri} {major}.{minor} as {name}")
    return type_id
