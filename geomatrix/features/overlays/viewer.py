"""
Docstring for geomatrix.features.overlays.viewer

Hosts the QML front end: creates the bridge around an AffineGeoTransform,
registers it as the GeoTransform singleton and loads qml/Main.qml.
"""
from __future__ import annotations

import sys
from pathlib import Path

from PySide6.QtCore import QUrl
from PySide6.QtGui import QGuiApplication
from PySide6.QtQml import QQmlApplicationEngine

from geomatrix.globals import directories
from geomatrix.globals.logutil import error, process_step
from geomatrix.features.transform import AffineGeoTransform
from .geotransform_bridge import GeoTransformBridge, register_qml_singleton


def load_engine(bridge: GeoTransformBridge, qml_file: Path | None = None) -> QQmlApplicationEngine:
    """Register ``bridge`` and load the QML scene. A Q(Gui)Application must exist."""
    qml_file = qml_file or directories.QML_DIR / "Main.qml"
    register_qml_singleton(bridge)

    engine = QQmlApplicationEngine()
    process_step(f"Loading QML scene {qml_file}")
    engine.load(QUrl.fromLocalFile(str(qml_file)))
    if not engine.rootObjects():
        error(f"Failed to load QML scene {qml_file}")
        raise RuntimeError(f"Failed to load QML scene {qml_file}")
    return engine


def run(transform: AffineGeoTransform, qml_file: Path | None = None) -> int:
    app = QGuiApplication.instance() or QGuiApplication(sys.argv)
    bridge = GeoTransformBridge(transform)
    engine = load_engine(bridge, qml_file)  # noqa: F841 - engine must stay alive during exec()
    return app.exec()
