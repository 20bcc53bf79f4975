"""Typed configuration models and YAML loading helpers.

This module reads YAML configuration files into structured dataclasses
instead of passing around raw dictionaries.

Currently supported configs
---------------------------
- GeoTransformConfig: geotransform coefficients / image size / corners
  (config/geotransform.yml)

The public entry point is :func:`read_config_file`.

Example ``geotransform.yml``::

    coefficients: [100.0, 1.0, 0.0, 200.0, 0.0, -1.0]
    width: 10
    height: 5
    # or, instead of coefficients:
    corners:
      top_left: [100.0, 200.0]
      top_right: [110.0, 200.0]
      bottom_right: [110.0, 195.0]
      bottom_left: [100.0, 195.0]
    # or a north-up extent:
    # xmin: 100.0
    # ymin: 195.0
    # xmax: 110.0
    # ymax: 200.0
    verbose: false
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Any, Literal, Tuple
from pathlib import Path

import yaml

from geomatrix.globals.logutil import info, error
from geomatrix.globals import directories, configs

Point = Tuple[float, float]
CORNER_KEYS = ("top_left", "top_right", "bottom_right", "bottom_left")


# --- Dataclasses ---------------------------------------------------------
@dataclass(frozen=True)
class CornerConfig:
    """World positions of the four image corners."""
    top_left: Point
    top_right: Point
    bottom_right: Point
    bottom_left: Point

@dataclass
class GeoTransformConfig:
    """Parameters for building an :class:`AffineGeoTransform`.

    Mirrors the keys used in ``geotransform.yml``. CLI flags may still
    override these values.
    """

    coefficients: list[float] | None = None
    width: int | None = None
    height: int | None = None
    corners: CornerConfig | None = None

    #map extent (north-up, used when neither coefficients nor corners are given)
    xmin: float | None = None
    ymin: float | None = None
    xmax: float | None = None
    ymax: float | None = None

    #logging
    log_file_name: str | None = None
    verbose: bool | None = None

    @property
    def extent(self) -> Tuple[float, float, float, float] | None:
        bounds = (self.xmin, self.ymin, self.xmax, self.ymax)
        if any(v is None for v in bounds):
            return None
        return bounds

    def apply(self, transform) -> None:
        """Push this config into ``transform``; coefficients win over corners, corners over extent."""
        width = self.width or 0
        height = self.height or 0
        if self.coefficients is not None:
            transform.set_transform(self.coefficients, width, height)
        elif self.corners is not None:
            transform.from_corners(
                self.corners.top_left,
                self.corners.top_right,
                self.corners.bottom_right,
                self.corners.bottom_left,
                width=width,
                height=height,
            )
        elif self.extent is not None:
            transform.from_extent(*self.extent, width=width, height=height)
        else:
            raise ValueError("Config provides none of 'coefficients', 'corners' or an extent.")


# --- YAML loader ---------------------------------------------------------

ConfigKind = Literal["geotransform"]

def _resolve_path(path: Path | str | None, kind: ConfigKind) -> Path | None:
    """Resolve a config path or fall back to the project default for ``kind``."""

    if path is None:
        if kind == "geotransform":
            return directories.CONFIG_DIR / configs.GEOTRANSFORM_CONFIGS_FILENAME
        return None

    if isinstance(path, str):
        return Path(path)
    return path

def load_yaml(path: Path) -> Dict[str, Any]:
    """Load YAML file, returning an empty dict when it does not exist."""
    try:
        info(f"Loading config from {path}...")
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        error(f"Config not found at {path}; using defaults where possible.")
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config at {path} must be a mapping, got {type(data).__name__}.")
    info(f"Using config: {path}")
    return dict(data)

def _to_point(value, key: str) -> Point:
    try:
        x, y = value
        return (float(x), float(y))
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Corner '{key}' must be an [x, y] pair, got {value!r}.") from exc

def build_corner_config(raw: Dict[str, Any]) -> CornerConfig:
    missing = [k for k in CORNER_KEYS if k not in raw]
    if missing:
        raise ValueError(f"Corner config is missing: {missing}")
    return CornerConfig(**{k: _to_point(raw[k], k) for k in CORNER_KEYS})

def build_geotransform_config(raw: Dict[str, Any]) -> GeoTransformConfig:
    """Convert raw dict from YAML into :class:`GeoTransformConfig`.

    Raises ValueError on malformed values.
    """

    coefficients = raw.get("coefficients")
    if coefficients is not None:
        try:
            coefficients = [float(c) for c in coefficients]
        except (TypeError, ValueError) as exc:
            raise ValueError(f"'coefficients' must be a list of numbers, got {coefficients!r}.") from exc

    def _to_int(key: str) -> int | None:
        val = raw.get(key)
        if val is None:
            return None
        try:
            return int(val)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"'{key}' must be an integer, got {val!r}.") from exc

    def _to_float(key: str) -> float | None:
        val = raw.get(key)
        if val is None:
            return None
        try:
            return float(val)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"'{key}' must be a number, got {val!r}.") from exc

    corners_raw = raw.get("corners")
    return GeoTransformConfig(
        coefficients=coefficients,
        width=_to_int("width"),
        height=_to_int("height"),
        corners=build_corner_config(corners_raw) if corners_raw else None,
        xmin=_to_float("xmin"),
        ymin=_to_float("ymin"),
        xmax=_to_float("xmax"),
        ymax=_to_float("ymax"),
        log_file_name=raw.get("log_file_name"),
        verbose=raw.get("verbose"),
    )

def read_config_file(
    path: Path | str | None,
    *,
    kind: ConfigKind = "geotransform",
) -> GeoTransformConfig:
    """Read a YAML config file into a typed dataclass.

    Parameters
    ----------
    path
        Path to a YAML file, or ``None`` to use the project default
        for the given ``kind``.
    kind
        Only ``"geotransform"`` is currently supported.
    """

    resolved = _resolve_path(path, kind)
    if resolved is None:
        error(f"No config path could be resolved for kind {kind!r}.")
        raise ValueError("No config path could be resolved.")

    raw = load_yaml(resolved)

    if kind == "geotransform":
        return build_geotransform_config(raw)

    raise ValueError(f"Unsupported config kind: {kind}")
