import pytest
import yaml

from geomatrix.features.transform import AffineGeoTransform
from geomatrix.globals import config_models
from geomatrix.globals.config_models import GeoTransformConfig, read_config_file


def _write(path, data):
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


def test_read_coefficients(tmp_path):
    path = _write(tmp_path / "gt.yml", {
        "coefficients": [100, 1, 0, 200, 0, -1],
        "width": 10,
        "height": 5,
        "verbose": True,
    })
    cfg = read_config_file(path)
    assert cfg.coefficients == [100.0, 1.0, 0.0, 200.0, 0.0, -1.0]
    assert (cfg.width, cfg.height) == (10, 5)
    assert cfg.verbose is True
    assert cfg.corners is None


def test_read_corners_and_apply(tmp_path):
    path = _write(tmp_path / "gt.yml", {
        "width": 10,
        "height": 5,
        "corners": {
            "top_left": [100, 200],
            "top_right": [110, 200],
            "bottom_right": [110, 195],
            "bottom_left": [100, 195],
        },
    })
    cfg = read_config_file(str(path))
    transform = AffineGeoTransform()
    cfg.apply(transform)
    assert transform.coefficients == pytest.approx((100.0, 1.0, 0.0, 200.0, 0.0, -1.0))


def test_missing_corner_is_rejected(tmp_path):
    path = _write(tmp_path / "gt.yml", {"corners": {"top_left": [0, 0]}})
    with pytest.raises(ValueError, match="missing"):
        read_config_file(path)


def test_bad_coefficients_are_rejected(tmp_path):
    path = _write(tmp_path / "gt.yml", {"coefficients": ["x", 1, 0, 0, 0, 1]})
    with pytest.raises(ValueError):
        read_config_file(path)


def test_missing_file_falls_back_to_defaults(geomatrix_home):
    cfg = read_config_file(None)
    assert cfg == GeoTransformConfig()


def test_default_path_uses_config_dir(geomatrix_home):
    config_dir = geomatrix_home / "config"
    config_dir.mkdir()
    _write(config_dir / "geotransform.yml", {"coefficients": [0, 1, 0, 0, 0, 1]})
    assert config_models.read_config_file(None).coefficients == [0.0, 1.0, 0.0, 0.0, 0.0, 1.0]


def test_apply_without_transform_data():
    with pytest.raises(ValueError):
        GeoTransformConfig(width=1, height=1).apply(AffineGeoTransform())


def test_read_extent_and_apply(tmp_path):
    path = _write(tmp_path / "gt.yml", {
        "width": 10, "height": 5,
        "xmin": 100, "ymin": 195, "xmax": 110, "ymax": 200,
    })
    cfg = read_config_file(path)
    assert cfg.extent == (100.0, 195.0, 110.0, 200.0)
    transform = AffineGeoTransform()
    cfg.apply(transform)
    assert transform.coefficients == (100.0, 1.0, 0.0, 200.0, 0.0, -1.0)


def test_partial_extent_is_ignored():
    assert GeoTransformConfig(xmin=0.0, ymin=0.0, xmax=1.0).extent is None
