import pytest

from geomatrix.features.transform import AffineGeoTransform


NORTH_UP = [100.0, 1.0, 0.0, 200.0, 0.0, -1.0]


@pytest.fixture
def north_up():
    return AffineGeoTransform(NORTH_UP, 10, 5)


@pytest.fixture
def rotated():
    # 30m pixels with skew terms, UTM-like origin
    return AffineGeoTransform([440720.0, 30.0, 2.5, 3751320.0, -1.5, -30.0], 512, 256)


@pytest.fixture
def geomatrix_home(tmp_path, monkeypatch):
    from geomatrix.globals import directories
    monkeypatch.setattr(directories, "CONFIG_DIR", tmp_path / "config")
    monkeypatch.setattr(directories, "LOGS_DIR", tmp_path / "logs")
    return tmp_path
