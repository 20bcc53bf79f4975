import yaml
from typer.testing import CliRunner

from geomatrix.cli.__main__ import app, EXIT_INVALID, EXIT_SINGULAR

runner = CliRunner()
NORTH_UP = "100,1,0,200,0,-1"


def _last_line(result):
    return result.stdout.strip().splitlines()[-1]


def test_pixel_to_world():
    result = runner.invoke(app, ["pixel-to-world", "2", "3", "--gt", NORTH_UP])
    assert result.exit_code == 0, result.output
    assert _last_line(result) == "102.0 197.0"


def test_world_to_pixel():
    result = runner.invoke(app, ["world-to-pixel", "102", "197", "--gt", NORTH_UP])
    assert result.exit_code == 0, result.output
    assert _last_line(result) == "2.0 3.0"


def test_world_to_pixel_singular():
    result = runner.invoke(app, ["world-to-pixel", "1", "1", "--gt", "0,1,1,0,2,2"])
    assert result.exit_code == EXIT_SINGULAR


def test_wrong_coefficient_count():
    result = runner.invoke(app, ["pixel-to-world", "1", "1", "--gt", "1,2,3,4,5"])
    assert result.exit_code == EXIT_INVALID


def test_corners_and_bbox():
    result = runner.invoke(app, ["corners", "--gt", NORTH_UP, "--width", "10", "--height", "5"])
    assert result.exit_code == 0, result.output
    assert "top_right 110.0 200.0" in result.stdout
    assert "bottom_left 100.0 195.0" in result.stdout

    result = runner.invoke(app, ["bbox", "--gt", NORTH_UP, "--width", "10", "--height", "5"])
    assert result.exit_code == 0, result.output
    assert "100.0 195.0 110.0 200.0" in result.stdout


def test_flags_override_yaml(tmp_path):
    cfg = tmp_path / "gt.yml"
    cfg.write_text(yaml.safe_dump({"coefficients": [0, 1, 0, 0, 0, 1], "width": 10, "height": 5}))

    result = runner.invoke(app, ["bbox", "-c", str(cfg)])
    assert "0.0 0.0 10.0 5.0" in result.stdout

    result = runner.invoke(app, ["bbox", "-c", str(cfg), "--width", "20"])
    assert "0.0 0.0 20.0 5.0" in result.stdout


def test_matrix():
    result = runner.invoke(app, ["matrix", "--gt", NORTH_UP])
    assert result.exit_code == 0, result.output
    assert "1.0 0.0 100.0" in result.stdout
    assert "0.0 -1.0 200.0" in result.stdout


def test_inverse_matrix_singular():
    result = runner.invoke(app, ["matrix", "--inverse", "--gt", "0,0,0,0,0,0"])
    assert result.exit_code == EXIT_SINGULAR


def test_negative_coordinates():
    gt = "-123,0.5,0,38,0,-0.5"
    result = runner.invoke(app, ["world-to-pixel", "-122.5", "37.5", "--gt", gt])
    assert result.exit_code == 0, result.output
    assert _last_line(result) == "1.0 1.0"

    result = runner.invoke(app, ["pixel-to-world", "-2", "-4", "--gt", gt])
    assert result.exit_code == 0, result.output
    assert _last_line(result) == "-124.0 40.0"


def test_invalid_exit_code_differs_from_usage_error():
    assert EXIT_INVALID != 2
    result = runner.invoke(app, ["bbox", "--no-such-flag"])
    assert result.exit_code == 2


def test_extent_builds_north_up_transform():
    result = runner.invoke(app, ["corners", "--extent", "100,195,110,200", "--width", "10", "--height", "5"])
    assert result.exit_code == 0, result.output
    assert "top_left 100.0 200.0" in result.stdout
    assert "bottom_right 110.0 195.0" in result.stdout


def test_extent_without_size_is_invalid():
    result = runner.invoke(app, ["bbox", "--extent", "100,195,110,200"])
    assert result.exit_code == EXIT_INVALID
