# geomatrix/cli/__main__.py
from pathlib import Path
from typing import Optional, List
import typer

from geomatrix.features.transform import (
    AffineGeoTransform,
    SingularTransformError,
)
from geomatrix.globals.logutil import Logger, info, error, success, setting_config, set_verbose
from geomatrix.globals.config_models import GeoTransformConfig, read_config_file

# --- Typer app (root has no options) ---
app = typer.Typer(no_args_is_help=True)

EXIT_SINGULAR = 1
# 2 is what click uses for usage errors
EXIT_INVALID = 3

# negative coordinates (west longitudes, south latitudes) are not options
COORDINATE_CONTEXT = {"ignore_unknown_options": True}


def _parse_gt(gt: Optional[str]) -> Optional[List[float]]:
    if gt is None:
        return None
    try:
        return [float(part) for part in gt.replace(" ", "").split(",") if part]
    except ValueError as exc:
        raise typer.BadParameter(f"--gt must be comma separated numbers: {exc}") from exc

def _parse_extent(extent: Optional[str]) -> dict:
    if extent is None:
        return {}
    try:
        xmin, ymin, xmax, ymax = (float(part) for part in extent.replace(" ", "").split(","))
    except ValueError as exc:
        raise typer.BadParameter(f"--extent must be 'xmin,ymin,xmax,ymax': {exc}") from exc
    return dict(xmin=xmin, ymin=ymin, xmax=xmax, ymax=ymax)

# --- Helper: unified config loading ---
def load_config(config: Optional[Path], **cli_values) -> GeoTransformConfig:
    """Build the effective configuration.

    Precedence: a CLI value that was given overrides the YAML value;
    otherwise the YAML value (or ``None``) is used.
    """
    cfg = read_config_file(config) if config is not None else GeoTransformConfig()

    def pick(key: str, cfg_val):
        cli_val = cli_values.get(key)
        if cli_val is not None:
            setting_config(f"{key} = {cli_val} (from command line)")
            return cli_val
        return cfg_val

    return GeoTransformConfig(
        coefficients=pick("coefficients", cfg.coefficients),
        width=pick("width", cfg.width),
        height=pick("height", cfg.height),
        corners=cfg.corners,
        xmin=pick("xmin", cfg.xmin),
        ymin=pick("ymin", cfg.ymin),
        xmax=pick("xmax", cfg.xmax),
        ymax=pick("ymax", cfg.ymax),
        log_file_name=pick("log_file", cfg.log_file_name),
        verbose=pick("verbose", cfg.verbose) or False,
    )

def _build_transform(config, gt, extent, width, height, log_file, verbose) -> AffineGeoTransform:
    cfg = load_config(
        config,
        coefficients=_parse_gt(gt),
        **_parse_extent(extent),
        width=width,
        height=height,
        log_file=log_file,
        verbose=verbose,
    )
    set_verbose(cfg.verbose)
    if cfg.log_file_name:
        Logger.setup(Path(cfg.log_file_name))

    transform = AffineGeoTransform()
    try:
        cfg.apply(transform)
    except ValueError as exc:
        error(str(exc))
        raise typer.Exit(code=EXIT_INVALID)
    info(f"Geotransform: {list(transform.coefficients)} ({transform.width}x{transform.height})")
    return transform

# shared options
ConfigOpt = typer.Option(None, "--config", "-c", help="YAML file with parameters. Flags override YAML.", rich_help_panel="I/O")
GtOpt = typer.Option(None, "--gt", help="Geotransform 'c0,c1,c2,c3,c4,c5' (GDAL order).", rich_help_panel="Transform")
ExtentOpt = typer.Option(None, "--extent", help="North-up extent 'xmin,ymin,xmax,ymax'; needs --width/--height.", rich_help_panel="Transform")
WidthOpt = typer.Option(None, "--width", "-W", help="Image width in pixels.", rich_help_panel="Transform")
HeightOpt = typer.Option(None, "--height", "-H", help="Image height in pixels.", rich_help_panel="Transform")
LogOpt = typer.Option(None, "--log-file", help="Mirror output into this log file.", rich_help_panel="Logging")
VerboseOpt = typer.Option(None, "--verbose/--quiet", "-v", help="Print debug messages.", rich_help_panel="Logging")


@app.command("pixel-to-world", context_settings=COORDINATE_CONTEXT)
def pixel_to_world(
    px: float = typer.Argument(..., help="Pixel column."),
    py: float = typer.Argument(..., help="Pixel row."),
    config: Optional[Path] = ConfigOpt,
    gt: Optional[str] = GtOpt,
    extent: Optional[str] = ExtentOpt,
    width: Optional[int] = WidthOpt,
    height: Optional[int] = HeightOpt,
    log_file: Optional[Path] = LogOpt,
    verbose: Optional[bool] = VerboseOpt,
):
    """Map a pixel position to world coordinates."""
    transform = _build_transform(config, gt, extent, width, height, log_file, verbose)
    x, y = transform.pixel_to_world(px, py)
    typer.echo(f"{x} {y}")

@app.command("world-to-pixel", context_settings=COORDINATE_CONTEXT)
def world_to_pixel(
    x: float = typer.Argument(..., help="World X."),
    y: float = typer.Argument(..., help="World Y."),
    config: Optional[Path] = ConfigOpt,
    gt: Optional[str] = GtOpt,
    extent: Optional[str] = ExtentOpt,
    width: Optional[int] = WidthOpt,
    height: Optional[int] = HeightOpt,
    log_file: Optional[Path] = LogOpt,
    verbose: Optional[bool] = VerboseOpt,
):
    """Map a world position back to pixel coordinates."""
    transform = _build_transform(config, gt, extent, width, height, log_file, verbose)
    try:
        px, py = transform.world_to_pixel(x, y)
    except SingularTransformError as exc:
        error(str(exc))
        raise typer.Exit(code=EXIT_SINGULAR)
    typer.echo(f"{px} {py}")

@app.command("corners")
def corners(
    config: Optional[Path] = ConfigOpt,
    gt: Optional[str] = GtOpt,
    extent: Optional[str] = ExtentOpt,
    width: Optional[int] = WidthOpt,
    height: Optional[int] = HeightOpt,
    log_file: Optional[Path] = LogOpt,
    verbose: Optional[bool] = VerboseOpt,
):
    """Print the world coordinates of the image corners (TL, TR, BR, BL)."""
    transform = _build_transform(config, gt, extent, width, height, log_file, verbose)
    for label, (x, y) in zip(("top_left", "top_right", "bottom_right", "bottom_left"),
                             transform.image_corners()):
        typer.echo(f"{label} {x} {y}")

@app.command("bbox")
def bbox(
    config: Optional[Path] = ConfigOpt,
    gt: Optional[str] = GtOpt,
    extent: Optional[str] = ExtentOpt,
    width: Optional[int] = WidthOpt,
    height: Optional[int] = HeightOpt,
    log_file: Optional[Path] = LogOpt,
    verbose: Optional[bool] = VerboseOpt,
):
    """Print the bounding box as 'min_x min_y max_x max_y'."""
    transform = _build_transform(config, gt, extent, width, height, log_file, verbose)
    typer.echo(" ".join(str(v) for v in transform.bounding_box()))

@app.command("matrix")
def matrix(
    inverse: bool = typer.Option(False, "--inverse", help="Print the world -> pixel matrix instead."),
    config: Optional[Path] = ConfigOpt,
    gt: Optional[str] = GtOpt,
    extent: Optional[str] = ExtentOpt,
    width: Optional[int] = WidthOpt,
    height: Optional[int] = HeightOpt,
    log_file: Optional[Path] = LogOpt,
    verbose: Optional[bool] = VerboseOpt,
):
    """Print the 3x3 row-major affine matrix."""
    transform = _build_transform(config, gt, extent, width, height, log_file, verbose)
    try:
        m = transform.inverse_matrix() if inverse else transform.transform_matrix()
    except SingularTransformError as exc:
        error(str(exc))
        raise typer.Exit(code=EXIT_SINGULAR)
    for row in m:
        typer.echo(" ".join(str(float(v)) for v in row))
    success("Matrix written.")

@app.command("view")
def view(
    qml: Optional[Path] = typer.Option(None, "--qml", help="QML scene to load instead of the bundled Main.qml."),
    config: Optional[Path] = ConfigOpt,
    gt: Optional[str] = GtOpt,
    extent: Optional[str] = ExtentOpt,
    width: Optional[int] = WidthOpt,
    height: Optional[int] = HeightOpt,
    log_file: Optional[Path] = LogOpt,
    verbose: Optional[bool] = VerboseOpt,
):
    """Open the QML viewer with the GeoTransform singleton registered."""
    # Qt is only needed for this command
    from geomatrix.features.overlays.viewer import run

    transform = _build_transform(config, gt, extent, width, height, log_file, verbose)
    raise typer.Exit(code=run(transform, qml))

def main():
    try:
        app()
    finally:
        Logger.teardown()

if __name__ == "__main__":
    main()
