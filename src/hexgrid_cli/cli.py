from __future__ import annotations

import logging
from typing import List, Optional

import typer

from hexgrid_cli.config import HexgridConfig, load_config, save_config
from hexgrid_cli.helptext import HELP_TEXT
from hexgrid_cli.parsing import parse_cell, parse_loop, resolve_lat_lon
from hexgrid_core.cell import CellIndex, polygon_to_cells
from hexgrid_core.constants import MAX_RES
from hexgrid_core.errors import HexGridError
from hexgrid_core.geo import GeoCoordinate
from hexgrid_core.hierarchy import children_count
from hexgrid_core.polyfill import Polygon

app = typer.Typer(no_args_is_help=True)
config_app = typer.Typer(no_args_is_help=True)
app.add_typer(config_app, name="config")

MAX_LISTED_CHILDREN = 100_000


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging.")) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def _cell_arg(s: str) -> CellIndex:
    try:
        return CellIndex(parse_cell(s))
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e


def _resolution(res: Optional[int], *, default: Optional[int] = None) -> int:
    if res is None:
        res = default if default is not None else load_config().default_resolution
    if res < 0 or res > MAX_RES:
        raise typer.BadParameter(f"resolution must be in [0, {MAX_RES}]")
    return res


def _fail(e: HexGridError) -> typer.Exit:
    typer.echo(f"error: {e}", err=True)
    return typer.Exit(code=2)


@app.command()
def help() -> None:
    """Show the extended help / usage guide."""
    typer.echo(HELP_TEXT.strip())


@app.command()
def encode(
    at: Optional[str] = typer.Argument(None, help="'lat,lon' in degrees, or omit and use --lat/--lon."),
    lat: Optional[str] = typer.Option(None, "--lat", help="Latitude (alternative to 'lat,lon')."),
    lon: Optional[str] = typer.Option(None, "--lon", help="Longitude (alternative to 'lat,lon')."),
    res: Optional[int] = typer.Option(None, "--res", "-r", help="Resolution 0-15 (default from config)."),
) -> None:
    """Print the cell containing a point."""

    try:
        lat_f, lon_f = resolve_lat_lon(at, lat, lon)
    except ValueError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=2)

    try:
        cell = CellIndex.from_coordinate(GeoCoordinate(lat_f, lon_f), _resolution(res))
    except HexGridError as e:
        raise _fail(e)
    typer.echo(str(cell))


@app.command()
def decode(cell: str = typer.Argument(..., help="Cell index (hex).")) -> None:
    """Print the center of a cell as 'lat,lon'."""

    typer.echo(str(_cell_arg(cell).coordinate))


@app.command()
def info(cell: str = typer.Argument(..., help="Cell index (hex, need not be valid).")) -> None:
    """Show the fields packed into a cell index."""

    try:
        c = CellIndex(parse_cell(cell, require_valid=False))
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e

    typer.echo(f"cell: {c}")
    typer.echo(f"valid: {c.is_valid}")
    typer.echo(f"resolution: {c.resolution}")
    typer.echo(f"base_cell: {c.base_cell}")
    typer.echo(f"digits: {''.join(str(d) for d in c.digits) or '-'}")
    if c.is_valid:
        typer.echo(f"pentagon: {c.is_pentagon}")
        typer.echo(f"center: {c.coordinate}")


@app.command()
def boundary(
    cell: str = typer.Argument(..., help="Cell index (hex)."),
    distortion: bool = typer.Option(
        False, "--distortion", help="Include icosahedron edge crossings (Class III cells)."
    ),
) -> None:
    """Print the boundary vertices of a cell, one 'lat,lon' per line."""

    for v in _cell_arg(cell).boundary(distortion=distortion):
        typer.echo(str(v))


@app.command()
def parent(
    cell: str = typer.Argument(..., help="Cell index (hex)."),
    res: Optional[int] = typer.Option(None, "--res", "-r", help="Parent resolution (default: one coarser)."),
) -> None:
    """Print the ancestor of a cell at a coarser resolution."""

    c = _cell_arg(cell)
    target = c.resolution - 1 if res is None else res
    p = c.parent(target)
    if p is None:
        typer.echo(f"no parent of {c} at resolution {target}", err=True)
        raise typer.Exit(code=1)
    typer.echo(str(p))


@app.command()
def children(
    cell: str = typer.Argument(..., help="Cell index (hex)."),
    res: Optional[int] = typer.Option(None, "--res", "-r", help="Child resolution (default: one finer)."),
) -> None:
    """Print the descendants of a cell at a finer resolution."""

    c = _cell_arg(cell)
    target = _resolution(res, default=min(c.resolution + 1, MAX_RES))
    try:
        n = children_count(c.value, target)
        if n > MAX_LISTED_CHILDREN:
            typer.echo(f"{n} children at resolution {target}; refusing to list more than {MAX_LISTED_CHILDREN}", err=True)
            raise typer.Exit(code=2)
        for child in c.children(target):
            typer.echo(str(child))
    except HexGridError as e:
        raise _fail(e)


@app.command("center-child")
def center_child(
    cell: str = typer.Argument(..., help="Cell index (hex)."),
    res: Optional[int] = typer.Option(None, "--res", "-r", help="Child resolution (default: one finer)."),
) -> None:
    """Print the center descendant of a cell."""

    c = _cell_arg(cell)
    target = c.resolution + 1 if res is None else res
    child = c.center_child(target)
    if child is None:
        typer.echo(f"no center child of {c} at resolution {target}", err=True)
        raise typer.Exit(code=1)
    typer.echo(str(child))


@app.command()
def disk(
    cell: str = typer.Argument(..., help="Cell index (hex)."),
    k: Optional[int] = typer.Option(None, "-k", help="Grid distance (default from config)."),
    distances: bool = typer.Option(False, "--distances", help="Print 'cell distance' pairs."),
) -> None:
    """Print every cell within grid distance k."""

    c = _cell_arg(cell)
    if k is None:
        k = load_config().default_k
    try:
        if distances:
            for nb, d in c.grid_disk_distances(k).items():
                typer.echo(f"{nb} {d}")
        else:
            for nb in c.grid_disk(k):
                typer.echo(str(nb))
    except HexGridError as e:
        raise _fail(e)


@app.command()
def fill(
    loop: str = typer.Option(..., "--loop", help="Outer loop as 'lat,lon;lat,lon;...'."),
    hole: Optional[List[str]] = typer.Option(None, "--hole", help="Hole loop (repeatable)."),
    res: Optional[int] = typer.Option(None, "--res", "-r", help="Resolution 0-15 (default from config)."),
    count: bool = typer.Option(False, "--count", help="Print only the number of cells."),
) -> None:
    """Print the cells whose centers lie inside a polygon."""

    try:
        polygon = Polygon.from_points(parse_loop(loop), [parse_loop(h) for h in hole or []])
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e

    try:
        cells = polygon_to_cells(polygon, _resolution(res))
    except HexGridError as e:
        raise _fail(e)

    if count:
        typer.echo(str(len(cells)))
        return
    for cell in cells:
        typer.echo(str(cell))


@config_app.command("show")
def config_show() -> None:
    """Show the current defaults."""

    cfg = load_config()
    typer.echo(f"version: {cfg.version}")
    typer.echo(f"default_resolution: {cfg.default_resolution}")
    typer.echo(f"default_k: {cfg.default_k}")


@config_app.command("set")
def config_set(
    resolution: Optional[int] = typer.Option(None, "--resolution", help="Default resolution 0-15."),
    k: Optional[int] = typer.Option(None, "-k", help="Default grid distance for `disk`."),
) -> None:
    """Update the defaults used when --res / -k are omitted."""

    if resolution is None and k is None:
        typer.echo("Nothing to set. Pass --resolution and/or -k.", err=True)
        raise typer.Exit(code=2)

    cfg: HexgridConfig = load_config()
    if resolution is not None:
        cfg.default_resolution = _resolution(resolution)
    if k is not None:
        if k < 0:
            raise typer.BadParameter("k must be >= 0")
        cfg.default_k = k
    save_config(cfg)
    typer.echo(f"default_resolution: {cfg.default_resolution}")
    typer.echo(f"default_k: {cfg.default_k}")


if __name__ == "__main__":
    app()
