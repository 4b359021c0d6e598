"""
Comandos CLI para tablas de precipitación-frecuencia NOAA Atlas 14.
"""

from pathlib import Path
from typing import Annotated, Optional

import typer

from gstorm.config import DepthUnit, FrequencyGrid, StormCategory
from gstorm.core.frequency import design_depth, parse_frequency_table
from gstorm.reports import frequency_grid_to_csv
from gstorm.services.noaa import NoaaServiceError, fetch_pfds_csv
from gstorm.cli.theme import (
    print_error,
    print_field,
    print_frequency_table,
    print_header,
    print_success,
)
from gstorm.cli.storm import CategoryOpt, DurationOpt, StepOpt, SubTypeOpt, compute_storm, show_storm
from gstorm.cli.validators import (
    validate_coordinates,
    validate_duration,
    validate_grid_duration,
    validate_return_period,
)

# Crear sub-aplicación
noaa_app = typer.Typer(help="Consulta de precipitación-frecuencia NOAA Atlas 14 (PFDS)")


LatArg = Annotated[float, typer.Argument(help="Latitud (grados decimales)")]
LonArg = Annotated[float, typer.Argument(help="Longitud (grados decimales)")]
ReturnPeriodOpt = Annotated[int, typer.Option("--tr", "-r", help="Período de retorno en años")]
StormOutputOpt = Annotated[
    Optional[str],
    typer.Option("--output", "-o", help="Archivo .json, .csv o .dat (SWMM)"),
]
PlotOpt = Annotated[bool, typer.Option("--plot", "-p", help="Mostrar gráfico en terminal")]


def _fetch(lat: float, lon: float) -> str:
    """Descarga el CSV PFDS; los errores del servicio terminan el comando."""
    validate_coordinates(lat, lon)
    try:
        return fetch_pfds_csv(lat, lon)
    except NoaaServiceError as e:
        print_error(f"[{e.status_code}] {e.message}")
        raise typer.Exit(1)


def _parse_or_exit(raw_text: str) -> FrequencyGrid:
    grid = parse_frequency_table(raw_text)
    if grid is None:
        print_error("La respuesta no contiene una tabla de precipitación-frecuencia")
        raise typer.Exit(1)
    return grid


def _show_grid(grid: FrequencyGrid, output: Optional[str], subtitle: str) -> None:
    if output:
        frequency_grid_to_csv(grid, output)
        print_success(f"Tabla guardada en {output}")
        return

    print_header("PRECIPITACION-FRECUENCIA NOAA", subtitle)
    print_field("Periodos de retorno", ", ".join(str(rp) for rp in grid.return_period_values), "anos")
    print_field("Duraciones", f"{len(grid.duration_labels)}")
    print_frequency_table(grid)


@noaa_app.command("fetch")
def noaa_fetch(
    lat: LatArg,
    lon: LonArg,
    output: Annotated[Optional[str], typer.Option("--output", "-o", help="Archivo CSV")] = None,
):
    """
    Descarga la tabla PFDS sin modificar.

    Ejemplo:
        gstorm noaa fetch 39.05 -77.12 -o pfds.csv
    """
    body = _fetch(lat, lon)
    if output:
        Path(output).write_text(body, encoding="utf-8")
        print_success(f"Respuesta NOAA guardada en {output}")
    else:
        typer.echo(body)


@noaa_app.command("show")
def noaa_show(
    lat: LatArg,
    lon: LonArg,
    output: Annotated[Optional[str], typer.Option("--output", "-o", help="Exportar grilla a CSV")] = None,
):
    """
    Descarga y muestra la grilla duración x período de retorno.

    Ejemplo:
        gstorm noaa show 39.05 -77.12
    """
    grid = _parse_or_exit(_fetch(lat, lon))
    _show_grid(grid, output, f"lat={lat:g} lon={lon:g}")


@noaa_app.command("parse")
def noaa_parse(
    file: Annotated[Path, typer.Argument(help="CSV descargado de NOAA PFDS")],
    output: Annotated[Optional[str], typer.Option("--output", "-o", help="Exportar grilla a CSV")] = None,
):
    """
    Lee una tabla PFDS guardada localmente.

    Ejemplo:
        gstorm noaa parse pfds.csv -o grilla.csv
    """
    if not file.exists():
        print_error(f"Archivo no encontrado: {file}")
        raise typer.Exit(1)

    grid = _parse_or_exit(file.read_text(encoding="utf-8"))
    _show_grid(grid, output, str(file))


def _storm_from_grid(
    grid: FrequencyGrid,
    return_period: int,
    duration: int,
    category: StormCategory,
    sub_type: str,
    dt: float,
    output: Optional[str],
    plot: bool,
    source: str,
) -> None:
    """
    Aplica la profundidad NOAA (Tr, duración) a una tormenta de diseño.

    La duración tiene que estar permitida por la categoría y existir en la
    grilla como fila '<duración>-hr'. La profundidad se redondea a 3
    decimales y siempre está en pulgadas.
    """
    validate_duration(category, duration)
    validate_return_period(grid, return_period)
    validate_grid_duration(grid, duration)

    depth = design_depth(grid, return_period, duration)
    if depth is None:
        print_error(f"Sin profundidad NOAA para Tr={return_period} y {duration}-hr")
        raise typer.Exit(1)
    depth = round(depth, 3)

    result = compute_storm(depth, duration, category, sub_type, dt, DepthUnit.US)
    show_storm(
        result,
        depth,
        duration,
        dt,
        DepthUnit.US,
        output,
        plot,
        subtitle=f"NOAA Tr={return_period} anos, {source}",
    )


@noaa_app.command("storm")
def noaa_storm(
    lat: LatArg,
    lon: LonArg,
    return_period: ReturnPeriodOpt = 100,
    duration: DurationOpt = 24,
    category: CategoryOpt = StormCategory.SCS,
    sub_type: SubTypeOpt = "Type II",
    dt: StepOpt = 6.0,
    output: StormOutputOpt = None,
    plot: PlotOpt = False,
):
    """
    Genera la tormenta de diseño con la profundidad NOAA del punto.

    Ejemplo:
        gstorm noaa storm 39.05 -77.12 --tr 100 -d 24
        gstorm noaa storm 39.05 -77.12 --tr 10 -d 6 -t "Type III" -o tormenta.dat
    """
    grid = _parse_or_exit(_fetch(lat, lon))
    _storm_from_grid(
        grid, return_period, duration, category, sub_type, dt, output, plot,
        f"lat={lat:g} lon={lon:g}",
    )


@noaa_app.command("storm-file")
def noaa_storm_file(
    file: Annotated[Path, typer.Argument(help="CSV descargado de NOAA PFDS")],
    return_period: ReturnPeriodOpt = 100,
    duration: DurationOpt = 24,
    category: CategoryOpt = StormCategory.SCS,
    sub_type: SubTypeOpt = "Type II",
    dt: StepOpt = 6.0,
    output: StormOutputOpt = None,
    plot: PlotOpt = False,
):
    """
    Igual que 'storm' pero con una tabla PFDS guardada localmente.

    Ejemplo:
        gstorm noaa storm-file pfds.csv --tr 25 -d 12
    """
    if not file.exists():
        print_error(f"Archivo no encontrado: {file}")
        raise typer.Exit(1)

    grid = _parse_or_exit(file.read_text(encoding="utf-8"))
    _storm_from_grid(
        grid, return_period, duration, category, sub_type, dt, output, plot, str(file),
    )
