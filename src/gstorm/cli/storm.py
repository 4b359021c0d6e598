"""
Comandos CLI para generación de tormentas de diseño.
"""

from pathlib import Path
from typing import Annotated, Optional

import typer

from gstorm.config import (
    DEPTH_UNIT_LABELS,
    CalculationRequest,
    DepthUnit,
    HyetographResult,
    StormCategory,
)
from gstorm.core import CATEGORY_CAPABILITIES, calculate_hyetograph
from gstorm.core.hyetograph import DEPTH_CHECK_TOL
from gstorm.reports import hyetograph_to_csv, hyetograph_to_json, write_swmm_dat
from gstorm.cli.plots import build_hyetograph_plot
from gstorm.cli.theme import (
    format_number,
    print_capabilities_table,
    print_error,
    print_field,
    print_header,
    print_hyetograph_table,
    print_separator,
    print_success,
    print_warning,
)
from gstorm.cli.validators import validate_storm_request

# Crear sub-aplicación
storm_app = typer.Typer(help="Generación de hietogramas de tormentas de diseño")


# Opciones compartidas
DurationOpt = Annotated[int, typer.Option("--duration", "-d", help="Duración en horas")]
CategoryOpt = Annotated[
    StormCategory,
    typer.Option("--category", "-c", case_sensitive=False, help="Familia: SCS, NRCS, Huff"),
]
SubTypeOpt = Annotated[str, typer.Option("--type", "-t", help="Subtipo, ej. 'Type II'")]
StepOpt = Annotated[float, typer.Option("--dt", help="Intervalo en minutos")]
UnitsOpt = Annotated[
    DepthUnit,
    typer.Option("--units", "-u", case_sensitive=False, help="us (in) o metric (mm)"),
]


def compute_storm(
    depth: float,
    duration: int,
    category: StormCategory,
    sub_type: str,
    dt: float,
    units: DepthUnit,
) -> HyetographResult:
    """Valida las entradas y calcula el hietograma; termina con error si queda vacío."""
    validate_storm_request(category, sub_type, duration, dt, depth)

    request = CalculationRequest(
        total_depth=depth,
        depth_unit=units,
        duration_hr=duration,
        time_step_min=dt,
        category=category,
        sub_type=sub_type,
    )
    result = calculate_hyetograph(request)
    if result.is_empty:
        print_error(f"No hay distribución disponible para {request.curve_key}")
        raise typer.Exit(1)
    return result


def write_storm_output(result: HyetographResult, output: str) -> None:
    """Exporta según la extensión: .csv, .dat (SWMM) o JSON."""
    path = Path(output)
    suffix = path.suffix.lower()
    if suffix == ".csv":
        hyetograph_to_csv(result, path)
    elif suffix == ".dat":
        write_swmm_dat(result, path, title=result.method or "")
    else:
        hyetograph_to_json(result, path)
    print_success(f"Hietograma guardado en {path}")


def show_storm(
    result: HyetographResult,
    depth: float,
    duration: int,
    dt: float,
    units: DepthUnit,
    output: Optional[str] = None,
    plot: bool = False,
    subtitle: Optional[str] = None,
) -> None:
    """Exporta el hietograma o imprime su resumen (y el gráfico si se pide)."""
    if output:
        write_storm_output(result, output)
        return

    unit = DEPTH_UNIT_LABELS[units]
    print_header("TORMENTA DE DISEÑO", subtitle or result.method)
    print_field("Precipitacion", f"{depth:.2f}", unit)
    print_field("Duracion", f"{duration}", "hr")
    print_field("Intervalo dt", f"{dt:g}", "min")
    print_separator()
    print_field("Lamina calculada", format_number(result.total_depth_actual, 3), result.depth_unit)
    print_field("Intensidad pico", format_number(result.peak_intensity, 3), result.intensity_unit)
    print_field("Intervalos", f"{result.n_intervals}")
    print_separator()

    if abs(result.total_depth_actual - depth) > DEPTH_CHECK_TOL * depth:
        print_warning("La lamina calculada difiere mas de 1% de la precipitacion pedida")

    if plot:
        typer.echo(build_hyetograph_plot(result))


@storm_app.command("generate")
def storm_generate(
    depth: Annotated[float, typer.Argument(help="Precipitación total (in o mm según --units)")],
    duration: DurationOpt = 24,
    category: CategoryOpt = StormCategory.SCS,
    sub_type: SubTypeOpt = "Type II",
    dt: StepOpt = 6.0,
    units: UnitsOpt = DepthUnit.US,
    output: Annotated[
        Optional[str],
        typer.Option("--output", "-o", help="Archivo .json, .csv o .dat (SWMM)"),
    ] = None,
    plot: Annotated[bool, typer.Option("--plot", "-p", help="Mostrar gráfico en terminal")] = False,
):
    """
    Genera el hietograma de una tormenta de diseño.

    Ejemplo:
        gstorm storm generate 3.5
        gstorm storm generate 3.5 -d 6 -t "Type III" --dt 5
        gstorm storm generate 90 -c Huff -t "Huff Type II" -u metric -o huff.dat
    """
    result = compute_storm(depth, duration, category, sub_type, dt, units)
    show_storm(result, depth, duration, dt, units, output, plot)


@storm_app.command("table")
def storm_table(
    depth: Annotated[float, typer.Argument(help="Precipitación total (in o mm según --units)")],
    duration: DurationOpt = 24,
    category: CategoryOpt = StormCategory.SCS,
    sub_type: SubTypeOpt = "Type II",
    dt: StepOpt = 6.0,
    units: UnitsOpt = DepthUnit.US,
):
    """
    Muestra la tabla de intervalos del hietograma.

    Ejemplo:
        gstorm storm table 2 -d 6 --dt 30
    """
    result = compute_storm(depth, duration, category, sub_type, dt, units)
    print_hyetograph_table(result, title=result.method)


@storm_app.command("types")
def storm_types():
    """Lista categorías, subtipos, duraciones e intervalos disponibles."""
    print_capabilities_table(CATEGORY_CAPABILITIES.values())
