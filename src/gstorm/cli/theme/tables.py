"""
Funciones para crear e imprimir tablas Rich.
"""

from typing import Iterable

from rich.table import Table
from rich import box

from gstorm.cli.theme.palette import get_console, get_palette
from gstorm.config import FrequencyGrid, HyetographResult
from gstorm.core.capabilities import CategoryCapabilities


def create_results_table(
    title: str = None,
    columns: list[tuple[str, str]] = None,  # [(nombre, justify), ...]
) -> Table:
    """Crea una tabla estilizada para resultados."""
    p = get_palette()

    table = Table(
        title=title,
        title_style=f"bold {p.primary}",
        border_style=p.border,
        header_style=f"bold {p.secondary}",
        box=box.ROUNDED,
        show_header=True,
        padding=(0, 1),
    )

    if columns:
        for name, justify in columns:
            table.add_column(name, justify=justify)

    return table


def print_hyetograph_table(
    result: HyetographResult,
    title: str = "HIETOGRAMA",
    decimals: int = 4,
) -> None:
    """Imprime el detalle por intervalo de un hietograma."""
    console = get_console()
    p = get_palette()

    if result.is_empty:
        console.print("  Sin intervalos.", style=p.muted)
        return

    table = create_results_table(title, [
        ("#", "right"),
        ("Inicio (min)", "right"),
        ("Fin (min)", "right"),
        (f"i ({result.intensity_unit})", "right"),
        (f"dP ({result.depth_unit})", "right"),
        (f"P acum ({result.depth_unit})", "right"),
    ])

    peak = result.peak_intensity
    for n, step in enumerate(result.detailed_data, start=1):
        style = f"bold {p.table_highlight}" if peak > 0 and step.intensity == peak else None
        table.add_row(
            str(n),
            f"{step.time_start:g}",
            f"{step.time_end:g}",
            f"{step.intensity:.{decimals}f}",
            f"{step.depth_step:.{decimals}f}",
            f"{step.cumulative_depth:.{decimals}f}",
            style=style,
        )

    console.print(table)


def print_frequency_table(
    grid: FrequencyGrid,
    title: str = "PRECIPITACION-FRECUENCIA (in) - Tr (anos)",
) -> None:
    """Imprime la grilla duración x período de retorno (una columna por Tr)."""
    console = get_console()
    p = get_palette()

    table = create_results_table(title)
    table.add_column("Duracion", justify="left", style=p.label)
    for rp in grid.return_period_values:
        table.add_column(str(rp), justify="right", style=p.number)

    for label in grid.duration_labels:
        row = [label]
        for rp in grid.return_period_values:
            depth = grid.depth(rp, label)
            row.append("-" if depth is None else f"{depth:.3f}")
        table.add_row(*row)

    console.print(table)


def print_capabilities_table(
    capabilities: Iterable[CategoryCapabilities],
    title: str = "TORMENTAS DISPONIBLES",
) -> None:
    """Imprime subtipos, duraciones e intervalos válidos por categoría."""
    console = get_console()
    p = get_palette()
    capabilities = list(capabilities)

    table = create_results_table(title, [
        ("Categoria", "left"),
        ("Subtipos", "left"),
        ("Duraciones (hr)", "center"),
        ("dt (min)", "center"),
    ])

    for caps in capabilities:
        table.add_row(
            f"{caps.category.value}",
            "\n".join(caps.sub_types),
            ", ".join(str(d) for d in caps.durations_hr),
            caps.time_step_rule,
        )

    console.print(table)
    for caps in capabilities:
        if caps.reference:
            console.print(f"  {caps.category.value}: {caps.reference}", style=p.muted)
