"""
Exportación de resultados a archivos de texto.

Formatos:
- CSV con el detalle por intervalo del hietograma
- Serie de pluviómetro SWMM (.dat, líneas 'H:MM  intensidad')
- JSON con el resultado completo
- CSV de la grilla de frecuencias NOAA
"""

import json
from pathlib import Path
from typing import Any

from gstorm.config import FrequencyGrid, HyetographResult


def export_to_csv(
    headers: list[str],
    rows: list[list[Any]],
    filepath: str | Path,
    delimiter: str = ",",
) -> None:
    """
    Exporta datos a CSV.

    Args:
        headers: Lista de encabezados
        rows: Lista de filas (cada fila es una lista de valores)
        filepath: Ruta del archivo
        delimiter: Delimitador (default: coma)
    """
    filepath = Path(filepath)

    with open(filepath, 'w', encoding='utf-8') as f:
        f.write(delimiter.join(str(h) for h in headers) + "\n")
        for row in rows:
            f.write(delimiter.join(str(v) for v in row) + "\n")


def hyetograph_to_csv(
    result: HyetographResult,
    filepath: str | Path,
    decimals: int = 5,
) -> None:
    """
    Exporta el detalle del hietograma a CSV.

    Args:
        result: Hietograma calculado
        filepath: Ruta del archivo
        decimals: Decimales de intensidad y láminas
    """
    headers = [
        "Time Start (min)",
        "Time End (min)",
        f"Intensity ({result.intensity_unit})",
        f"Depth Step ({result.depth_unit})",
        f"Cumulative Depth ({result.depth_unit})",
    ]
    rows = [
        [
            f"{step.time_start:g}",
            f"{step.time_end:g}",
            f"{step.intensity:.{decimals}f}",
            f"{step.depth_step:.{decimals}f}",
            f"{step.cumulative_depth:.{decimals}f}",
        ]
        for step in result.detailed_data
    ]
    export_to_csv(headers, rows, filepath)


def _clock(time_min: float) -> str:
    """Minutos -> 'H:MM'."""
    total = int(round(time_min))
    return f"{total // 60}:{total % 60:02d}"


def hyetograph_to_swmm_dat(result: HyetographResult, title: str = "") -> str:
    """
    Genera el contenido de una serie de lluvia SWMM (.dat).

    Una línea 'H:MM  intensidad' por intervalo (al inicio del intervalo)
    y una línea final con intensidad 0 en la duración total.

    Args:
        result: Hietograma calculado
        title: Comentario de cabecera (línea ';...')

    Returns:
        Texto del archivo
    """
    lines = []
    if title:
        lines.append(f";{title}")

    for step in result.detailed_data:
        lines.append(f"{_clock(step.time_start)}  {step.intensity:.4f}")

    if result.detailed_data:
        lines.append(f"{_clock(result.detailed_data[-1].time_end)}  0")

    return "\n".join(lines) + "\n"


def write_swmm_dat(
    result: HyetographResult,
    filepath: str | Path,
    title: str = "",
) -> None:
    """Escribe la serie SWMM (.dat) en un archivo."""
    Path(filepath).write_text(hyetograph_to_swmm_dat(result, title), encoding="utf-8")


def hyetograph_to_json(result: HyetographResult, filepath: str | Path) -> None:
    """Exporta el resultado completo a JSON."""
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(result.model_dump(), f, indent=2)


def frequency_grid_to_csv(grid: FrequencyGrid, filepath: str | Path) -> None:
    """
    Exporta la grilla de frecuencias: una fila por duración, una columna
    por período de retorno (profundidades en pulgadas).
    """
    labels = grid.duration_labels
    headers = ["Duration"] + [f"{rp}-yr" for rp in grid.return_period_values]
    rows = []
    for label in labels:
        row: list[Any] = [label]
        for rp in grid.return_period_values:
            depth = grid.depth(rp, label)
            row.append("" if depth is None else f"{depth:.3f}")
        rows.append(row)
    export_to_csv(headers, rows, filepath)
