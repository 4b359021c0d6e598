"""
Lectura de tablas de precipitación-frecuencia NOAA Atlas 14 (PFDS).

El servicio PFDS devuelve un CSV con un preámbulo de metadatos, una fila
de encabezado 'by duration for ARI (years):, 1, 2, 5, ...' y una fila por
duración ('5-min:', '2-hr:', '2-day:', ...) con la profundidad en
pulgadas para cada período de retorno.
"""

import csv
import io
import logging
import re
from typing import Optional

from gstorm.config import FrequencyGrid, FrequencyPoint, ReturnPeriodData


logger = logging.getLogger(__name__)

HEADER_PREFIX = "by duration for ARI"

# Minutos por unidad de duración
DURATION_UNIT_MINUTES = {
    "min": 1,
    "hr": 60,
    "day": 24 * 60,
}

_DURATION_LABEL_RE = re.compile(r"^(?P<value>\d+)-(?P<unit>min|hr|day)$", re.IGNORECASE)


def _clean_cell(value: str) -> str:
    return value.strip().strip('"').strip()


def _is_header(first_cell: str) -> bool:
    normalized = " ".join(_clean_cell(first_cell).split()).lower()
    return normalized.startswith(HEADER_PREFIX.lower())


def normalize_duration_label(raw: str) -> str:
    """Quita los ':' finales y reemplaza espacios por guiones ('2 day:' -> '2-day')."""
    label = _clean_cell(raw)
    label = re.sub(r":+$", "", label).strip()
    return re.sub(r"\s+", "-", label)


def duration_label_minutes(label: str) -> Optional[float]:
    """
    Duración en minutos de una etiqueta '<N>-min', '<N>-hr' o '<N>-day'.

    Returns:
        Minutos, o None si la etiqueta no tiene ese formato
    """
    match = _DURATION_LABEL_RE.match(label)
    if not match:
        return None
    value = int(match.group("value"))
    if value <= 0:
        return None
    return float(value * DURATION_UNIT_MINUTES[match.group("unit").lower()])


def _parse_depth(value: str) -> Optional[float]:
    try:
        depth = float(_clean_cell(value))
    except ValueError:
        return None
    if depth != depth or depth < 0:  # NaN o negativo
        return None
    return depth


def parse_frequency_table(raw_text: str) -> Optional[FrequencyGrid]:
    """
    Convierte la respuesta CSV de NOAA PFDS en una grilla de frecuencias.

    Las celdas mal formadas se ignoran. Solo los fallos estructurales
    (encabezado ausente o grilla vacía) devuelven None.

    Args:
        raw_text: Texto devuelto por el servicio

    Returns:
        FrequencyGrid con períodos de retorno ascendentes, o None
    """
    if not raw_text or not raw_text.strip():
        logger.error("Tabla de frecuencias vacía")
        return None

    try:
        rows = list(csv.reader(io.StringIO(raw_text.strip(), newline=None)))
    except csv.Error as e:
        logger.error("Tabla de frecuencias ilegible: %s", e)
        return None

    header_index = next(
        (i for i, row in enumerate(rows) if row and _is_header(row[0])),
        None,
    )
    if header_index is None:
        logger.error("No se encontró la fila de encabezado '%s...'", HEADER_PREFIX)
        return None

    # Período de retorno -> índice de columna
    columns: dict[int, int] = {}
    for col, cell in enumerate(rows[header_index][1:], start=1):
        try:
            return_period = int(_clean_cell(cell))
        except ValueError:
            continue
        if return_period > 0 and return_period not in columns:
            columns[return_period] = col

    if not columns:
        logger.error("Encabezado sin períodos de retorno válidos: %s", rows[header_index])
        return None

    points: dict[int, list[FrequencyPoint]] = {rp: [] for rp in columns}

    for row in rows[header_index + 1:]:
        if not row or len(row) < 2:
            continue
        if _is_header(row[0]):
            # Otra sección de la respuesta: solo se lee la primera tabla
            break

        label = normalize_duration_label(row[0])
        minutes = duration_label_minutes(label)
        if minutes is None:
            logger.debug("Fila ignorada, duración no reconocida: %r", row[0])
            continue

        for return_period, col in columns.items():
            if col >= len(row):
                continue
            depth = _parse_depth(row[col])
            if depth is None:
                continue
            points[return_period].append(FrequencyPoint(
                duration_label=label,
                duration_minutes=minutes,
                depth=depth,
            ))

    return_periods = [
        ReturnPeriodData(
            return_period=rp,
            data_points=tuple(sorted(pts, key=lambda p: p.duration_minutes)),
        )
        for rp, pts in sorted(points.items())
        if pts
    ]

    if not return_periods:
        logger.error("No se extrajeron profundidades de la tabla de frecuencias")
        return None

    return FrequencyGrid(return_periods=tuple(return_periods))


def design_depth(grid: FrequencyGrid, return_period: int, duration_hr: int) -> Optional[float]:
    """
    Profundidad de diseño (in) para un período de retorno y una duración
    en horas, leída de la fila '<duración>-hr' de la grilla.

    Returns:
        Profundidad, o None si la grilla no tiene ese par
    """
    return grid.depth(return_period, f"{duration_hr}-hr")
