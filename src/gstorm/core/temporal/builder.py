"""
Construcción de curvas de distribución desde tablas de referencia.

Las tablas vienen en texto delimitado por comas con intensidades
(in/hr para una tormenta de 1 pulgada) en función del tiempo:

- Formato multi-duración: columnas 'Minutes - <D>HR' con el tiempo y
  '<Subtipo> - <D>HR' con la intensidad de cada subtipo.
- Formato de duración única: primera columna de tiempo y una columna
  por subtipo; la duración nominal la indica quien llama.
"""

import csv
import io
import logging
import re
from typing import Iterable, Optional

from gstorm.config import CurveKey, DistributionCurve, StormCategory
from gstorm.core.capabilities import (
    LAYOUT_MULTI_DURATION,
    LAYOUT_SINGLE_DURATION,
    CategoryCapabilities,
)

from .base import (
    cumulative_fraction_from_intensities,
    normalize_curve,
    parse_intensity,
    parse_time_minutes,
)


logger = logging.getLogger(__name__)

TIME_COLUMN_PREFIX = "Minutes"

# '<Nombre> - <D>HR'
_DURATION_COLUMN_RE = re.compile(r"^(?P<name>.+?)\s*-\s*(?P<hours>\d+)\s*HR$", re.IGNORECASE)


def read_table(text: str) -> tuple[list[str], list[list[str]]]:
    """
    Lee texto delimitado en encabezado y filas.

    Las filas vacías se descartan. Un texto que el lector CSV no puede
    recorrer se trata como tabla vacía.

    Returns:
        Tupla (encabezado, filas)
    """
    reader = csv.reader(io.StringIO(text.strip(), newline=None))
    try:
        rows = [row for row in reader if any(cell.strip() for cell in row)]
    except csv.Error as e:
        logger.error("Tabla ilegible: %s", e)
        return [], []
    if not rows:
        return [], []
    header = [cell.strip() for cell in rows[0]]
    return header, rows[1:]


def _cell(row: list[str], index: int) -> Optional[str]:
    if index >= len(row):
        return None
    return row[index].strip()


def extract_series(
    rows: list[list[str]],
    time_index: int,
    value_index: int,
    label: str = "",
) -> tuple[list[float], list[float]]:
    """
    Extrae pares (tiempo, intensidad) de dos columnas.

    Filas sin tiempo se ignoran; tiempos inválidos o decrecientes se
    descartan con advertencia. Intensidades vacías o no numéricas valen 0.

    Returns:
        Tupla (tiempos en min, intensidades)
    """
    times: list[float] = []
    intensities: list[float] = []
    previous = float("-inf")

    for row_number, row in enumerate(rows, start=2):
        raw_time = _cell(row, time_index)
        if not raw_time:
            continue

        minutes = parse_time_minutes(raw_time)
        if minutes is None:
            logger.warning("%s: fila %d descartada, tiempo inválido %r", label, row_number, raw_time)
            continue
        if minutes < previous:
            logger.warning(
                "%s: fila %d descartada, tiempo %.2f menor que %.2f",
                label, row_number, minutes, previous,
            )
            continue
        previous = minutes

        times.append(minutes)
        intensities.append(parse_intensity(_cell(row, value_index)))

    return times, intensities


def build_curve(
    rows: list[list[str]],
    time_index: int,
    value_index: int,
    duration_hr: int,
    label: str = "",
) -> Optional[DistributionCurve]:
    """
    Construye una curva normalizada a partir de un par de columnas.

    Returns:
        DistributionCurve, o None si la columna no tiene datos válidos
    """
    times, intensities = extract_series(rows, time_index, value_index, label)
    if not times:
        logger.warning("%s: sin puntos válidos, curva omitida", label)
        return None

    times, fractions = cumulative_fraction_from_intensities(times, intensities, label)
    return normalize_curve(times, fractions, duration_hr * 60.0, label)


def _header_index(header: list[str]) -> dict[str, int]:
    """Índice de columnas por nombre normalizado (minúsculas, espacios simples)."""
    index = {}
    for i, name in enumerate(header):
        key = " ".join(name.split()).lower()
        if key and key not in index:
            index[key] = i
    return index


def _find_column(index: dict[str, int], name: str) -> Optional[int]:
    return index.get(" ".join(name.split()).lower())


def _discover_multi_duration(header: list[str]) -> tuple[list[int], list[str]]:
    """Duraciones y subtipos presentes en un encabezado multi-duración."""
    durations: list[int] = []
    sub_types: list[str] = []
    for name in header:
        match = _DURATION_COLUMN_RE.match(name)
        if not match:
            continue
        base = match.group("name").strip()
        hours = int(match.group("hours"))
        if base.lower() == TIME_COLUMN_PREFIX.lower():
            if hours not in durations:
                durations.append(hours)
        elif base not in sub_types:
            sub_types.append(base)
    return durations, sub_types


def build_multi_duration_curves(
    text: str,
    category: StormCategory,
    sub_types: Optional[Iterable[str]] = None,
    durations_hr: Optional[Iterable[int]] = None,
) -> dict[CurveKey, DistributionCurve]:
    """
    Construye curvas desde una tabla multi-duración.

    Si no se indican subtipos o duraciones se toman los del encabezado.
    Una duración sin columna de tiempo queda ausente del resultado.

    Args:
        text: Contenido de la tabla
        category: Categoría a la que pertenecen las curvas
        sub_types: Subtipos a extraer
        durations_hr: Duraciones nominales a extraer (horas)

    Returns:
        Diccionario CurveKey -> DistributionCurve
    """
    header, rows = read_table(text)
    if not header:
        logger.error("Tabla %s vacía o sin encabezado", category.value)
        return {}

    found_durations, found_sub_types = _discover_multi_duration(header)
    wanted_durations = list(durations_hr) if durations_hr is not None else found_durations
    wanted_sub_types = list(sub_types) if sub_types is not None else found_sub_types

    index = _header_index(header)
    curves: dict[CurveKey, DistributionCurve] = {}

    for duration in wanted_durations:
        time_index = _find_column(index, f"{TIME_COLUMN_PREFIX} - {duration}HR")
        if time_index is None:
            logger.warning(
                "Columna '%s - %dHR' ausente: %s sin curvas de %d hr",
                TIME_COLUMN_PREFIX, duration, category.value, duration,
            )
            continue

        for sub_type in wanted_sub_types:
            column = f"{sub_type} - {duration}HR"
            value_index = _find_column(index, column)
            if value_index is None:
                logger.warning("Columna '%s' ausente en la tabla %s", column, category.value)
                continue

            curve = build_curve(rows, time_index, value_index, duration, label=column)
            if curve is not None:
                key = CurveKey(category=category, sub_type=sub_type, duration_hr=duration)
                curves[key] = curve

    return curves


def build_single_duration_curves(
    text: str,
    category: StormCategory,
    duration_hr: int,
    sub_types: Optional[Iterable[str]] = None,
) -> dict[CurveKey, DistributionCurve]:
    """
    Construye curvas desde una tabla de duración única.

    La primera columna es el tiempo; el resto, un subtipo por columna.

    Args:
        text: Contenido de la tabla
        category: Categoría a la que pertenecen las curvas
        duration_hr: Duración nominal de todas las curvas (horas)
        sub_types: Subtipos a extraer (default: todas las columnas)

    Returns:
        Diccionario CurveKey -> DistributionCurve
    """
    header, rows = read_table(text)
    if len(header) < 2:
        logger.error("Tabla %s sin columnas de subtipos", category.value)
        return {}

    index = _header_index(header)
    wanted_sub_types = list(sub_types) if sub_types is not None else [h for h in header[1:] if h]
    curves: dict[CurveKey, DistributionCurve] = {}

    for sub_type in wanted_sub_types:
        value_index = _find_column(index, sub_type)
        if value_index is None or value_index == 0:
            logger.warning("Columna '%s' ausente en la tabla %s", sub_type, category.value)
            continue

        label = f"{sub_type} - {duration_hr}HR"
        curve = build_curve(rows, 0, value_index, duration_hr, label=label)
        if curve is not None:
            key = CurveKey(category=category, sub_type=sub_type, duration_hr=duration_hr)
            curves[key] = curve

    return curves


def build_category_curves(
    text: str,
    capabilities: CategoryCapabilities,
) -> dict[CurveKey, DistributionCurve]:
    """Construye las curvas de una categoría según su formato de tabla."""
    if capabilities.layout == LAYOUT_MULTI_DURATION:
        return build_multi_duration_curves(
            text,
            capabilities.category,
            sub_types=capabilities.sub_types,
            durations_hr=capabilities.durations_hr,
        )
    if capabilities.layout == LAYOUT_SINGLE_DURATION:
        if len(capabilities.durations_hr) != 1:
            raise ValueError(
                f"Formato de duración única requiere una sola duración "
                f"({capabilities.category.value}: {capabilities.durations_hr})"
            )
        return build_single_duration_curves(
            text,
            capabilities.category,
            capabilities.durations_hr[0],
            sub_types=capabilities.sub_types,
        )
    raise ValueError(f"Formato de tabla desconocido: {capabilities.layout}")
